"""
Libforge Manifest - Shared workspace document merging

The project registry (``workspace.json``), tag registry (``nx.json``) and
path-alias table (``tsconfig.base.json``) are owned by the whole workspace.
``merge`` is a pure transform from the current documents to the new ones:
inputs are never mutated and every unrelated key survives untouched.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any

from libforge.errors import DuplicateProjectError
from libforge.identity import ProjectIdentity
from libforge.options import GenerationDirectives
from libforge.tree import VirtualTree
from libforge.workspace import WorkspaceSettings, read_document

logger = logging.getLogger(__name__)

LINT_BUILDER = "@nrwl/linter:eslint"
TEST_BUILDER = "@nrwl/jest:jest"


@dataclass
class MergedDocuments:
    """The three shared documents after a merge."""

    registry: dict[str, Any]  # whole workspace.json
    tags: dict[str, Any]  # whole nx.json
    aliases: dict[str, Any]  # whole tsconfig.base.json


# ═══════════════════════════════════════════════════════════════════════════
# TARGET DESCRIPTORS
# ═══════════════════════════════════════════════════════════════════════════


def eslint_target(identity: ProjectIdentity, runner_key: str = "builder") -> dict[str, Any]:
    return {
        runner_key: LINT_BUILDER,
        "options": {
            "lintFilePatterns": [f"{identity.root}/**/*.ts"],
        },
    }


def jest_target(identity: ProjectIdentity, runner_key: str = "builder") -> dict[str, Any]:
    return {
        runner_key: TEST_BUILDER,
        "outputs": [f"coverage/{identity.root}"],
        "options": {
            "jestConfig": f"{identity.root}/jest.config.js",
            "passWithNoTests": True,
        },
    }


def project_entry(
    identity: ProjectIdentity,
    directives: GenerationDirectives,
    settings: WorkspaceSettings | None = None,
) -> dict[str, Any]:
    """Build the registry entry for a new library.

    There is never a ``build`` target: libraries compile through the shared
    workspace pipeline.
    """
    settings = settings or WorkspaceSettings()
    targets: dict[str, Any] = {"lint": eslint_target(identity, settings.runner_key)}
    if directives.has_tests:
        targets["test"] = jest_target(identity, settings.runner_key)

    return {
        "root": identity.root,
        "sourceRoot": identity.source_root,
        "projectType": "library",
        settings.targets_key: targets,
    }


# ═══════════════════════════════════════════════════════════════════════════
# MERGE
# ═══════════════════════════════════════════════════════════════════════════


def merge(
    identity: ProjectIdentity,
    directives: GenerationDirectives,
    registry: dict[str, Any],
    tags: dict[str, Any],
    aliases: dict[str, Any],
    settings: WorkspaceSettings | None = None,
) -> MergedDocuments:
    """
    Insert a new library into the three shared documents.

    Args:
        identity: Resolved project identifiers
        directives: Normalized generation directives
        registry: Current ``workspace.json``
        tags: Current ``nx.json``
        aliases: Current ``tsconfig.base.json``
        settings: Workspace settings (format version)

    Returns:
        MergedDocuments holding new copies of all three documents

    Raises:
        DuplicateProjectError: If the id is already registered
    """
    check_available(identity, registry)

    new_registry = copy.deepcopy(registry)
    _section(new_registry, "projects")[identity.id] = project_entry(identity, directives, settings)

    new_tags = copy.deepcopy(tags)
    _section(new_tags, "projects")[identity.id] = {"tags": list(directives.tags)}

    new_aliases = copy.deepcopy(aliases)
    paths = _section(_section(new_aliases, "compilerOptions"), "paths")
    paths[identity.import_path] = [identity.index_path]

    return MergedDocuments(registry=new_registry, tags=new_tags, aliases=new_aliases)


def _section(document: dict[str, Any], key: str) -> dict[str, Any]:
    """Return ``document[key]``, replacing a missing or null section with ``{}``"""
    if document.get(key) is None:
        document[key] = {}
    return document[key]


def check_available(identity: ProjectIdentity, registry: dict[str, Any]) -> None:
    """Raise ``DuplicateProjectError`` if the id is taken."""
    if identity.id in (registry.get("projects") or {}):
        raise DuplicateProjectError(identity.id)


# ═══════════════════════════════════════════════════════════════════════════
# TREE I/O
# ═══════════════════════════════════════════════════════════════════════════


def read_shared_documents(tree: VirtualTree, settings: WorkspaceSettings) -> MergedDocuments:
    """Read the current shared documents from the tree."""
    return MergedDocuments(
        registry=read_document(tree, settings.workspace_file),
        tags=read_document(tree, settings.nx_file),
        aliases=read_document(tree, settings.tsconfig_base_file),
    )


def write_shared_documents(
    tree: VirtualTree,
    settings: WorkspaceSettings,
    documents: MergedDocuments,
) -> None:
    """Stage the merged shared documents."""
    tree.write_json(settings.workspace_file, documents.registry)
    tree.write_json(settings.nx_file, documents.tags)
    tree.write_json(settings.tsconfig_base_file, documents.aliases)
    logger.debug(
        "Staged %s, %s and %s",
        settings.workspace_file,
        settings.nx_file,
        settings.tsconfig_base_file,
    )
