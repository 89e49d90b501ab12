"""
Libforge Generator - NestJS library generation for a monorepo workspace

Runs one generation: validates and resolves everything up front, then stages
the new library's files and the updated shared documents into the tree in a
single pass. Nothing is staged if any precondition fails.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from libforge.configs import synthesize
from libforge.identity import ProjectIdentity, resolve
from libforge.manifest import merge, read_shared_documents, write_shared_documents
from libforge.materializer import materialize, superseded_files
from libforge.options import GenerationDirectives, LibraryOptions, normalize
from libforge.rendering import GeneratedFile, TemplateRenderer
from libforge.tree import VirtualTree
from libforge.workspace import load_generator_defaults, load_settings

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# GENERATION RESULT
# ═══════════════════════════════════════════════════════════════════════════


@dataclass
class GenerationResult:
    """Result of a library generation."""

    project: ProjectIdentity
    directives: GenerationDirectives
    files: list[GeneratedFile] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)  # Shared documents

    @property
    def paths(self) -> list[str]:
        return [f.path for f in self.files]

    def get(self, path: str) -> GeneratedFile | None:
        return next((f for f in self.files if f.path == path), None)


# ═══════════════════════════════════════════════════════════════════════════
# LIBRARY GENERATOR
# ═══════════════════════════════════════════════════════════════════════════


class LibraryGenerator:
    """
    Generates NestJS libraries into a workspace tree.

    Uses Jinja2 templates for sources, and plain dictionaries for every JSON
    configuration document.
    """

    def __init__(self, templates_dir: Path | None = None):
        """
        Args:
            templates_dir: Directory holding replacements for the bundled
                ``*.j2`` library templates. Every template name used by the
                materializer and config synthesizer must exist there.
        """
        self.renderer = TemplateRenderer(templates_dir)

    def generate(
        self,
        tree: VirtualTree,
        options: Mapping[str, Any] | LibraryOptions,
    ) -> GenerationResult:
        """
        Generate a library into ``tree``.

        Args:
            tree: Workspace tree; edits are staged, not committed
            options: Raw generator options

        Returns:
            GenerationResult describing the staged edits

        Raises:
            LibforgeError: On any invalid input or workspace state
        """
        settings = load_settings(tree)
        library_options = LibraryOptions.from_raw(options).with_defaults(load_generator_defaults(tree))
        directives = normalize(library_options)
        identity = resolve(
            library_options.name,
            library_options.directory,
            directives.import_path,
            npm_scope=settings.npm_scope,
            libs_dir=settings.libs_dir,
        )
        current = read_shared_documents(tree, settings)
        documents = merge(
            identity,
            directives,
            current.registry,
            current.tags,
            current.aliases,
            settings=settings,
        )
        logger.info("Generating library %s in %s", identity.id, identity.root)

        files = materialize(identity, directives, self.renderer)
        files += synthesize(identity, directives, self.renderer)

        # Validation is complete; nothing below can fail on user input
        result = GenerationResult(project=identity, directives=directives, files=files)
        for path in superseded_files(identity):
            if tree.exists(path):
                tree.delete(path)
                result.deleted.append(path)

        for generated in files:
            tree.write(generated.path, generated.content)

        write_shared_documents(tree, settings, documents)
        result.updated = [settings.workspace_file, settings.nx_file, settings.tsconfig_base_file]

        logger.debug("Staged %d file(s) for %s", len(files), identity.id)
        return result


# ═══════════════════════════════════════════════════════════════════════════
# PUBLIC API
# ═══════════════════════════════════════════════════════════════════════════


def generate_library(
    tree: VirtualTree | str | Path,
    options: Mapping[str, Any] | LibraryOptions,
    commit: bool = False,
    templates_dir: Path | None = None,
) -> GenerationResult:
    """
    Generate a NestJS library.

    Args:
        tree: VirtualTree, or path to a workspace directory
        options: Generator options (``name`` is required)
        commit: Apply the staged edits before returning
        templates_dir: Optional custom templates directory

    Returns:
        GenerationResult with generated files
    """
    if not isinstance(tree, VirtualTree):
        tree = VirtualTree(Path(tree))

    generator = LibraryGenerator(templates_dir)
    result = generator.generate(tree, options)

    if commit:
        tree.commit()
    return result
