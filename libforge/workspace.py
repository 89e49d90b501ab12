"""
Libforge Workspace - Workspace layout and generator defaults

Reads what the generator needs to know about the surrounding workspace from
its shared documents (``nx.json``, ``workspace.json``) and from an optional
``libforge.yaml`` holding per-workspace default options.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import yaml
from pydantic import BaseModel, Field

from libforge.errors import WorkspaceError
from libforge.tree import VirtualTree

logger = logging.getLogger(__name__)

DEFAULTS_FILE = "libforge.yaml"


class WorkspaceSettings(BaseModel):
    """Workspace layout as seen by the library generator"""

    npm_scope: str = Field("proj", alias="npmScope")
    libs_dir: str = Field("packages", alias="libsDir")
    workspace_version: int = Field(1, alias="workspaceVersion")

    # Shared documents
    workspace_file: str = "workspace.json"
    nx_file: str = "nx.json"
    tsconfig_base_file: str = "tsconfig.base.json"
    eslint_base_file: str = ".eslintrc.json"

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def targets_key(self) -> str:
        """Key holding target descriptors inside a registry entry"""
        return "architect" if self.workspace_version < 2 else "targets"

    @property
    def runner_key(self) -> str:
        """Key naming the tool that runs a target"""
        return "builder" if self.workspace_version < 2 else "executor"


def read_document(tree: VirtualTree, path: str) -> dict[str, Any]:
    """Read a required JSON document, raising ``WorkspaceError``"""
    if not tree.exists(path):
        raise WorkspaceError(f"Cannot find {path} in workspace")
    try:
        data = tree.read_json(path)
    except json.JSONDecodeError as e:
        raise WorkspaceError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise WorkspaceError(f"Expected a JSON object in {path}")
    return data


def load_settings(tree: VirtualTree) -> WorkspaceSettings:
    """Derive workspace settings from ``nx.json`` and ``workspace.json``"""
    defaults = WorkspaceSettings()
    values: dict[str, Any] = {}

    nx_json = read_document(tree, defaults.nx_file)
    if nx_json.get("npmScope"):
        values["npm_scope"] = str(nx_json["npmScope"]).lstrip("@")
    layout = nx_json.get("workspaceLayout") or {}
    if not isinstance(layout, dict):
        raise WorkspaceError(f"Expected an object for workspaceLayout in {defaults.nx_file}")
    libs_dir = layout.get("libsDir")
    if libs_dir:
        values["libs_dir"] = str(libs_dir)

    workspace_json = read_document(tree, defaults.workspace_file)
    if "version" in workspace_json:
        try:
            values["workspace_version"] = int(workspace_json["version"])
        except (TypeError, ValueError) as e:
            raise WorkspaceError(
                f"Invalid version in {defaults.workspace_file}: {workspace_json['version']!r}"
            ) from e

    settings = defaults.model_copy(update=values)
    logger.debug(
        "Workspace settings: scope=%s libsDir=%s version=%d",
        settings.npm_scope,
        settings.libs_dir,
        settings.workspace_version,
    )
    return settings


def load_generator_defaults(tree: VirtualTree) -> dict[str, Any]:
    """
    Load default library options from ``libforge.yaml``.

    The file is optional. Its ``library`` mapping holds option values used
    whenever the caller does not set them explicitly::

        library:
          unitTestRunner: none
          strict: true
    """
    if not tree.exists(DEFAULTS_FILE):
        return {}

    try:
        data = yaml.safe_load(tree.read(DEFAULTS_FILE)) or {}
    except yaml.YAMLError as e:
        raise WorkspaceError(f"Invalid YAML in {DEFAULTS_FILE}: {e}") from e

    library = data.get("library") if isinstance(data, dict) else None
    if library is None:
        return {}
    if not isinstance(library, dict):
        raise WorkspaceError(f"Expected a mapping under 'library' in {DEFAULTS_FILE}")

    # The name is always per invocation
    library.pop("name", None)
    return library
