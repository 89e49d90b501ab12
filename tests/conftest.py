"""Shared pytest fixtures for the libforge test suite.

Provides:
- An empty in-memory workspace tree
- An empty on-disk workspace directory
- Helpers to run the generator against a tree
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from libforge.generator import GenerationResult, LibraryGenerator
from libforge.tree import VirtualTree


# ---------------------------------------------------------------------------
# Workspace documents
# ---------------------------------------------------------------------------


def empty_workspace_files(npm_scope: str = "proj") -> dict[str, str]:
    """The shared documents of a freshly created workspace."""
    return {
        "workspace.json": json.dumps({"version": 1, "projects": {}}),
        "nx.json": json.dumps({"npmScope": npm_scope, "projects": {}}),
        "tsconfig.base.json": json.dumps({"compilerOptions": {"paths": {}}}),
        ".eslintrc.json": json.dumps({"root": True}),
    }


@pytest.fixture
def tree() -> VirtualTree:
    """Empty in-memory workspace."""
    return VirtualTree(files=empty_workspace_files())


@pytest.fixture
def workspace_dir(tmp_path: Path) -> Path:
    """Empty workspace on disk (auto-cleanup)."""
    root = tmp_path / "workspace"
    root.mkdir()
    for name, content in empty_workspace_files().items():
        (root / name).write_text(content)
    return root


@pytest.fixture
def run_generator():
    """Run the library generator against a tree."""

    def _run(tree: VirtualTree, **options: Any) -> GenerationResult:
        return LibraryGenerator().generate(tree, options)

    return _run
