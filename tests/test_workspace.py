"""Tests for workspace settings and generator defaults."""

from __future__ import annotations

import json

import pytest

from libforge.errors import WorkspaceError
from libforge.tree import VirtualTree
from libforge.workspace import load_generator_defaults, load_settings, read_document

from tests.conftest import empty_workspace_files

pytestmark = pytest.mark.unit


class TestLoadSettings:
    def test_defaults_from_empty_workspace(self, tree):
        settings = load_settings(tree)
        assert settings.npm_scope == "proj"
        assert settings.libs_dir == "packages"
        assert settings.workspace_version == 1
        assert settings.targets_key == "architect"
        assert settings.runner_key == "builder"

    def test_reads_layout(self):
        files = empty_workspace_files()
        files["nx.json"] = json.dumps(
            {"npmScope": "@acme", "workspaceLayout": {"libsDir": "libs"}, "projects": {}}
        )
        files["workspace.json"] = json.dumps({"version": 2, "projects": {}})
        settings = load_settings(VirtualTree(files=files))
        assert settings.npm_scope == "acme"
        assert settings.libs_dir == "libs"
        assert settings.targets_key == "targets"
        assert settings.runner_key == "executor"

    def test_missing_nx_json(self):
        files = empty_workspace_files()
        del files["nx.json"]
        with pytest.raises(WorkspaceError):
            load_settings(VirtualTree(files=files))

    def test_non_numeric_version(self):
        files = empty_workspace_files()
        files["workspace.json"] = json.dumps({"version": "two", "projects": {}})
        with pytest.raises(WorkspaceError, match="Invalid version"):
            load_settings(VirtualTree(files=files))

    def test_layout_not_an_object(self):
        files = empty_workspace_files()
        files["nx.json"] = json.dumps({"npmScope": "proj", "workspaceLayout": "libs", "projects": {}})
        with pytest.raises(WorkspaceError, match="workspaceLayout"):
            load_settings(VirtualTree(files=files))


class TestReadDocument:
    def test_invalid_json(self):
        tree = VirtualTree(files={"workspace.json": "{not json"})
        with pytest.raises(WorkspaceError):
            read_document(tree, "workspace.json")

    def test_not_an_object(self):
        tree = VirtualTree(files={"workspace.json": "[]"})
        with pytest.raises(WorkspaceError):
            read_document(tree, "workspace.json")


class TestGeneratorDefaults:
    def test_no_file(self, tree):
        assert load_generator_defaults(tree) == {}

    def test_library_section(self, tree):
        tree.write("libforge.yaml", "library:\n  strict: true\n  unitTestRunner: none\n")
        assert load_generator_defaults(tree) == {"strict": True, "unitTestRunner": "none"}

    def test_name_is_ignored(self, tree):
        tree.write("libforge.yaml", "library:\n  name: fixed\n  service: true\n")
        assert load_generator_defaults(tree) == {"service": True}

    def test_missing_section(self, tree):
        tree.write("libforge.yaml", "other: 1\n")
        assert load_generator_defaults(tree) == {}

    def test_invalid_yaml(self, tree):
        tree.write("libforge.yaml", "library: [unclosed\n")
        with pytest.raises(WorkspaceError):
            load_generator_defaults(tree)

    def test_section_not_a_mapping(self, tree):
        tree.write("libforge.yaml", "library: 3\n")
        with pytest.raises(WorkspaceError):
            load_generator_defaults(tree)
