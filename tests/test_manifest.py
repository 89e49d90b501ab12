"""Tests for the shared document merge."""

from __future__ import annotations

import copy

import pytest

from libforge.errors import DuplicateProjectError
from libforge.identity import resolve
from libforge.manifest import merge, project_entry
from libforge.options import normalize
from libforge.workspace import WorkspaceSettings

pytestmark = pytest.mark.unit


@pytest.fixture
def documents():
    registry = {
        "version": 1,
        "projects": {"existing": {"root": "packages/existing", "architect": {}}},
    }
    tags = {"npmScope": "proj", "projects": {"existing": {"tags": ["scope:shared"]}}}
    aliases = {
        "compilerOptions": {
            "baseUrl": ".",
            "paths": {"@proj/existing": ["packages/existing/src/index.ts"]},
        }
    }
    return registry, tags, aliases


def _merge(documents, settings=None, **options):
    identity = resolve(options.get("name", "myLib"), options.get("directory"))
    directives = normalize({"name": "myLib", **options})
    return merge(identity, directives, *documents, settings=settings)


class TestProjectEntry:
    def test_lint_and_test(self):
        entry = project_entry(resolve("myLib"), normalize({"name": "myLib"}))
        assert entry["root"] == "packages/my-lib"
        assert entry["sourceRoot"] == "packages/my-lib/src"
        assert entry["projectType"] == "library"
        assert entry["architect"]["lint"] == {
            "builder": "@nrwl/linter:eslint",
            "options": {"lintFilePatterns": ["packages/my-lib/**/*.ts"]},
        }
        assert entry["architect"]["test"] == {
            "builder": "@nrwl/jest:jest",
            "outputs": ["coverage/packages/my-lib"],
            "options": {
                "jestConfig": "packages/my-lib/jest.config.js",
                "passWithNoTests": True,
            },
        }

    def test_never_a_build_target(self):
        directives = normalize({"name": "myLib", "publishable": True, "importPath": "@p/l"})
        entry = project_entry(resolve("myLib"), directives)
        assert "build" not in entry["architect"]

    def test_no_test_target_without_runner(self):
        directives = normalize({"name": "myLib", "unitTestRunner": "none"})
        entry = project_entry(resolve("myLib"), directives)
        assert list(entry["architect"]) == ["lint"]

    def test_version_two_format(self):
        settings = WorkspaceSettings(workspace_version=2)
        entry = project_entry(resolve("myLib"), normalize({"name": "myLib"}), settings)
        assert "architect" not in entry
        assert entry["targets"]["lint"]["executor"] == "@nrwl/linter:eslint"
        assert entry["targets"]["test"]["executor"] == "@nrwl/jest:jest"


class TestMerge:
    def test_inputs_untouched(self, documents):
        before = copy.deepcopy(documents)
        _merge(documents, tags="one")
        assert documents == before

    def test_preserves_existing_entries(self, documents):
        merged = _merge(documents, tags="one,two")
        registry, tags, aliases = documents
        assert merged.registry["projects"]["existing"] == registry["projects"]["existing"]
        assert merged.registry["version"] == 1
        assert merged.tags["projects"]["existing"] == {"tags": ["scope:shared"]}
        assert merged.tags["npmScope"] == "proj"
        assert merged.aliases["compilerOptions"]["baseUrl"] == "."
        assert merged.aliases["compilerOptions"]["paths"]["@proj/existing"] == [
            "packages/existing/src/index.ts"
        ]

    def test_tags(self, documents):
        merged = _merge(documents, tags="one,two")
        assert merged.tags["projects"]["my-lib"] == {"tags": ["one", "two"]}

    def test_empty_tags(self, documents):
        merged = _merge(documents)
        assert merged.tags["projects"]["my-lib"] == {"tags": []}

    def test_alias(self, documents):
        merged = _merge(documents, directory="myDir")
        paths = merged.aliases["compilerOptions"]["paths"]
        assert paths["@proj/my-dir/my-lib"] == ["packages/my-dir/my-lib/src/index.ts"]
        assert "my-dir-my-lib/*" not in paths

    def test_alias_overwrites_same_key(self, documents):
        documents[2]["compilerOptions"]["paths"]["@proj/my-lib"] = ["somewhere/else.ts"]
        merged = _merge(documents)
        assert merged.aliases["compilerOptions"]["paths"]["@proj/my-lib"] == [
            "packages/my-lib/src/index.ts"
        ]

    def test_creates_missing_sections(self):
        merged = _merge(({}, {}, {}))
        assert "my-lib" in merged.registry["projects"]
        assert merged.tags["projects"]["my-lib"] == {"tags": []}
        assert merged.aliases["compilerOptions"]["paths"] == {
            "@proj/my-lib": ["packages/my-lib/src/index.ts"]
        }

    def test_null_sections_treated_as_empty(self):
        registry = {"version": 1, "projects": None}
        tags = {"npmScope": "proj", "projects": None}
        aliases = {"compilerOptions": {"paths": None}}
        merged = _merge((registry, tags, aliases))
        assert list(merged.registry["projects"]) == ["my-lib"]
        assert merged.tags["projects"] == {"my-lib": {"tags": []}}
        assert merged.aliases["compilerOptions"]["paths"] == {
            "@proj/my-lib": ["packages/my-lib/src/index.ts"]
        }

    def test_null_compiler_options(self):
        merged = _merge(({}, {}, {"compilerOptions": None}))
        assert "@proj/my-lib" in merged.aliases["compilerOptions"]["paths"]

    def test_settings_pick_target_keys(self, documents):
        merged = _merge(documents, settings=WorkspaceSettings(workspace_version=2))
        entry = merged.registry["projects"]["my-lib"]
        assert "architect" not in entry
        assert entry["targets"]["lint"]["executor"] == "@nrwl/linter:eslint"

    def test_duplicate(self, documents):
        documents[0]["projects"]["my-lib"] = {"root": "packages/my-lib"}
        with pytest.raises(DuplicateProjectError):
            _merge(documents)

    def test_sequential_merges_compose(self, documents):
        first = _merge(documents, name="myLib", directory="myDir", tags="one")
        second = _merge(
            (first.registry, first.tags, first.aliases),
            name="myLib2",
            directory="myDir",
            tags="one,two",
        )
        assert second.tags["projects"] == {
            "existing": {"tags": ["scope:shared"]},
            "my-dir-my-lib": {"tags": ["one"]},
            "my-dir-my-lib2": {"tags": ["one", "two"]},
        }
