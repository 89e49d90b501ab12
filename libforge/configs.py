"""
Libforge Configs - Per-project tool configuration

Builds the tsconfig hierarchy, eslint, jest and package documents for a new
library. The root ``tsconfig.json`` only references child configs that are
actually generated.
"""

from __future__ import annotations

from typing import Any

from libforge.identity import ProjectIdentity
from libforge.naming import relative_to_root
from libforge.options import GenerationDirectives
from libforge.rendering import GeneratedFile, TemplateRenderer, json_file

STRICT_FLAGS = (
    "strict",
    "forceConsistentCasingInFileNames",
    "noImplicitReturns",
    "noFallthroughCasesInSwitch",
)

INITIAL_VERSION = "0.0.1"


# ═══════════════════════════════════════════════════════════════════════════
# TSCONFIG
# ═══════════════════════════════════════════════════════════════════════════


def tsconfig(identity: ProjectIdentity, directives: GenerationDirectives) -> dict[str, Any]:
    """Project ``tsconfig.json``: no compiler settings, only references."""
    references = [{"path": "./tsconfig.lib.json"}]
    if directives.has_tests:
        references.append({"path": "./tsconfig.spec.json"})

    return {
        "extends": f"{relative_to_root(identity.root)}tsconfig.base.json",
        "files": [],
        "include": [],
        "references": references,
    }


def tsconfig_lib(identity: ProjectIdentity, directives: GenerationDirectives) -> dict[str, Any]:
    compiler_options: dict[str, Any] = {
        "module": "commonjs",
        "outDir": f"{relative_to_root(identity.root)}dist/out-tsc",
        "declaration": True,
        "types": ["node"],
        "target": directives.target,
    }
    if directives.strict:
        for flag in STRICT_FLAGS:
            compiler_options[flag] = True

    return {
        "extends": "./tsconfig.json",
        "compilerOptions": compiler_options,
        "exclude": ["**/*.spec.ts"],
        "include": ["**/*.ts"],
    }


def tsconfig_spec(identity: ProjectIdentity) -> dict[str, Any]:
    return {
        "extends": "./tsconfig.json",
        "compilerOptions": {
            "outDir": f"{relative_to_root(identity.root)}dist/out-tsc",
            "module": "commonjs",
            "types": ["jest", "node"],
        },
        "include": ["**/*.spec.ts", "**/*.d.ts"],
    }


# ═══════════════════════════════════════════════════════════════════════════
# ESLINT / PACKAGE
# ═══════════════════════════════════════════════════════════════════════════


def eslintrc(identity: ProjectIdentity) -> dict[str, Any]:
    """Project ``.eslintrc.json``.

    The TS-only and JS-only overrides stay even with empty rules so every
    project has the same shape.
    """
    return {
        "extends": [f"{relative_to_root(identity.root)}.eslintrc.json"],
        "ignorePatterns": ["!**/*"],
        "overrides": [
            {
                "files": ["*.ts", "*.tsx", "*.js", "*.jsx"],
                "parserOptions": {
                    "project": [f"{identity.root}/tsconfig.*?.json"],
                },
                "rules": {},
            },
            {
                "files": ["*.ts", "*.tsx"],
                "rules": {},
            },
            {
                "files": ["*.js", "*.jsx"],
                "rules": {},
            },
        ],
    }


def package_json(identity: ProjectIdentity) -> dict[str, Any]:
    return {
        "name": identity.import_path,
        "version": INITIAL_VERSION,
    }


# ═══════════════════════════════════════════════════════════════════════════
# SYNTHESIS
# ═══════════════════════════════════════════════════════════════════════════


def synthesize(
    identity: ProjectIdentity,
    directives: GenerationDirectives,
    renderer: TemplateRenderer | None = None,
) -> list[GeneratedFile]:
    """
    Build every per-project configuration file.

    Args:
        identity: Resolved project identifiers
        directives: Normalized generation directives
        renderer: Template renderer for the non-JSON files

    Returns:
        Generated configuration files
    """
    renderer = renderer or TemplateRenderer()
    root = identity.root
    context = {
        "project": identity,
        "offset": relative_to_root(root),
        "has_tests": directives.has_tests,
        "publishable": directives.publishable,
    }

    files = [
        json_file(f"{root}/tsconfig.json", tsconfig(identity, directives)),
        json_file(f"{root}/tsconfig.lib.json", tsconfig_lib(identity, directives)),
    ]
    if directives.has_tests:
        files.append(json_file(f"{root}/tsconfig.spec.json", tsconfig_spec(identity)))

    files.append(json_file(f"{root}/.eslintrc.json", eslintrc(identity)))

    if directives.has_tests:
        files.append(renderer.render_file(f"{root}/jest.config.js", "jest.config.js.j2", context))

    if directives.publishable:
        files.append(json_file(f"{root}/package.json", package_json(identity)))

    files.append(renderer.render_file(f"{root}/README.md", "README.md.j2", context))
    return files
