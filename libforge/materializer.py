"""
Libforge Materializer - Conditional NestJS source files

Turns the file intents carried by ``GenerationDirectives`` into rendered
sources. Files whose intent is absent are not emitted at all.
"""

from __future__ import annotations

from typing import Any

from libforge.identity import ProjectIdentity
from libforge.options import FileIntent, GenerationDirectives
from libforge.rendering import GeneratedFile, TemplateRenderer


# Intent -> (path relative to the project root, template)
INTENT_FILES: dict[FileIntent, tuple[str, str]] = {
    FileIntent.MODULE: ("src/lib/{file_name}.module.ts", "module.ts.j2"),
    FileIntent.SERVICE: ("src/lib/{file_name}.service.ts", "service.ts.j2"),
    FileIntent.SERVICE_SPEC: ("src/lib/{file_name}.service.spec.ts", "service.spec.ts.j2"),
    FileIntent.CONTROLLER: ("src/lib/{file_name}.controller.ts", "controller.ts.j2"),
    FileIntent.CONTROLLER_SPEC: ("src/lib/{file_name}.controller.spec.ts", "controller.spec.ts.j2"),
    FileIntent.BARREL: ("src/index.ts", "index.ts.j2"),
}


def intent_path(identity: ProjectIdentity, intent: FileIntent) -> str:
    """Workspace-relative path of the file generated for ``intent``"""
    relative, _ = INTENT_FILES[intent]
    return f"{identity.root}/{relative.format(file_name=identity.file_name)}"


def source_context(identity: ProjectIdentity, directives: GenerationDirectives) -> dict[str, Any]:
    """Template context shared by all source templates."""
    return {
        "project": identity,
        "directives": directives,
        "service": directives.wants(FileIntent.SERVICE),
        "controller": directives.wants(FileIntent.CONTROLLER),
        "is_global": directives.is_global_module,
    }


def materialize(
    identity: ProjectIdentity,
    directives: GenerationDirectives,
    renderer: TemplateRenderer | None = None,
) -> list[GeneratedFile]:
    """
    Render the source files for a library.

    The module and barrel are always produced; service, controller and their
    spec stubs only when the directives ask for them.

    Args:
        identity: Resolved project identifiers
        directives: Normalized generation directives
        renderer: Template renderer, package templates by default

    Returns:
        Generated files in intent order
    """
    renderer = renderer or TemplateRenderer()
    context = source_context(identity, directives)

    files = []
    for intent in directives.intents:
        _, template = INTENT_FILES[intent]
        files.append(renderer.render_file(intent_path(identity, intent), template, context))
    return files


def superseded_files(identity: ProjectIdentity) -> list[str]:
    """Placeholder sources from a plain library that the module replaces."""
    return [
        f"{identity.lib_dir}/{identity.file_name}.ts",
        f"{identity.lib_dir}/{identity.file_name}.spec.ts",
    ]
