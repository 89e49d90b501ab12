"""
Libforge Rendering - Jinja2 environment and generated file tracking
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

TEMPLATES_DIR = Path(__file__).parent / "templates"


@dataclass
class GeneratedFile:
    """Represents a generated file."""

    path: str  # Workspace-relative path
    content: str
    template: str | None = None  # Source template name


def create_jinja_env(templates_dir: Path) -> Environment:
    """Create Jinja2 environment with custom filters."""

    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )

    # Quote filter
    env.filters["quote"] = lambda x: f"'{x}'"

    return env


class TemplateRenderer:
    """Renders package templates into ``GeneratedFile`` records."""

    def __init__(self, templates_dir: Path | None = None):
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self.env = create_jinja_env(self.templates_dir)

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        template = self.env.get_template(template_name)
        return template.render(**context)

    def render_file(self, path: str, template_name: str, context: dict[str, Any]) -> GeneratedFile:
        return GeneratedFile(
            path=path,
            content=self.render(template_name, context),
            template=template_name,
        )


def json_file(path: str, data: Any) -> GeneratedFile:
    """Serialize a JSON document the way every generated config is written."""
    return GeneratedFile(path=path, content=json.dumps(data, indent=2, ensure_ascii=False) + "\n")
