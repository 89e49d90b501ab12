"""
Libforge Naming - String case helpers

Used both for identifier resolution and as Jinja2 filters in templates.
"""

from __future__ import annotations

import re


def kebab_case(s: str) -> str:
    """Convert to kebab-case.

    Lower/digit-to-upper boundaries become hyphens, as do runs of anything
    that is not a letter or a digit.
    """
    s = re.sub(r"([a-z\d])([A-Z])", r"\1-\2", s)
    s = re.sub(r"[^A-Za-z\d]+", "-", s)
    return s.strip("-").lower()


def pascal_case(s: str) -> str:
    """Convert to PascalCase."""
    parts = kebab_case(s).split("-")
    # Use upper on first char only, preserve rest
    return "".join(p[0].upper() + p[1:] if p else "" for p in parts)


def camel_case(s: str) -> str:
    """Convert to camelCase."""
    pascal = pascal_case(s)
    return pascal[:1].lower() + pascal[1:]


def split_directory(directory: str | None) -> list[str]:
    """Split a directory option into normalized, non-empty segments."""
    if not directory:
        return []
    segments = [kebab_case(segment) for segment in re.split(r"[\\/]+", directory)]
    return [segment for segment in segments if segment]


def relative_to_root(path: str) -> str:
    """Return the ``../`` prefix leading from ``path`` back to the workspace root."""
    depth = len([part for part in path.split("/") if part])
    return "../" * depth
