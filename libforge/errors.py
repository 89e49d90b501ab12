"""
Libforge Errors - Exception hierarchy for library generation

Every error is raised while resolving identifiers or normalizing options,
before anything is staged in the tree.
"""

from __future__ import annotations


class LibforgeError(Exception):
    """Base class for all generation failures."""


class InvalidNameError(LibforgeError):
    """The library name normalizes to an empty string."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid library name: {name!r}")


class DuplicateProjectError(LibforgeError):
    """A project with the same id is already registered in the workspace."""

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"Project already exists in workspace: {project_id}")


class MissingImportPathError(LibforgeError):
    """A publishable library was requested without an import path."""

    def __init__(self) -> None:
        super().__init__("An import path is required for publishable libraries (--import-path)")


class InvalidOptionsError(LibforgeError):
    """The raw option bag failed validation."""


class WorkspaceError(LibforgeError):
    """A shared workspace document is missing or unreadable."""
