"""
Libforge Identity - Canonical project identifiers

Maps a free-form ``(name, directory, import_path)`` triple onto the project id
used as registry key, the workspace-relative root and the public import alias.
"""

from __future__ import annotations

from pydantic import BaseModel

from libforge.errors import InvalidNameError
from libforge.naming import camel_case, kebab_case, pascal_case, split_directory


class ProjectIdentity(BaseModel):
    """Resolved identifiers for one generated library"""

    raw_name: str
    directory: str | None = None
    id: str
    root: str
    import_path: str
    project_directory: str

    # Names used inside generated sources
    file_name: str
    class_name: str
    property_name: str

    model_config = {"frozen": True}

    @property
    def source_root(self) -> str:
        return f"{self.root}/src"

    @property
    def lib_dir(self) -> str:
        return f"{self.root}/src/lib"

    @property
    def index_path(self) -> str:
        return f"{self.root}/src/index.ts"


def resolve(
    name: str,
    directory: str | None = None,
    import_path: str | None = None,
    *,
    npm_scope: str = "proj",
    libs_dir: str = "packages",
) -> ProjectIdentity:
    """
    Resolve the canonical identifiers for a library.

    Args:
        name: Library name as typed by the user (e.g. ``myLib``)
        directory: Optional parent directory, ``/``-separated
        import_path: Explicit import alias; derived from the scope if omitted
        npm_scope: Workspace npm scope, without the leading ``@``
        libs_dir: Workspace directory holding library projects

    Returns:
        ProjectIdentity

    Raises:
        InvalidNameError: If the name normalizes to an empty string
    """
    file_name = kebab_case(name)
    if not file_name:
        raise InvalidNameError(name)

    segments = split_directory(directory) + [file_name]
    project_directory = "/".join(segments)
    libs_dir = libs_dir.strip("/")
    root = f"{libs_dir}/{project_directory}" if libs_dir else project_directory

    return ProjectIdentity(
        raw_name=name,
        directory=directory or None,
        id="-".join(segments),
        root=root,
        import_path=import_path or f"@{npm_scope}/{project_directory}",
        project_directory=project_directory,
        file_name=file_name,
        class_name=pascal_case(file_name),
        property_name=camel_case(file_name),
    )
