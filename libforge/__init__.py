"""
Libforge - NestJS library generator for Nx-style monorepos

Creates a library project and keeps the workspace registry, tag registry and
path aliases consistent with it.
"""

__version__ = "0.1.0"

from libforge.errors import (
    DuplicateProjectError,
    InvalidNameError,
    InvalidOptionsError,
    LibforgeError,
    MissingImportPathError,
    WorkspaceError,
)
from libforge.generator import GenerationResult, LibraryGenerator, generate_library
from libforge.identity import ProjectIdentity, resolve
from libforge.options import FileIntent, GenerationDirectives, LibraryOptions, UnitTestRunner, normalize
from libforge.tree import VirtualTree

__all__ = [
    "DuplicateProjectError",
    "FileIntent",
    "GenerationDirectives",
    "GenerationResult",
    "InvalidNameError",
    "InvalidOptionsError",
    "LibforgeError",
    "LibraryGenerator",
    "LibraryOptions",
    "MissingImportPathError",
    "ProjectIdentity",
    "UnitTestRunner",
    "VirtualTree",
    "WorkspaceError",
    "generate_library",
    "normalize",
    "resolve",
]
