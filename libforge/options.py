"""
Libforge Options - Raw generator options and normalized directives

``LibraryOptions`` mirrors what the command line (or a caller) supplies.
``normalize`` expands it once into immutable ``GenerationDirectives`` that
every downstream component reads.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

from libforge.errors import InvalidOptionsError, MissingImportPathError


# ═══════════════════════════════════════════════════════════════════════════
# ENUMS
# ═══════════════════════════════════════════════════════════════════════════


class UnitTestRunner(str, Enum):
    JEST = "jest"
    NONE = "none"


class FileIntent(str, Enum):
    """Generated source files, one member per conditional file"""

    MODULE = "module"
    SERVICE = "service"
    CONTROLLER = "controller"
    BARREL = "barrel"
    SERVICE_SPEC = "service-spec"
    CONTROLLER_SPEC = "controller-spec"


# ═══════════════════════════════════════════════════════════════════════════
# RAW OPTIONS
# ═══════════════════════════════════════════════════════════════════════════


class LibraryOptions(BaseModel):
    """Options accepted by the library generator"""

    name: str
    directory: str | None = None
    tags: str | None = None
    unit_test_runner: UnitTestRunner = Field(UnitTestRunner.JEST, alias="unitTestRunner")
    strict: bool = False
    target: str = "es6"
    controller: bool = False
    service: bool = False
    is_global: bool = Field(False, alias="global")
    publishable: bool = False
    import_path: str | None = Field(None, alias="importPath")

    model_config = {"populate_by_name": True, "extra": "forbid"}

    @field_validator("directory", "tags", "import_path")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat empty strings from the command line as unset"""
        if v is not None and not v.strip():
            return None
        return v

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any] | LibraryOptions) -> LibraryOptions:
        """Validate a raw option mapping, raising ``InvalidOptionsError``"""
        if isinstance(raw, LibraryOptions):
            return raw
        try:
            return cls.model_validate(dict(raw))
        except ValidationError as e:
            raise InvalidOptionsError(str(e)) from e

    def with_defaults(self, defaults: Mapping[str, Any]) -> LibraryOptions:
        """Fill options the caller did not set explicitly from ``defaults``"""
        if not defaults:
            return self
        explicit = self.model_dump(exclude_unset=True, by_alias=True)
        return LibraryOptions.from_raw({**self._aliased(defaults), **explicit})

    @classmethod
    def _aliased(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        """Rewrite snake_case field names to their camelCase aliases"""
        result: dict[str, Any] = {}
        for key, value in data.items():
            field = cls.model_fields.get(key)
            result[field.alias if field is not None and field.alias else key] = value
        return result


# ═══════════════════════════════════════════════════════════════════════════
# DIRECTIVES
# ═══════════════════════════════════════════════════════════════════════════


class GenerationDirectives(BaseModel):
    """Fully-resolved generation directives"""

    include_controller: bool = False
    include_service: bool = False
    is_global_module: bool = False
    unit_test_runner: UnitTestRunner = UnitTestRunner.JEST
    strict: bool = False
    target: str = "es6"
    publishable: bool = False
    import_path: str | None = None
    tags: tuple[str, ...] = ()

    model_config = {"frozen": True}

    @property
    def has_tests(self) -> bool:
        return self.unit_test_runner != UnitTestRunner.NONE

    @property
    def intents(self) -> tuple[FileIntent, ...]:
        """Source files implied by the service, controller and runner flags"""
        return file_intents(self.include_service, self.include_controller, self.unit_test_runner)

    def wants(self, intent: FileIntent) -> bool:
        return intent in self.intents


def parse_tags(tags: str | None) -> tuple[str, ...]:
    """Split a comma-separated tag string, dropping empty entries"""
    if not tags:
        return ()
    return tuple(t.strip() for t in tags.split(",") if t.strip())


def file_intents(
    service: bool,
    controller: bool,
    unit_test_runner: UnitTestRunner,
) -> tuple[FileIntent, ...]:
    """Compute the ordered set of source files to generate"""
    with_tests = unit_test_runner != UnitTestRunner.NONE

    intents = [FileIntent.MODULE]
    if service:
        intents.append(FileIntent.SERVICE)
        if with_tests:
            intents.append(FileIntent.SERVICE_SPEC)
    if controller:
        intents.append(FileIntent.CONTROLLER)
        if with_tests:
            intents.append(FileIntent.CONTROLLER_SPEC)
    intents.append(FileIntent.BARREL)
    return tuple(intents)


def normalize(raw: Mapping[str, Any] | LibraryOptions) -> GenerationDirectives:
    """
    Expand raw options into generation directives.

    Args:
        raw: Option mapping (camelCase or snake_case keys) or LibraryOptions

    Returns:
        GenerationDirectives

    Raises:
        InvalidOptionsError: If the options fail validation
        MissingImportPathError: If publishable is set without an import path
    """
    options = LibraryOptions.from_raw(raw)

    if options.publishable and not options.import_path:
        raise MissingImportPathError()

    return GenerationDirectives(
        include_controller=options.controller,
        include_service=options.service,
        is_global_module=options.is_global,
        unit_test_runner=options.unit_test_runner,
        strict=options.strict,
        target=options.target,
        publishable=options.publishable,
        import_path=options.import_path,
        tags=parse_tags(options.tags),
    )
