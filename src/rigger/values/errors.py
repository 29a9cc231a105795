"""
Exception hierarchy for value loading and resolution.

Every failure in this package aborts the whole load or resolve call.
Nothing is recovered locally, so each exception carries enough context
(source identifier, path, cycle chain, template text) to diagnose the
problem from the message alone.

Hierarchy:
    ValuesError
    ├── LoadError
    │   ├── SourceLoadError
    │   │   └── InvalidOverrideError
    │   └── InvalidRootShapeError
    └── ResolutionError
        ├── PathError
        │   ├── PathNotFoundError
        │   ├── NotAMappingError
        │   └── PathSyntaxError
        ├── CircularDependencyError
        └── RenderError
"""

from __future__ import annotations

import typing as _typing

if _typing.TYPE_CHECKING:
    import rigger.values.tree as tree


class ValuesError(Exception):
    """Base class for all value loading and resolution errors."""

    pass


# =============================================================================
# Loading
# =============================================================================


class LoadError(ValuesError):
    """A source could not be turned into a mergeable mapping."""

    pass


class SourceLoadError(LoadError):
    """A source could not be read or decoded."""

    def __init__(
        self,
        source: str,
        cause: BaseException | str,
    ) -> None:
        self.source = source
        self.cause = cause
        super().__init__(f"Failed to load values source '{source}': {cause}")


class InvalidOverrideError(SourceLoadError):
    """An inline `path=literal` override has an unusable key path."""

    pass


class InvalidRootShapeError(LoadError):
    """A source's top-level structure is not a mapping."""

    def __init__(self, source: str, actual_type: str) -> None:
        self.source = source
        self.actual_type = actual_type
        super().__init__(
            f"Expected top-level structure of '{source}' to be a mapping, got {actual_type}"
        )


# =============================================================================
# Resolution
# =============================================================================


class ResolutionError(ValuesError):
    """Template references in the merged tree could not be resolved."""

    pass


class PathError(ResolutionError):
    """A value path could not be navigated."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(message)


class PathNotFoundError(PathError):
    """An intermediate segment of a write path does not exist."""

    def __init__(self, path: str, segment: str | int | None = None) -> None:
        self.segment = segment
        if segment is None:
            message = f"Path not found: '{path}'"
        else:
            message = f"Path not found: '{path}' (missing segment '{segment}')"
        super().__init__(path, message)


class NotAMappingError(PathError):
    """A segment of a write path is not a mapping."""

    def __init__(self, path: str, segment: str | int | None = None) -> None:
        self.segment = segment
        if segment is None:
            message = f"Cannot set value at path '{path}': not a mapping"
        else:
            message = (
                f"Cannot set value at path '{path}': parent of '{segment}' is not a mapping"
            )
        super().__init__(path, message)


class PathSyntaxError(PathError):
    """A path string is not in canonical dotted/bracketed form."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(path, f"Invalid value path '{path}': {reason}")


class CircularDependencyError(ResolutionError):
    """The dependency graph between template values contains a cycle."""

    def __init__(self, cycle: _typing.Sequence[tree.ValuePath | str]) -> None:
        self.cycle = list(cycle)
        self.description = " -> ".join(str(p) for p in self.cycle)
        super().__init__(
            f"Circular dependency detected in values. Cycle involves: {self.description}"
        )


class RenderError(ResolutionError):
    """The template backend failed to render a value."""

    def __init__(
        self,
        template: str,
        cause: BaseException | str,
        path: str | None = None,
    ) -> None:
        self.template = template
        self.cause = cause
        self.path = path
        location = f" at '{path}'" if path else ""
        super().__init__(f"Failed to render value reference '{template}'{location}: {cause}")


# Glossary names
InvalidRootShape = InvalidRootShapeError
CircularDependency = CircularDependencyError
