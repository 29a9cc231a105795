"""
Rigger - values engine for application deployments

Loads deployment values from YAML files and inline overrides, merges
them, and resolves references between values before they are handed
to compose templates.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("rigger")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "Rigger Contributors"

from rigger.values import load_and_resolve, merge_sources, resolve_references  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "load_and_resolve",
    "merge_sources",
    "resolve_references",
]
