"""
Reading values documents from disk.

Files are decoded with PyYAML's safe loader. JSON files go through the
same path since JSON is a YAML subset.

Timestamps are left as strings: a value like ``release: 2024-01-01``
should reach templates and the merged output exactly as written rather
than as a ``datetime.date``.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib
import typing as _typing

import yaml as _yaml

import rigger.values.errors as errors
import rigger.values.tree as tree

_logger = _logging.getLogger(__name__)


class _ValuesLoader(_yaml.SafeLoader):
    """Safe YAML loader that does not resolve timestamps."""

    pass


# Drop the implicit timestamp resolver so dates stay plain strings
_ValuesLoader.yaml_implicit_resolvers = {
    first_char: [
        (tag, regexp)
        for tag, regexp in resolvers
        if tag != "tag:yaml.org,2002:timestamp"
    ]
    for first_char, resolvers in _yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def parse_document(content: str, source: str = "<string>") -> tree.Value:
    """
    Decode YAML (or JSON) text into a value tree.

    Raises:
        SourceLoadError: If the content is malformed.
    """
    try:
        return _yaml.load(content, Loader=_ValuesLoader)  # noqa: S506 - safe loader subclass
    except _yaml.YAMLError as e:
        raise errors.SourceLoadError(source, f"invalid YAML: {e}") from e


def read_structured_document(path: str | _pathlib.Path) -> tree.Value:
    """
    Read and decode a values file.

    Args:
        path: Path to a YAML or JSON file.

    Returns:
        The decoded document; None for an empty file.

    Raises:
        SourceLoadError: If the file cannot be read or is malformed.
    """
    source = str(path)
    _logger.debug("Loading values file: %s", source)

    try:
        content = _pathlib.Path(path).read_text(encoding="utf-8")
    except PermissionError as e:
        raise errors.SourceLoadError(source, f"permission denied: {e}") from e
    except OSError as e:
        raise errors.SourceLoadError(source, f"cannot read file: {e}") from e
    except UnicodeDecodeError as e:
        raise errors.SourceLoadError(source, f"not valid UTF-8: {e}") from e

    return parse_document(content, source)


DocumentLoader: _typing.TypeAlias = _typing.Callable[[str], tree.Value]
"""Signature of a document loader: source identifier -> decoded document."""
