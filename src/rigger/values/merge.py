"""
Deep merge of values sources.

Sources are merged left to right into one mapping. Per key:

- mapping + mapping: merge recursively
- sequence + sequence: concatenate (existing first, no de-duplication)
- anything else: the later value replaces the earlier one
- key absent so far: insert the new value as-is

File-backed documents and inline ``path=literal`` overrides go through
exactly the same rules.
"""

from __future__ import annotations

import copy as _copy
import logging as _logging
import typing as _typing

import rigger.values.errors as errors
import rigger.values.tree as tree

_logger = _logging.getLogger(__name__)

# A source is either a bare document or (identifier, document)
Source: _typing.TypeAlias = tree.Value | tuple[str, tree.Value]


def merge_into(accumulator: tree.Mapping, incoming: tree.Mapping) -> None:
    """
    Merge `incoming` into `accumulator` in place.

    Values taken from `incoming` are deep-copied so the merged tree never
    shares containers with a caller's document.
    """
    for key, new_value in incoming.items():
        if key not in accumulator:
            accumulator[key] = _copy.deepcopy(new_value)
            continue

        existing = accumulator[key]
        existing_kind = tree.kind_of(existing)
        new_kind = tree.kind_of(new_value)

        if existing_kind is tree.ValueKind.MAPPING and new_kind is tree.ValueKind.MAPPING:
            merge_into(existing, new_value)
        elif existing_kind is tree.ValueKind.SEQUENCE and new_kind is tree.ValueKind.SEQUENCE:
            existing.extend(_copy.deepcopy(new_value))
        else:
            accumulator[key] = _copy.deepcopy(new_value)


def _split_source(source: Source, position: int) -> tuple[str, tree.Value]:
    """Normalize a source into (identifier, document)."""
    if (
        isinstance(source, tuple)
        and len(source) == 2
        and isinstance(source[0], str)
    ):
        return source[0], source[1]
    return f"<source #{position}>", source


def merge_sources(sources: _typing.Iterable[Source]) -> tree.Mapping:
    """
    Merge an ordered sequence of documents into a single mapping.

    Args:
        sources: Documents in increasing precedence. Each item is either a
            document or an (identifier, document) pair; the identifier is
            used in error messages.

    Returns:
        A new merged mapping. Inputs are not modified.

    Raises:
        InvalidRootShapeError: If a document is not a mapping at the top level.
    """
    merged: tree.Mapping = {}
    for position, source in enumerate(sources):
        identifier, document = _split_source(source, position)
        # An empty YAML file decodes to None and is rejected like any scalar
        if tree.kind_of(document) is not tree.ValueKind.MAPPING:
            raise errors.InvalidRootShapeError(identifier, tree.type_name(document))

        _logger.debug("Merging values source %s (%d top-level keys)", identifier, len(document))
        merge_into(merged, document)
    return merged
