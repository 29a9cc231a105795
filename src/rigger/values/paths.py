"""
Get and set operations on value trees by canonical path.

Paths are dot-joined mapping keys with bracketed sequence indices:

    >>> parse_path("services.web.ports[0]")
    ['services', 'web', 'ports', 0]

Reads traverse mappings and sequences. Writes only go into mappings and
never create intermediate structure: resolution writes back into paths
that were discovered by scanning the tree itself, so a missing parent
indicates a bug rather than something to paper over.
"""

from __future__ import annotations

import re as _re
import typing as _typing

import rigger.values.errors as errors
import rigger.values.tree as tree

Segment: _typing.TypeAlias = str | int

# One dotted component: a key followed by zero or more [N] indices
_COMPONENT_RE = _re.compile(r"^(?P<key>[^\[\]]*)(?P<indices>(?:\[\d+\])*)$")
_INDEX_RE = _re.compile(r"\[(\d+)\]")


def parse_path(path: str | tree.ValuePath) -> list[Segment]:
    """
    Split a canonical path into mapping keys and sequence indices.

    Args:
        path: Canonical path string (or ValuePath).

    Returns:
        List of segments; str for mapping keys, int for sequence indices.
        The empty path yields an empty list.

    Raises:
        PathSyntaxError: If brackets are malformed or a key is empty.
    """
    text = str(path)
    if not text:
        return []

    segments: list[Segment] = []
    for position, component in enumerate(text.split(".")):
        match = _COMPONENT_RE.match(component)
        if match is None:
            raise errors.PathSyntaxError(text, f"malformed segment '{component}'")
        key = match.group("key")
        if key:
            segments.append(key)
        elif position > 0 or not match.group("indices"):
            # Only a leading component may be index-only, e.g. "[0].name"
            raise errors.PathSyntaxError(text, "empty key segment")
        segments.extend(int(i) for i in _INDEX_RE.findall(match.group("indices")))
    return segments


def _step(node: tree.Value, segment: Segment) -> tuple[bool, tree.Value]:
    """Move one segment down; returns (found, child)."""
    kind = tree.kind_of(node)
    if isinstance(segment, int):
        if kind is tree.ValueKind.SEQUENCE and 0 <= segment < len(node):
            return True, node[segment]
        return False, None
    if kind is tree.ValueKind.MAPPING and segment in node:
        return True, node[segment]
    return False, None


def has_value(root: tree.Value, path: str | tree.ValuePath) -> bool:
    """Check whether a node exists at the path (a stored null counts)."""
    node = root
    for segment in parse_path(path):
        found, node = _step(node, segment)
        if not found:
            return False
    return True


def get_value(root: tree.Value, path: str | tree.ValuePath) -> tree.Value | None:
    """
    Read the node at a path.

    Returns None when any segment is missing, out of range, or runs into
    a scalar. No default is fabricated for partial matches.
    """
    node = root
    for segment in parse_path(path):
        found, node = _step(node, segment)
        if not found:
            return None
    return node


def set_value(
    root: tree.Value,
    path: str | tree.ValuePath,
    value: tree.Value,
) -> None:
    """
    Write a value at a mapping path, replacing any existing node.

    Every intermediate node must already exist and be a mapping, and the
    terminal segment must be a mapping key.

    Raises:
        PathNotFoundError: The path is empty or an intermediate key is missing.
        NotAMappingError: An intermediate node or the terminal parent is not
            a mapping (including sequence-index segments).
    """
    text = str(path)
    segments = parse_path(text)
    if not segments:
        raise errors.PathNotFoundError(text)

    current = root
    for segment in segments[:-1]:
        if isinstance(segment, int) or tree.kind_of(current) is not tree.ValueKind.MAPPING:
            raise errors.NotAMappingError(text, segment)
        if segment not in current:
            raise errors.PathNotFoundError(text, segment)
        current = current[segment]

    last = segments[-1]
    if isinstance(last, int) or tree.kind_of(current) is not tree.ValueKind.MAPPING:
        raise errors.NotAMappingError(text, last)
    current[last] = value
