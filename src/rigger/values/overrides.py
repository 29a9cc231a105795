"""
Inline ``dotted.path=literal`` overrides.

An override is turned into a single-field nested mapping and then merged
like any other source:

    >>> parse_inline_override("a.b=x")
    {'a': {'b': 'x'}}

The literal is always a string. It is never type-coerced, may be empty,
and may itself contain ``=`` (only the first one separates key from value).
"""

from __future__ import annotations

import rigger.constants as _constants
import rigger.values.errors as errors
import rigger.values.tree as tree


def is_inline_override(identifier: str) -> bool:
    """Check whether a source identifier is an inline override."""
    return _constants.OVERRIDE_SEPARATOR in identifier


def parse_inline_override(text: str) -> tree.Mapping:
    """
    Parse ``key.path=literal`` into a nested mapping.

    Raises:
        InvalidOverrideError: If the key path is empty or has an empty segment.
    """
    key_path, separator, literal = text.partition(_constants.OVERRIDE_SEPARATOR)
    if not separator:
        raise errors.InvalidOverrideError(
            text, f"expected 'key.path{_constants.OVERRIDE_SEPARATOR}value'"
        )

    keys = key_path.strip().split(_constants.PATH_SEPARATOR)
    if any(not key for key in keys):
        raise errors.InvalidOverrideError(text, f"empty key segment in '{key_path}'")

    result: tree.Value = literal
    for key in reversed(keys):
        result = {key: result}
    return result
