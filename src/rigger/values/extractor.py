"""
Template reference extraction.

Finds ``{{ ... }}`` expressions in string values and reports which value
paths they reference, so the resolver can order rendering.

Detection is deliberately more lenient than extraction: ``{{}}`` or
``{{ 1 + 2 }}`` count as templates (and will be rendered) but reference
nothing. Keep the two checks separate.
"""

from __future__ import annotations

import abc as _abc
import re as _re

# Captures only the variable chain (group 1); filters after "|" are ignored.
# Matches: {{ var }}, {{ var.nested }}, {{ var | filter }}, {{ var | f('x') }}
_REFERENCE_RE = _re.compile(
    r"\{\{\s*([a-zA-Z_][a-zA-Z0-9_]*(?:\.[a-zA-Z_][a-zA-Z0-9_]*)*)(?:\s*\|[^}]*)?\s*\}\}"
)

# Any double-brace pair, including empty or malformed ones
_HAS_TEMPLATE_RE = _re.compile(r"\{\{.*?\}\}")


class ReferenceExtractor(_abc.ABC):
    """
    Capability interface for finding template references in strings.

    Implementations are injected into the resolver; tests can supply their
    own to control exactly which strings count as templates.
    """

    @_abc.abstractmethod
    def contains_template(self, text: str) -> bool:
        """Check whether a string contains template syntax."""
        ...

    @_abc.abstractmethod
    def extract_references(self, text: str) -> list[str]:
        """
        Extract referenced value paths from a template string.

        E.g. ``"{{ foo.bar }}"`` -> ``["foo.bar"]`` and
        ``"{{ name | upper }}"`` -> ``["name"]``.
        """
        ...


class JinjaReferenceExtractor(ReferenceExtractor):
    """Regex-based extractor for Jinja2 variable expressions."""

    def contains_template(self, text: str) -> bool:
        return _HAS_TEMPLATE_RE.search(text) is not None

    def extract_references(self, text: str) -> list[str]:
        # One entry per expression, left to right, duplicates kept
        return [match.group(1) for match in _REFERENCE_RE.finditer(text)]
