"""
Loading values from files and inline overrides.

Source identifiers are processed in order. An identifier containing ``=``
is an inline override (``image.tag=1.2.3``); anything else is a path to a
YAML/JSON file. Later sources win per the merge rules, and template
references are resolved once everything has been merged.

Example:
    >>> load_and_resolve(["values.yaml", "env/prod.yaml", "image.tag=1.2.3"])
"""

from __future__ import annotations

import logging as _logging
import typing as _typing

import rigger.values.documents as documents
import rigger.values.merge as merge
import rigger.values.overrides as overrides
import rigger.values.resolver as resolver_module
import rigger.values.tree as tree

_logger = _logging.getLogger(__name__)


def load_source(
    identifier: str,
    loader: documents.DocumentLoader | None = None,
) -> tree.Value:
    """
    Turn one source identifier into a document.

    Args:
        identifier: Inline override or file path.
        loader: Document loader for file paths. Defaults to
            read_structured_document.

    Raises:
        SourceLoadError: If the source cannot be read, decoded or parsed.
    """
    if overrides.is_inline_override(identifier):
        _logger.debug("Parsing inline override: %s", identifier)
        return overrides.parse_inline_override(identifier)
    load = loader if loader is not None else documents.read_structured_document
    return load(identifier)


def load_values(
    identifiers: _typing.Iterable[str],
    *,
    loader: documents.DocumentLoader | None = None,
) -> tree.Mapping:
    """
    Load and merge sources without resolving template references.

    Raises:
        SourceLoadError: If any source cannot be loaded.
        InvalidRootShapeError: If any source is not a mapping.
    """
    sources = [(identifier, load_source(identifier, loader)) for identifier in identifiers]
    return merge.merge_sources(sources)


def load_and_resolve(
    identifiers: _typing.Iterable[str],
    *,
    resolver: resolver_module.ValueResolver | None = None,
    loader: documents.DocumentLoader | None = None,
) -> tree.Mapping:
    """
    Load, merge and resolve values sources.

    Args:
        identifiers: File paths and/or ``key.path=literal`` overrides, in
            increasing precedence.
        resolver: Resolver to use. Defaults to the Jinja-based one.
        loader: Document loader for file paths.

    Returns:
        The fully merged and resolved values tree.

    Raises:
        LoadError: If a source cannot be loaded or is not a mapping.
        ResolutionError: If template references cannot be resolved.
    """
    identifiers = list(identifiers)
    merged = load_values(identifiers, loader=loader)
    _logger.debug("Merged %d values source(s)", len(identifiers))

    active = resolver if resolver is not None else resolver_module.ValueResolver()
    return active.resolve(merged)
