"""
Values loading and resolution for Rigger.

Values are the configuration fed to compose templates. They are loaded
from YAML files and ``key.path=literal`` overrides, deep-merged into one
tree, and then any value that references other values through a
``{{ ... }}`` template is rendered in dependency order.
"""

from rigger.values.documents import parse_document, read_structured_document
from rigger.values.errors import (
    CircularDependency,
    CircularDependencyError,
    InvalidOverrideError,
    InvalidRootShape,
    InvalidRootShapeError,
    LoadError,
    NotAMappingError,
    PathError,
    PathNotFoundError,
    PathSyntaxError,
    RenderError,
    ResolutionError,
    SourceLoadError,
    ValuesError,
)
from rigger.values.extractor import JinjaReferenceExtractor, ReferenceExtractor
from rigger.values.graph import DependencyGraph
from rigger.values.loader import load_and_resolve, load_source, load_values
from rigger.values.merge import merge_into, merge_sources
from rigger.values.overrides import is_inline_override, parse_inline_override
from rigger.values.paths import get_value, has_value, parse_path, set_value
from rigger.values.renderer import JinjaRenderer, TemplateRenderer
from rigger.values.resolver import ValueResolver, resolve_references
from rigger.values.tree import Value, ValueKind, ValuePath, kind_of

__all__ = [
    "CircularDependency",
    "CircularDependencyError",
    "DependencyGraph",
    "InvalidOverrideError",
    "InvalidRootShape",
    "InvalidRootShapeError",
    "JinjaReferenceExtractor",
    "JinjaRenderer",
    "LoadError",
    "NotAMappingError",
    "PathError",
    "PathNotFoundError",
    "PathSyntaxError",
    "ReferenceExtractor",
    "RenderError",
    "ResolutionError",
    "SourceLoadError",
    "TemplateRenderer",
    "Value",
    "ValueKind",
    "ValuePath",
    "ValueResolver",
    "ValuesError",
    "get_value",
    "has_value",
    "is_inline_override",
    "kind_of",
    "load_and_resolve",
    "load_source",
    "load_values",
    "merge_into",
    "merge_sources",
    "parse_document",
    "parse_inline_override",
    "parse_path",
    "read_structured_document",
    "resolve_references",
    "set_value",
]
