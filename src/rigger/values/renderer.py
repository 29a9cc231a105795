"""
Template rendering backends.

The resolver only decides *what* to render and in which order; turning
``"{{ name | upper }}-svc"`` into ``"WEB-svc"`` is delegated to a
TemplateRenderer. JinjaRenderer is the production implementation.
"""

from __future__ import annotations

import abc as _abc
import typing as _typing

import jinja2 as _jinja2

import rigger.values.errors as errors
import rigger.values.tree as tree


class TemplateRenderer(_abc.ABC):
    """Capability interface for rendering one template string."""

    @_abc.abstractmethod
    def render(self, template: str, context: tree.Mapping) -> str:
        """
        Render a template against the full current values tree.

        Args:
            template: Raw template string.
            context: The values tree; top-level keys become template variables.

        Returns:
            The rendered text.

        Raises:
            RenderError: If the template is invalid or cannot be rendered.
        """
        ...


class _ValuesEnvironment(_jinja2.Environment):
    """
    Environment where ``a.b`` on a mapping reads the key before any attribute.

    Values keys such as ``items`` or ``values`` would otherwise resolve to
    the dict's bound methods.
    """

    def getattr(self, obj: _typing.Any, attribute: str) -> _typing.Any:
        if isinstance(obj, dict) and attribute in obj:
            return obj[attribute]
        return super().getattr(obj, attribute)


class JinjaRenderer(TemplateRenderer):
    """
    Jinja2-backed renderer.

    With `strict_undefined` (the default), a reference to a missing value
    fails unless a fallback such as ``default('x')`` handles it. Without
    it, missing references render as empty strings.
    """

    def __init__(
        self,
        *,
        strict_undefined: bool = True,
        filters: _typing.Mapping[str, _typing.Callable[..., _typing.Any]] | None = None,
    ) -> None:
        self._environment = _ValuesEnvironment(
            undefined=_jinja2.StrictUndefined if strict_undefined else _jinja2.Undefined,
            autoescape=False,
            keep_trailing_newline=True,
        )
        if filters:
            self._environment.filters.update(filters)

    @property
    def environment(self) -> _jinja2.Environment:
        """The underlying Jinja2 environment (for registering globals/filters)."""
        return self._environment

    def render(self, template: str, context: tree.Mapping) -> str:
        try:
            compiled = self._environment.from_string(template)
        except _jinja2.TemplateSyntaxError as e:
            raise errors.RenderError(template, f"failed to parse template: {e}") from e

        try:
            return compiled.render(context)
        except _jinja2.TemplateError as e:
            raise errors.RenderError(template, e) from e
        except (TypeError, ValueError, ArithmeticError) as e:
            # Filters and expressions operating on the wrong value types
            raise errors.RenderError(template, e) from e
