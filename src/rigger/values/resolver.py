"""
Resolution of cross-references between values.

A value may be derived from other values through a template, e.g.

    image: "{{ registry }}/{{ name | lower }}:{{ tag }}"

ValueResolver renders every such template, in dependency order, and
writes each result back into the tree before the next render. That way
chained references (``c`` uses ``b`` uses ``a``) see rendered text rather
than raw template source.

Flow:
1. Scan the tree for string leaves that contain template syntax
2. Build a dependency graph from the references each template makes
3. Topologically sort it (a cycle aborts resolution)
4. Render templates in order, writing results back in place
"""

from __future__ import annotations

import copy as _copy
import logging as _logging

import rigger.values.errors as errors
import rigger.values.extractor as extractor_module
import rigger.values.graph as graph
import rigger.values.paths as paths
import rigger.values.renderer as renderer_module
import rigger.values.tree as tree

_logger = _logging.getLogger(__name__)


class ValueResolver:
    """
    Resolves template references in a values tree.

    Both capabilities are injectable; by default the Jinja-based
    implementations are used.
    """

    def __init__(
        self,
        extractor: extractor_module.ReferenceExtractor | None = None,
        renderer: renderer_module.TemplateRenderer | None = None,
    ) -> None:
        self._extractor = extractor if extractor is not None else _default_extractor()
        self._renderer = renderer if renderer is not None else _default_renderer()

    @property
    def extractor(self) -> extractor_module.ReferenceExtractor:
        return self._extractor

    @property
    def renderer(self) -> renderer_module.TemplateRenderer:
        return self._renderer

    def collect_templates(self, values: tree.Value) -> dict[tree.ValuePath, str]:
        """
        Find every template string in the tree.

        Descends into mappings (dotted paths) and sequences (bracketed
        paths). Only string leaves are candidates; mapping keys that are
        not strings are skipped.

        Returns:
            Mapping of path -> raw template string, in document order.
        """
        templates: dict[tree.ValuePath, str] = {}
        # Explicit stack, reversed pushes keep document order
        stack: list[tuple[tree.ValuePath, tree.Value]] = [(tree.ValuePath.ROOT, values)]

        while stack:
            path, node = stack.pop()
            kind = tree.kind_of(node)
            if kind is tree.ValueKind.STRING:
                if self._extractor.contains_template(node):
                    templates[path] = node
            elif kind is tree.ValueKind.MAPPING:
                children = []
                for key, child in node.items():
                    if not isinstance(key, str):
                        _logger.debug("Skipping non-string key %r under '%s'", key, path)
                        continue
                    children.append((path.child(key), child))
                stack.extend(reversed(children))
            elif kind is tree.ValueKind.SEQUENCE:
                children = [(path.index(i), v) for i, v in enumerate(node)]
                stack.extend(reversed(children))

        return templates

    def build_graph(self, templates: dict[tree.ValuePath, str]) -> graph.DependencyGraph:
        """
        Build the dependency graph for the collected templates.

        Every template path is a node, even one with no references. A
        reference to a container (``{{ db }}`` while ``db.url`` is itself
        a template) also waits for the templates nested below it.
        """
        dependency_graph = graph.DependencyGraph()
        for path, template in templates.items():
            dependency_graph.add_node(path)
            for reference in self._extractor.extract_references(template):
                target = tree.ValuePath(reference)
                dependency_graph.add_dependency(path, target)
                for nested in _nested_templates(target, templates):
                    dependency_graph.add_dependency(target, nested)
        return dependency_graph

    def resolve(self, values: tree.Value) -> tree.Value:
        """
        Resolve all template references.

        The input is not modified; a resolved copy is returned. On failure
        nothing is returned, so callers never see a half-resolved tree.

        Raises:
            CircularDependencyError: If templates reference each other in a cycle.
            RenderError: If a template fails to render.
            PathError: If a rendered value cannot be written back.
        """
        templates = self.collect_templates(values)
        if not templates:
            _logger.debug("No value templates found")
            return values

        _logger.debug("Found %d value template(s)", len(templates))
        dependency_graph = self.build_graph(templates)
        order = dependency_graph.topological_sort()
        _logger.debug("Resolution order: %s", ", ".join(str(p) for p in order))

        resolved = _copy.deepcopy(values)
        for path in order:
            template = templates.get(path)
            if template is None:
                # Plain dependency target, already a concrete value
                continue
            try:
                rendered = self._renderer.render(template, resolved)
            except errors.RenderError as e:
                if e.path is not None:
                    raise
                raise errors.RenderError(e.template, e.cause, path=str(path)) from e
            _logger.debug("Resolved %s = %r", path, rendered)
            paths.set_value(resolved, path, rendered)

        return resolved


def _nested_templates(
    container: tree.ValuePath,
    templates: dict[tree.ValuePath, str],
) -> list[tree.ValuePath]:
    """Template paths strictly below `container`."""
    prefix = str(container)
    return [
        path
        for path in templates
        if str(path).startswith(prefix + ".") or str(path).startswith(prefix + "[")
    ]


def _default_extractor() -> extractor_module.ReferenceExtractor:
    return extractor_module.JinjaReferenceExtractor()


def _default_renderer() -> renderer_module.TemplateRenderer:
    return renderer_module.JinjaRenderer()


def resolve_references(values: tree.Value) -> tree.Value:
    """Resolve all value references using the default Jinja implementations."""
    return ValueResolver().resolve(values)
