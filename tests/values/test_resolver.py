"""Tests for value reference resolution.

End-to-end cases use the real Jinja extractor and renderer. Ordering and
wiring are also checked with recording doubles that implement the same
capability interfaces.
"""

import copy as _copy
import logging as _logging
import typing as _typing

import pytest as _pytest
import yaml as _yaml

import rigger.values.errors as errors
import rigger.values.extractor as extractor
import rigger.values.renderer as renderer
import rigger.values.resolver as resolver
import rigger.values.tree as tree


def _resolve(yaml_text: str) -> dict[str, _typing.Any]:
    return resolver.resolve_references(_yaml.safe_load(yaml_text))


class TestResolveReferences:
    """End-to-end resolution with the default Jinja implementations."""

    def test_simple_reference(self) -> None:
        resolved = _resolve('greeting: "hello"\nmessage: "{{ greeting }} world"\n')
        assert resolved["message"] == "hello world"

    def test_nested_reference(self) -> None:
        resolved = _resolve(
            """
parent:
  child:
    value: "nested"
result: "{{ parent.child.value }}"
"""
        )
        assert resolved["result"] == "nested"

    def test_chained_references(self) -> None:
        """c uses b uses a; layout order does not matter."""
        resolved = resolver.resolve_references(
            {"c": "{{ b }}-y", "a": "base", "b": "{{ a }}-x"}
        )
        assert resolved == {"c": "base-x-y", "a": "base", "b": "base-x"}

    def test_diamond(self) -> None:
        resolved = resolver.resolve_references(
            {"root": "r", "b1": "{{root}}-1", "b2": "{{root}}-2", "f": "{{b1}} {{b2}}"}
        )
        assert resolved["f"] == "r-1 r-2"

    def test_multiple_references_in_one_string(self) -> None:
        resolved = resolver.resolve_references(
            {"p1": "world", "p2": "hello", "msg": "{{p2}} {{p1}}"}
        )
        assert resolved["msg"] == "hello world"

    def test_filter_applied(self) -> None:
        resolved = resolver.resolve_references({"name": "web", "svc": "{{ name | upper }}"})
        assert resolved["svc"] == "WEB"

    def test_filter_on_resolved_template(self) -> None:
        """Filters see the rendered text of the referenced template."""
        resolved = resolver.resolve_references(
            {"base": "app", "name": "{{ base }}-svc", "shout": "{{ name | upper }}"}
        )
        assert resolved["shout"] == "APP-SVC"

    def test_default_for_missing(self) -> None:
        resolved = resolver.resolve_references({"v": "{{ nope | default('fb') }}"})
        assert resolved["v"] == "fb"

    def test_nested_template_paths(self) -> None:
        resolved = resolver.resolve_references(
            {
                "base": {"value": "core"},
                "config": {"greeting": "hi {{ base.value }}"},
                "result": {"message": "{{ config.greeting }}!"},
            }
        )
        assert resolved["result"]["message"] == "hi core!"

    def test_keys_named_like_dict_methods(self) -> None:
        """A key called `items` resolves to its value, not the dict method."""
        resolved = resolver.resolve_references(
            {"svc": {"items": "web", "values": "v1"}, "a": "{{ svc.items }}-{{ svc.values }}"}
        )
        assert resolved["a"] == "web-v1"

    def test_reference_to_container_waits_for_nested_templates(self) -> None:
        """Referencing a mapping sees its templates already rendered."""
        resolved = resolver.resolve_references(
            {
                "dump": "{{ db.url }}|{{ db }}",
                "db": {"host": "pg", "url": "postgres://{{ db.host }}"},
                "name": "x",
            }
        )
        assert resolved["db"]["url"] == "postgres://pg"
        assert "postgres://pg" in resolved["dump"].split("|")[1]
        assert "{{" not in resolved["dump"]

    def test_non_templates_untouched(self) -> None:
        """Values without template syntax pass through exactly."""
        values = {
            "int": 1,
            "float": 2.5,
            "bool": False,
            "null": None,
            "list": [1, "two", {"three": 3}],
            "text": "plain { braces } here",
            "ref": "{{ text }}",
        }
        resolved = resolver.resolve_references(values)
        for key in ("int", "float", "bool", "null", "list", "text"):
            assert resolved[key] == values[key]
            assert type(resolved[key]) is type(values[key])
        assert resolved["ref"] == "plain { braces } here"

    def test_no_templates_returns_unchanged(self) -> None:
        values = {"a": 1, "b": {"c": [1, 2]}}
        assert resolver.resolve_references(values) == {"a": 1, "b": {"c": [1, 2]}}

    def test_input_not_modified(self) -> None:
        values = {"a": "x", "b": "{{ a }}"}
        original = _copy.deepcopy(values)
        resolver.resolve_references(values)
        assert values == original

    def test_numbers_rendered_as_strings(self) -> None:
        """Rendered templates become plain strings."""
        resolved = resolver.resolve_references({"port": 8080, "addr": "{{ port }}"})
        assert resolved["addr"] == "8080"


class TestResolutionErrors:
    """Tests for fatal resolution failures."""

    def test_self_reference(self) -> None:
        with _pytest.raises(errors.CircularDependencyError) as exc_info:
            resolver.resolve_references({"a": "{{ a }}"})
        assert "a -> a" in str(exc_info.value)

    def test_three_node_cycle(self) -> None:
        with _pytest.raises(errors.CircularDependencyError) as exc_info:
            resolver.resolve_references({"a": "{{ b }}", "b": "{{ c }}", "c": "{{ a }}"})
        message = str(exc_info.value)
        for name in ("a", "b", "c"):
            assert name in message

    def test_cycle_through_container(self) -> None:
        """A template that references its own parent mapping is a cycle."""
        with _pytest.raises(errors.CircularDependencyError):
            resolver.resolve_references({"svc": {"name": "web", "label": "{{ svc }}"}})

    def test_cycle_does_not_mutate_input(self) -> None:
        values = {"ok": "x", "uses_ok": "{{ ok }}", "a": "{{ b }}", "b": "{{ a }}"}
        original = _copy.deepcopy(values)
        with _pytest.raises(errors.CircularDependencyError):
            resolver.resolve_references(values)
        assert values == original

    def test_missing_reference(self) -> None:
        with _pytest.raises(errors.RenderError) as exc_info:
            resolver.resolve_references({"a": "{{ missing }}"})
        assert exc_info.value.path == "a"
        assert exc_info.value.template == "{{ missing }}"
        assert "'a'" in str(exc_info.value)

    def test_detected_but_invalid_template(self) -> None:
        """{{}} is detected as a template and rendering it fails."""
        with _pytest.raises(errors.RenderError):
            resolver.resolve_references({"a": "{{}}"})

    def test_template_in_sequence_not_writable(self) -> None:
        """Write-back only goes into mappings."""
        with _pytest.raises(errors.PathError):
            resolver.resolve_references({"name": "web", "tags": ["{{ name }}"]})

    def test_failures_are_resolution_errors(self) -> None:
        for error_type in (
            errors.CircularDependencyError,
            errors.RenderError,
            errors.PathError,
        ):
            assert issubclass(error_type, errors.ResolutionError)


class _RecordingExtractor(extractor.ReferenceExtractor):
    """Treats strings starting with '=' as templates referencing '+'-joined names."""

    def contains_template(self, text: str) -> bool:
        return text.startswith("=")

    def extract_references(self, text: str) -> list[str]:
        body = text[1:]
        return [name for name in body.split("+") if name]


class _RecordingRenderer(renderer.TemplateRenderer):
    """Concatenates referenced values and records render calls."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def render(self, template: str, context: tree.Mapping) -> str:
        self.calls.append(template)
        parts = [str(context[name]) for name in template[1:].split("+") if name]
        return "".join(parts)


class TestInjectedCapabilities:
    """Tests for resolution with injected extractor and renderer."""

    def test_uses_injected_implementations(self) -> None:
        recording = _RecordingRenderer()
        value_resolver = resolver.ValueResolver(_RecordingExtractor(), recording)

        resolved = value_resolver.resolve({"a": "x", "b": "=a+a", "c": "=b+a"})

        assert resolved == {"a": "x", "b": "xx", "c": "xxx"}
        assert recording.calls == ["=a+a", "=b+a"]

    def test_render_order_follows_dependencies(self) -> None:
        recording = _RecordingRenderer()
        value_resolver = resolver.ValueResolver(_RecordingExtractor(), recording)

        value_resolver.resolve({"z": "=y", "y": "=x", "x": "=base", "base": "b"})

        assert recording.calls == ["=base", "=x", "=y"]

    def test_each_template_rendered_once(self) -> None:
        recording = _RecordingRenderer()
        value_resolver = resolver.ValueResolver(_RecordingExtractor(), recording)

        value_resolver.resolve(
            {"root": "r", "b1": "=root", "b2": "=root", "f": "=b1+b2"}
        )

        assert sorted(recording.calls) == ["=b1+b2", "=root", "=root"]
        assert recording.calls[-1] == "=b1+b2"

    def test_template_without_references_still_rendered(self) -> None:
        """A detected template with zero references is rendered anyway."""
        recording = _RecordingRenderer()
        value_resolver = resolver.ValueResolver(_RecordingExtractor(), recording)

        resolved = value_resolver.resolve({"lonely": "="})

        assert recording.calls == ["="]
        assert resolved["lonely"] == ""

    def test_no_templates_skips_rendering(self) -> None:
        recording = _RecordingRenderer()
        value_resolver = resolver.ValueResolver(_RecordingExtractor(), recording)

        value_resolver.resolve({"a": "plain", "b": [1, 2]})

        assert recording.calls == []

    def test_renderer_error_propagates(self) -> None:
        class _FailingRenderer(renderer.TemplateRenderer):
            def render(self, template: str, context: tree.Mapping) -> str:
                raise errors.RenderError(template, "backend exploded")

        value_resolver = resolver.ValueResolver(_RecordingExtractor(), _FailingRenderer())
        with _pytest.raises(errors.RenderError, match="backend exploded") as exc_info:
            value_resolver.resolve({"a": "=b", "b": "x"})
        assert exc_info.value.path == "a"


class TestCollectTemplates:
    """Tests for the tree scan."""

    def test_paths_and_order(self) -> None:
        value_resolver = resolver.ValueResolver()
        templates = value_resolver.collect_templates(
            {
                "a": "{{ x }}",
                "nested": {"b": "{{ y }}", "plain": "text"},
                "items": ["plain", {"name": "{{ z }}"}],
                "num": 3,
            }
        )
        assert [str(p) for p in templates] == ["a", "nested.b", "items[1].name"]
        assert templates[tree.ValuePath("nested.b")] == "{{ y }}"

    def test_non_string_keys_skipped(self) -> None:
        value_resolver = resolver.ValueResolver()
        assert value_resolver.collect_templates({1: "{{ x }}", "k": "{{ y }}"}) == {
            tree.ValuePath("k"): "{{ y }}"
        }

    def test_non_string_key_skip_logged(self, caplog: _pytest.LogCaptureFixture) -> None:
        value_resolver = resolver.ValueResolver()
        with caplog.at_level(_logging.DEBUG, logger="rigger.values.resolver"):
            templates = value_resolver.collect_templates({"ports": {80: "{{ x }}"}})
        assert templates == {}
        assert "Skipping non-string key 80 under 'ports'" in caplog.text

    def test_graph_includes_leaf_dependencies(self) -> None:
        """Referenced paths without templates are still graph nodes."""
        value_resolver = resolver.ValueResolver()
        templates = value_resolver.collect_templates({"a": "v", "b": "{{ a }}"})
        dependency_graph = value_resolver.build_graph(templates)
        assert tree.ValuePath("a") in dependency_graph
        assert dependency_graph.dependencies_of(tree.ValuePath("b")) == [tree.ValuePath("a")]
