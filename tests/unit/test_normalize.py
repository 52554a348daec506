"""Unit tests for widget spec normalization."""

from __future__ import annotations

import pytest
from hypothesis import given, settings, strategies

from widgetspec.schema.errors import MalformedSpecError, UnrecognizedWidgetError
from widgetspec.schema.spec_normalizer import normalize, normalize_mapping
from widgetspec.schema.validate_spec import validate
from widgetspec.schema.widget_models import Mapping, WidgetSpec, WidgetType


def test_action_style_defaults() -> None:
  spec = normalize({"widget": "confirm", "actions": [{"label": "OK", "action": "ok"}]})
  assert spec.actions is not None
  assert spec.actions[0].style == "default"
  assert spec.to_dict()["actions"] == [{"label": "OK", "action": "ok", "style": "default"}]


def test_compose_layout_defaults_to_stack() -> None:
  spec = normalize({"widget": "compose", "children": [{"widget": "metric", "data": {"value": 1}}]})
  assert spec.layout == "stack"
  assert spec.children is not None
  assert spec.children[0].widget is WidgetType.METRIC


def test_bare_string_mapping_expands_to_primary_role() -> None:
  assert normalize({"widget": "metric", "mapping": "value"}).mapping == Mapping(value="value")
  assert normalize({"widget": "chart.bar", "mapping": "sales"}).mapping == Mapping(y=("sales",))
  assert normalize({"widget": "list", "mapping": "name"}).mapping == Mapping(primary="name")


def test_y_is_always_a_tuple() -> None:
  spec = normalize({"widget": "chart.line", "mapping": {"x": "day", "y": "total"}})
  assert spec.mapping == Mapping(x="day", y=("total",))
  assert spec.to_dict()["mapping"] == {"x": "day", "y": ["total"]}


def test_two_roles_may_share_a_key() -> None:
  mapping = normalize_mapping({"label": "name", "axis": "name"})
  assert mapping.roles() == {"label": "name", "axis": "name"}


def test_normalize_mapping_none_is_empty() -> None:
  assert normalize_mapping(None) == Mapping()
  assert normalize_mapping(None).roles() == {}


def test_empty_mapping_is_dropped() -> None:
  assert normalize({"widget": "table", "mapping": {}}).mapping is None


def test_field_defaults_and_legacy_keys() -> None:
  spec = normalize({"widget": "form", "fields": [{"field": "email", "min_length": 3}, {"name": "bio", "type": "textarea", "maxLength": 200}]})
  assert spec.fields is not None
  first, second = spec.fields
  assert first.name == "email"
  assert first.type == "text"
  assert first.min_length == 3
  assert second.max_length == 200
  assert spec.to_dict()["fields"][0] == {"name": "email", "type": "text", "minLength": 3}


def test_legacy_column_key() -> None:
  spec = normalize({"widget": "table", "columns": [{"field": "name", "label": "Name"}]})
  assert spec.columns is not None
  assert spec.columns[0].key == "name"


def test_deprecated_mapping_fields_are_lifted() -> None:
  spec = normalize({"widget": "table", "mapping": {"columns": [{"key": "a"}], "fields": [{"name": "b"}]}})
  assert spec.columns is not None and spec.columns[0].key == "a"
  assert spec.fields is not None and spec.fields[0].name == "b"
  assert spec.mapping is None


def test_top_level_fields_win_over_mapping_fields() -> None:
  spec = normalize({"widget": "form", "fields": [{"name": "top"}], "mapping": {"fields": [{"name": "nested"}]}})
  assert spec.fields is not None
  assert [field.name for field in spec.fields] == ["top"]


def test_compose_column_count_moves_to_options() -> None:
  spec = normalize({"widget": "compose", "layout": "grid", "columns": 3, "children": [{"widget": "markdown"}]})
  assert spec.columns is None
  assert spec.options == {"columns": 3}
  assert spec.layout == "grid"


def test_formdown_fills_fields_and_actions() -> None:
  spec = normalize({"widget": "form", "formdown": '@name*(Full name): [placeholder=Your name]\n@[submit "Save"]', "data": {"name": "Ada"}})
  assert spec.fields is not None
  assert spec.fields[0].name == "name"
  assert spec.fields[0].label == "Full name"
  assert spec.fields[0].required is True
  assert spec.fields[0].attributes == {"value": "Ada"}
  assert spec.actions is not None
  assert spec.actions[0].style == "primary"


def test_unknown_keys_are_dropped() -> None:
  spec = normalize({"widget": "metric", "data": {"value": 1}, "theme": "dark"})
  assert "theme" not in spec.to_dict()


def test_data_is_detached_from_input() -> None:
  data = [{"name": "A", "v": 1}]
  spec = normalize({"widget": "table", "data": data})
  data[0]["v"] = 99
  assert spec.data == [{"name": "A", "v": 1}]


def test_unknown_widget_raises_with_suggestion() -> None:
  with pytest.raises(UnrecognizedWidgetError) as excinfo:
    normalize({"widget": "chart.barr"})
  assert excinfo.value.suggestion == "chart.bar"
  assert excinfo.value.path == "widget"


def test_unknown_child_widget_reports_child_path() -> None:
  with pytest.raises(UnrecognizedWidgetError) as excinfo:
    normalize({"widget": "compose", "children": [{"widget": "metric"}, {"widget": "metrc"}]})
  assert excinfo.value.path == "children[1].widget"


@pytest.mark.parametrize("spec", [None, 5, "metric", {"title": "x"}, {"widget": ""}, {"widget": "compose", "children": "nope"}])
def test_malformed_input_raises(spec) -> None:
  with pytest.raises(MalformedSpecError):
    normalize(spec)


def test_structurally_invalid_fields_raise() -> None:
  with pytest.raises(MalformedSpecError):
    normalize({"widget": "form", "fields": [{"name": "a", "type": "colour"}]})


def test_normalize_accepts_canonical_spec() -> None:
  spec = normalize({"widget": "metric", "data": {"value": 1}})
  assert normalize(spec) == spec


_SAMPLES = [
  {"widget": "metric", "data": {"value": 42, "unit": "ms"}, "mapping": "value", "title": "Latency"},
  {"widget": "chart.bar", "data": [{"name": "A", "v": 1}], "mapping": {"x": "name", "y": "v"}},
  {"widget": "form", "fields": [{"field": "q", "min_length": 1}], "actions": [{"label": "Go", "action": "go"}]},
  {"widget": "form", "formdown": '@email*: @[]\n@[submit "Send"]'},
  {"widget": "compose", "columns": 2, "layout": "grid", "children": [{"widget": "markdown", "data": "# Hi"}, {"widget": "compose", "children": [{"widget": "image"}]}]},
  {"widget": "table", "mapping": {"columns": [{"field": "a", "format": "currency:EUR"}]}, "data": [{"a": 1}]},
]


@pytest.mark.parametrize("spec", _SAMPLES)
def test_normalize_is_idempotent(spec) -> None:
  once = normalize(spec)
  assert isinstance(once, WidgetSpec)
  assert normalize(once) == once
  assert normalize(once.to_dict()) == once
  assert validate(once).valid


_scalars = strategies.one_of(strategies.none(), strategies.booleans(), strategies.integers(-(10**6), 10**6), strategies.text(max_size=8))
_records = strategies.lists(strategies.dictionaries(strategies.sampled_from(["name", "value", "day"]), _scalars, max_size=3), max_size=4)


@settings(max_examples=100)
@given(
  widget=strategies.sampled_from([member.value for member in WidgetType if member is not WidgetType.COMPOSE]),
  data=_records,
  title=strategies.one_of(strategies.none(), strategies.text(max_size=10)),
)
def test_normalize_idempotent_property(widget: str, data, title) -> None:
  spec = {"widget": widget, "data": data, "title": title}
  once = normalize(spec)
  assert normalize(once.to_dict()) == once
