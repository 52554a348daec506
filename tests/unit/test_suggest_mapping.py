"""Unit tests for ranked mapping suggestions and auto specs."""

from __future__ import annotations

import pytest
from hypothesis import given, settings, strategies

from widgetspec.schema.errors import UnrecognizedWidgetError
from widgetspec.schema.validate_spec import validate
from widgetspec.schema.widget_models import Mapping, WidgetType
from widgetspec.services.suggest_mapping import Confidence, auto_spec, suggest_mapping

SALES = [{"name": "A", "v": 1}, {"name": "B", "v": 2}, {"name": "C", "v": 3}]
SERIES = [{"date": "2024-01-01", "total": 10}, {"date": "2024-01-02", "total": 12}]


def test_inferred_widget_comes_first() -> None:
  suggestions = suggest_mapping(SALES)
  best = suggestions[0]
  assert best.widget is WidgetType.CHART_BAR
  assert best.mapping == {"x": "name", "y": ["v"]}
  assert best.confidence is Confidence.HIGH


def test_suggestions_are_ranked_and_unique() -> None:
  suggestions = suggest_mapping(SALES)
  ranks = [suggestion.confidence.rank for suggestion in suggestions]
  assert ranks == sorted(ranks)
  widgets = [suggestion.widget for suggestion in suggestions]
  assert len(widgets) == len(set(widgets))
  assert WidgetType.TABLE in widgets
  assert all(suggestion.reason for suggestion in suggestions)


def test_object_with_value_suggests_display_widgets() -> None:
  suggestions = suggest_mapping({"value": 5, "max": 10})
  widgets = [suggestion.widget for suggestion in suggestions]
  assert widgets[:3] == [WidgetType.METRIC, WidgetType.PROGRESS, WidgetType.GAUGE]
  assert suggestions[0].confidence is Confidence.HIGH
  assert suggestions[2].confidence is Confidence.MEDIUM


def test_constrained_widget_returns_one_suggestion() -> None:
  suggestions = suggest_mapping(SALES, "chart.pie")
  assert len(suggestions) == 1
  assert suggestions[0].widget is WidgetType.CHART_PIE
  assert suggestions[0].mapping == {"label": "name", "value": "v"}


def test_constrained_widget_without_fit_is_low() -> None:
  suggestion = suggest_mapping([{"a": 1, "b": 2}], "chart.pie")[0]
  assert suggestion.mapping is None
  assert suggestion.confidence is Confidence.LOW


def test_multiple_numeric_fields_lower_confidence() -> None:
  data = [{"name": "A", "x": 1, "y": 2}, {"name": "B", "x": 3, "y": 4}, {"name": "C", "x": 5, "y": 6}]
  suggestion = suggest_mapping(data, "chart.bar")[0]
  assert suggestion.mapping == {"x": "name", "y": ["x", "y"]}
  assert suggestion.confidence is Confidence.MEDIUM


def test_scalar_inputs() -> None:
  metric = suggest_mapping(5)
  assert [(s.widget, s.mapping, s.confidence) for s in metric] == [(WidgetType.METRIC, None, Confidence.HIGH)]

  listing = suggest_mapping(["a", "b"])
  assert [(s.widget, s.mapping) for s in listing] == [(WidgetType.LIST, {"primary": "value"})]

  mismatch = suggest_mapping([1, 2], "table")
  assert mismatch[0].confidence is Confidence.LOW


@pytest.mark.parametrize("data", [None, [], {}])
def test_empty_data_has_no_suggestions(data) -> None:
  assert suggest_mapping(data) == []


def test_unknown_widget_constraint_raises() -> None:
  with pytest.raises(UnrecognizedWidgetError):
    suggest_mapping(SALES, "chartbar")


def test_suggestion_to_dict() -> None:
  payload = suggest_mapping(SALES)[0].to_dict()
  assert payload["widget"] == "chart.bar"
  assert payload["confidence"] == "high"
  assert set(payload) == {"widget", "mapping", "confidence", "reason"}


def test_auto_spec_bar_chart() -> None:
  spec = auto_spec(SALES)
  assert spec is not None
  assert spec.widget is WidgetType.CHART_BAR
  assert spec.mapping == Mapping(x="name", y=("v",))
  assert validate(spec).valid


def test_auto_spec_line_chart() -> None:
  spec = auto_spec(SERIES)
  assert spec is not None
  assert spec.widget is WidgetType.CHART_LINE
  assert spec.mapping == Mapping(x="date", y=("total",))


def test_auto_spec_wraps_scalars() -> None:
  metric = auto_spec(42)
  assert metric is not None
  assert metric.widget is WidgetType.METRIC
  assert metric.data == {"value": 42}

  listing = auto_spec([1, 2, 3])
  assert listing is not None
  assert listing.widget is WidgetType.LIST
  assert listing.data == [{"value": 1}, {"value": 2}, {"value": 3}]
  assert listing.mapping == Mapping(primary="value")
  assert validate(listing).valid


def test_auto_spec_object_becomes_table_rows() -> None:
  spec = auto_spec({"a": 1, "b": 2})
  assert spec is not None
  assert spec.widget is WidgetType.TABLE
  assert spec.data == [{"a": 1, "b": 2}]
  assert spec.columns is not None
  assert [column.key for column in spec.columns] == ["a", "b"]
  assert validate(spec).valid


@pytest.mark.parametrize("data", [None, [], {}])
def test_auto_spec_empty_data(data) -> None:
  assert auto_spec(data) is None


def test_auto_spec_follows_top_suggestion() -> None:
  data = [{"name": "A", "v": 1}, {"name": "B", "v": 2}]
  spec = auto_spec(data)
  assert spec is not None
  top = suggest_mapping(data)[0]
  assert top.widget is WidgetType.CHART_BAR
  assert spec.widget is top.widget
  assert spec.mapping == Mapping(x="name", y=("v",))


def test_auto_spec_skips_empty_keys() -> None:
  spec = auto_spec([{"": 1, "b": 2}])
  assert spec is not None
  result = validate(spec)
  assert result.valid, result.errors


_scalars = strategies.one_of(
  strategies.none(),
  strategies.booleans(),
  strategies.integers(-(10**9), 10**9),
  strategies.floats(allow_nan=False, allow_infinity=False),
  strategies.text(max_size=12),
)
_keys = strategies.one_of(strategies.sampled_from(["", "name", "value", "label", "day", "createdAt", "v"]), strategies.text(max_size=6))
_data = strategies.one_of(
  _scalars,
  strategies.lists(_scalars, max_size=5),
  strategies.dictionaries(_keys, _scalars, max_size=4),
  strategies.lists(strategies.dictionaries(_keys, _scalars, max_size=4), max_size=6),
)


@settings(max_examples=200)
@given(data=_data)
def test_auto_spec_output_always_validates(data) -> None:
  spec = auto_spec(data)
  if spec is None:
    return
  result = validate(spec)
  assert result.valid, result.errors
