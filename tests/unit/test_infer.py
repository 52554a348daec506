"""Unit tests for widget type and mapping inference."""

from __future__ import annotations

import pytest

from widgetspec.schema.errors import UnrecognizedWidgetError
from widgetspec.schema.widget_models import WidgetType
from widgetspec.services.infer import infer, infer_mapping, is_temporal_name, profile_records
from widgetspec.utils.dates import is_date_like_string

SALES = [{"name": "A", "v": 1}, {"name": "B", "v": 2}, {"name": "C", "v": 3}]
SERIES = [{"date": "2024-01-01", "total": 10}, {"date": "2024-01-02", "total": 12}]


@pytest.mark.parametrize(
  ("data", "expected"),
  [
    (42, WidgetType.METRIC),
    ("hello", WidgetType.METRIC),
    (None, WidgetType.METRIC),
    ({"value": 42, "unit": "ms"}, WidgetType.METRIC),
    ({"a": 1, "b": 2}, WidgetType.TABLE),
    ([], WidgetType.TABLE),
    ([1, 2, 3], WidgetType.LIST),
    (["a", "b"], WidgetType.LIST),
    ([{"a": 1}, 2], WidgetType.TABLE),
  ],
)
def test_infer_shapes(data, expected) -> None:
  assert infer(data) is expected


def test_category_value_rows_infer_bar_chart() -> None:
  assert infer(SALES) is WidgetType.CHART_BAR


def test_bar_chart_needs_three_rows() -> None:
  assert infer(SALES[:2]) is WidgetType.TABLE


def test_time_series_infers_line_chart() -> None:
  assert infer(SERIES) is WidgetType.CHART_LINE


def test_temporal_name_wins_over_numeric_values() -> None:
  data = [{"year": 2022, "revenue": 1}, {"year": 2023, "revenue": 2}]
  assert infer(data) is WidgetType.CHART_LINE
  profile = profile_records(data)
  assert profile.temporal == ("year",)
  assert profile.numeric == ("revenue",)


def test_records_without_numbers_infer_table() -> None:
  assert infer([{"a": "x", "b": "y"}, {"a": "z", "b": "w"}]) is WidgetType.TABLE


def test_inference_is_deterministic() -> None:
  assert all(infer(SALES) is WidgetType.CHART_BAR for _ in range(10))


def test_profile_records_classifies_keys() -> None:
  profile = profile_records([{"id": "a", "kind": "x", "n": 1, "when": "2024-05-01"}, {"id": "b", "kind": "x", "n": 2.5, "when": "2024-05-02"}])
  assert profile.keys == ("id", "kind", "n", "when")
  assert profile.numeric == ("n",)
  assert profile.temporal == ("when",)
  assert profile.categorical == ("id", "kind")
  assert profile.label_candidates == ("id",)
  assert profile.row_count == 2


def test_bools_are_not_numeric() -> None:
  profile = profile_records([{"flag": True}, {"flag": False}])
  assert profile.numeric == ()


@pytest.mark.parametrize("key", ["date", "created_at_date", "createdAt", "startTime", "month", "fiscal_year"])
def test_temporal_names(key: str) -> None:
  assert is_temporal_name(key)


@pytest.mark.parametrize("key", ["name", "update", "dateline", "value"])
def test_non_temporal_names(key: str) -> None:
  assert not is_temporal_name(key)


@pytest.mark.parametrize("value", ["2024-01-01", "2024-01-01T10:00:00Z", "1/2/2024", "2024/01/02", "Jan 5, 2024", "March 3"])
def test_date_like_strings(value: str) -> None:
  assert is_date_like_string(value)


@pytest.mark.parametrize("value", ["hello", "Mayday", "12345", "", 20240101, "2024-01-01" + "x" * 40])
def test_not_date_like(value) -> None:
  assert not is_date_like_string(value)


def test_bar_mapping() -> None:
  assert infer_mapping(WidgetType.CHART_BAR, SALES) == {"x": "name", "y": ["v"]}


def test_line_mapping_prefers_temporal_axis() -> None:
  data = [{"region": "EU", "day": "2024-01-01", "sales": 5}, {"region": "US", "day": "2024-01-02", "sales": 7}]
  assert infer_mapping("chart.line", data) == {"x": "day", "y": ["sales"]}
  assert infer_mapping("chart.bar", data) == {"x": "region", "y": ["sales"]}


def test_pie_and_radar_mappings() -> None:
  assert infer_mapping("chart.pie", SALES) == {"label": "name", "value": "v"}
  assert infer_mapping("chart.radar", SALES) == {"axis": "name", "value": "v"}


def test_scatter_mapping_uses_numeric_axes() -> None:
  data = [{"w": 1, "h": 2, "d": 3}]
  assert infer_mapping("chart.scatter", data) == {"x": "w", "y": ["h", "d"]}


def test_heatmap_mapping() -> None:
  data = [{"row": "a", "col": "b", "n": 1}]
  assert infer_mapping("chart.heatmap", data) == {"x": "row", "y": ["col"], "value": "n"}


def test_table_mapping_lists_columns() -> None:
  assert infer_mapping("table", SALES) == {"columns": [{"key": "name"}, {"key": "v"}]}


def test_list_mapping() -> None:
  data = [{"title": "One", "author": "Ann", "n": 1}]
  assert infer_mapping("list", data) == {"primary": "title", "secondary": "author"}


def test_mapping_is_none_without_fit() -> None:
  assert infer_mapping("chart.pie", [{"a": 1, "b": 2}]) is None
  assert infer_mapping("form", SALES) is None
  assert infer_mapping("chart.bar", []) is None


def test_infer_mapping_rejects_unknown_widget() -> None:
  with pytest.raises(UnrecognizedWidgetError):
    infer_mapping("chart.barz", SALES)


def test_category_value_rule_precedes_time_series() -> None:
  data = [{"region": "EU", "day": "2024-01-01", "sales": 5}, {"region": "US", "day": "2024-01-02", "sales": 7}, {"region": "APAC", "day": "2024-01-03", "sales": 2}]
  assert infer(data) is WidgetType.CHART_BAR
  assert infer(data[:2]) is WidgetType.CHART_LINE


def test_single_row_time_series_is_a_line_chart() -> None:
  assert infer(SERIES[:1]) is WidgetType.CHART_LINE


def test_axis_roles_prefer_unique_label_field() -> None:
  data = [{"kind": "x", "name": "A", "v": 1}, {"kind": "x", "name": "B", "v": 2}, {"kind": "x", "name": "C", "v": 3}]
  assert infer_mapping("chart.bar", data) == {"x": "name", "y": ["v"]}
  assert infer_mapping("chart.heatmap", data) == {"x": "name", "y": ["kind"], "value": "v"}
  assert infer_mapping("list", data) == {"primary": "name", "secondary": "kind"}


def test_empty_keys_are_skipped() -> None:
  profile = profile_records([{"": 1, "b": 2}])
  assert profile.keys == ("b",)
  assert infer_mapping("table", [{"": 1, "b": 2}]) == {"columns": [{"key": "b"}]}
  assert infer_mapping("table", [{"": 1}]) is None
