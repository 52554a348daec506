"""Widget type and mapping inference from raw data alone."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from widgetspec.schema.widget_models import WidgetType, resolve_widget_type
from widgetspec.utils.dates import is_date_like_string

# Ratio of distinct values above which a string field reads as a label.
LABEL_UNIQUENESS_RATIO = 0.8
MIN_BAR_ROWS = 3

_TEMPORAL_SNAKE_RE = re.compile(r"(?:^|_)(?:date|time|timestamp|datetime|day|week|month|quarter|year|period)$", re.IGNORECASE)
_TEMPORAL_CAMEL_RE = re.compile(r"[a-z](?:At|Date|Time)$")


@dataclass(frozen=True)
class FieldProfile:
  """Kinds of the fields seen across a list of records."""

  keys: tuple[str, ...]
  numeric: tuple[str, ...]
  temporal: tuple[str, ...]
  categorical: tuple[str, ...]
  label_candidates: tuple[str, ...]
  row_count: int
  # Temporal keys whose values are numbers (e.g. `year`).
  numeric_temporal: tuple[str, ...] = ()

  @property
  def string_keys(self) -> tuple[str, ...]:
    """Categorical keys plus string-valued temporal keys, in key order."""
    return tuple(key for key in self.keys if key in self.categorical or (key in self.temporal and key not in self.numeric_temporal))

  @property
  def ranked_string_keys(self) -> tuple[str, ...]:
    """String keys with label candidates moved to the front."""
    return self.label_candidates + tuple(key for key in self.string_keys if key not in self.label_candidates)


def _is_scalar(value: Any) -> bool:
  return value is None or isinstance(value, str | int | float | bool)


def _is_number(value: Any) -> bool:
  return isinstance(value, int | float) and not isinstance(value, bool)


def is_temporal_name(key: str) -> bool:
  return bool(_TEMPORAL_SNAKE_RE.search(key) or _TEMPORAL_CAMEL_RE.search(key))


def profile_records(records: Sequence[Mapping[str, Any]]) -> FieldProfile:
  """Classify every key over all rows; keys keep first-seen order and empty keys are skipped."""
  keys: list[str] = []
  values: dict[str, list[Any]] = {}
  for row in records:
    for key, value in row.items():
      key = key if isinstance(key, str) else str(key)
      # An empty key cannot be referenced by a column or mapping role.
      if not key:
        continue
      if key not in values:
        keys.append(key)
        values[key] = []
      if value is not None:
        values[key].append(value)

  numeric: list[str] = []
  temporal: list[str] = []
  categorical: list[str] = []
  labels: list[str] = []
  numeric_temporal: list[str] = []
  for key in keys:
    seen = values[key]
    all_numbers = bool(seen) and all(_is_number(value) for value in seen)
    all_strings = bool(seen) and all(isinstance(value, str) for value in seen)
    # A date-like name wins even over numeric values (e.g. `year`).
    if is_temporal_name(key) or (all_strings and all(is_date_like_string(value) for value in seen)):
      temporal.append(key)
      if all_numbers:
        numeric_temporal.append(key)
    elif all_numbers:
      numeric.append(key)
    elif all_strings:
      categorical.append(key)
      if len(set(seen)) / len(seen) >= LABEL_UNIQUENESS_RATIO:
        labels.append(key)

  return FieldProfile(keys=tuple(keys), numeric=tuple(numeric), temporal=tuple(temporal), categorical=tuple(categorical), label_candidates=tuple(labels), row_count=len(records), numeric_temporal=tuple(numeric_temporal))


def as_records(data: Any) -> list[Mapping[str, Any]]:
  """Return the mapping rows contained in `data` (a lone mapping counts as one row)."""
  if isinstance(data, Mapping):
    return [data]
  if isinstance(data, Sequence) and not isinstance(data, str | bytes):
    return [row for row in data if isinstance(row, Mapping)]
  return []


def infer(data: Any) -> WidgetType:
  """
  Return the best-fit widget type for `data`.

  Rules are applied in a fixed order and the first match wins:
  scalars and `{"value": ...}` objects are metrics, scalar lists are lists,
  category/value tables with at least three rows are bar charts, other
  records with a date-like axis and a numeric series are line charts, and
  everything else is a table.
  """
  if isinstance(data, Mapping):
    return WidgetType.METRIC if "value" in data else WidgetType.TABLE
  if _is_scalar(data) or not isinstance(data, Sequence):
    return WidgetType.METRIC
  if not data:
    return WidgetType.TABLE
  if all(_is_scalar(item) for item in data):
    return WidgetType.LIST
  if not all(isinstance(item, Mapping) for item in data):
    return WidgetType.TABLE

  profile = profile_records(data)
  if profile.categorical and profile.numeric and profile.row_count >= MIN_BAR_ROWS:
    return WidgetType.CHART_BAR
  if profile.temporal and profile.numeric:
    return WidgetType.CHART_LINE
  return WidgetType.TABLE


def _first(keys: Sequence[str]) -> str | None:
  return keys[0] if keys else None


def infer_mapping(widget: WidgetType | str, data: Any) -> dict[str, Any] | None:
  """Derive role assignments for `widget` from the shape of `data`."""
  widget = resolve_widget_type(widget)
  records = as_records(data)
  if not records:
    return None
  profile = profile_records(records)
  if not profile.keys:
    return None

  strings = profile.ranked_string_keys
  numbers = profile.numeric
  label = _first(strings)
  value = _first(numbers)

  if widget is WidgetType.TABLE:
    return {"columns": [{"key": key} for key in profile.keys]}
  if widget is WidgetType.LIST:
    if not strings:
      return None
    mapping = {"primary": strings[0]}
    if len(strings) > 1:
      mapping["secondary"] = strings[1]
    return mapping
  if widget in {WidgetType.CHART_PIE, WidgetType.CHART_FUNNEL}:
    return {"label": label, "value": value} if label and value else None
  if widget is WidgetType.CHART_RADAR:
    return {"axis": label, "value": value} if label and value else None
  if widget is WidgetType.CHART_HEATMAP:
    if len(strings) >= 2 and value:
      return {"x": strings[0], "y": [strings[1]], "value": value}
    return None
  if widget is WidgetType.CHART_SCATTER:
    if len(numbers) >= 2:
      return {"x": numbers[0], "y": list(numbers[1:])}
    if strings and numbers:
      return {"x": strings[0], "y": list(numbers)}
    return None
  if widget in {WidgetType.CHART_BAR, WidgetType.CHART_LINE, WidgetType.CHART_AREA, WidgetType.CHART_WATERFALL, WidgetType.CHART_BOX}:
    axis_keys = strings
    if widget in {WidgetType.CHART_LINE, WidgetType.CHART_AREA} and profile.temporal:
      axis_keys = profile.temporal
    if axis_keys and numbers:
      return {"x": axis_keys[0], "y": list(numbers)}
    return None
  # Treemaps read name/value by convention; display, input and container widgets need no mapping.
  return None
