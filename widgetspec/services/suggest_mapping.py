"""Ranked widget and mapping suggestions for raw data."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from widgetspec.schema.spec_normalizer import normalize
from widgetspec.schema.widget_models import ARRAY_DATA_WIDGETS, WidgetSpec, WidgetType, resolve_widget_type
from widgetspec.services.infer import FieldProfile, as_records, infer, infer_mapping, profile_records

logger = logging.getLogger(__name__)


class Confidence(str, Enum):
  """Coarse confidence in a suggested widget and mapping."""

  HIGH = "high"
  MEDIUM = "medium"
  LOW = "low"

  @property
  def rank(self) -> int:
    return _CONFIDENCE_RANK[self]


_CONFIDENCE_RANK = {Confidence.HIGH: 0, Confidence.MEDIUM: 1, Confidence.LOW: 2}


@dataclass(frozen=True)
class MappingSuggestion:
  """One candidate widget with the mapping that fits it."""

  widget: WidgetType
  mapping: dict[str, Any] | None
  confidence: Confidence
  reason: str

  def to_dict(self) -> dict[str, Any]:
    return {"widget": self.widget.value, "mapping": self.mapping, "confidence": self.confidence.value, "reason": self.reason}


def _is_scalar(value: Any) -> bool:
  return value is None or isinstance(value, str | int | float | bool)


def _is_empty(data: Any) -> bool:
  return data is None or (isinstance(data, Mapping | list | tuple) and not data)


def _is_scalar_list(data: Any) -> bool:
  return isinstance(data, list | tuple) and bool(data) and all(_is_scalar(item) for item in data)


def _profile(data: Any) -> FieldProfile:
  return profile_records(as_records(data))


def _assess(widget: WidgetType, mapping: dict[str, Any] | None, profile: FieldProfile) -> Confidence:
  """Grade how unambiguous the role assignment for `widget` is."""
  keys = set(profile.keys)
  numbers = profile.numeric
  if widget is WidgetType.METRIC:
    return Confidence.HIGH if "value" in numbers else Confidence.MEDIUM
  if widget is WidgetType.PROGRESS:
    return Confidence.HIGH if keys & {"min", "max"} else Confidence.MEDIUM
  if widget is WidgetType.GAUGE:
    return Confidence.MEDIUM
  if widget is WidgetType.STAT_GROUP:
    return Confidence.HIGH if {"label", "value"} <= keys else Confidence.LOW
  if widget is WidgetType.TABLE:
    return Confidence.MEDIUM
  if widget is WidgetType.CHART_TREEMAP:
    return Confidence.MEDIUM if "name" in keys and "value" in numbers else Confidence.LOW
  if mapping is None:
    return Confidence.LOW
  if widget is WidgetType.LIST:
    return Confidence.HIGH if len(profile.string_keys) == 1 else Confidence.MEDIUM

  # Charts: one value candidate and an unambiguous axis read as high.
  axis_candidates = profile.temporal if widget in {WidgetType.CHART_LINE, WidgetType.CHART_AREA} and profile.temporal else profile.label_candidates or profile.string_keys
  if widget is WidgetType.CHART_SCATTER and not profile.string_keys:
    return Confidence.HIGH if len(numbers) == 2 else Confidence.MEDIUM
  if widget is WidgetType.CHART_HEATMAP:
    return Confidence.HIGH if len(profile.string_keys) == 2 and len(numbers) == 1 else Confidence.MEDIUM
  if len(numbers) == 1 and len(axis_candidates) <= 1:
    return Confidence.HIGH
  return Confidence.MEDIUM


def _candidates(data: Any, profile: FieldProfile) -> list[tuple[WidgetType, str]]:
  """List candidate widgets for record data, each with a reason."""
  is_array = isinstance(data, list | tuple)
  keys = profile.keys
  strings = profile.string_keys
  numbers = profile.numeric
  candidates: list[tuple[WidgetType, str]] = []

  if not is_array and "value" in numbers:
    candidates.append((WidgetType.METRIC, 'Object data with a "value" key is ideal for a metric widget'))
    if {"min", "max"} & set(numbers):
      candidates.append((WidgetType.PROGRESS, 'Object with "value" and "min"/"max" fits a progress bar'))
    candidates.append((WidgetType.GAUGE, 'Object with "value" can display as a gauge'))
  if is_array and profile.temporal and numbers:
    candidates.append((WidgetType.CHART_LINE, "Date-like axis with numeric series suits a line chart"))
    candidates.append((WidgetType.CHART_AREA, "Date-like axis with numeric series suits an area chart"))
  if is_array and strings and numbers:
    candidates.append((WidgetType.CHART_BAR, "Category by value pattern detected"))
  if is_array and strings and len(numbers) >= 2:
    candidates.append((WidgetType.CHART_LINE, "Category by multiple values pattern detected"))
    candidates.append((WidgetType.CHART_RADAR, "Category by multiple values can display as a radar chart"))
  if is_array and strings and len(numbers) == 1:
    candidates.append((WidgetType.CHART_PIE, "Label and value pattern could work as proportions"))
    candidates.append((WidgetType.CHART_FUNNEL, "Label and value pattern can display as a funnel"))
  if is_array and len(numbers) >= 2 and not strings:
    candidates.append((WidgetType.CHART_SCATTER, "All-numeric data is ideal for a scatter plot"))
  if is_array and len(strings) >= 2 and numbers:
    candidates.append((WidgetType.CHART_HEATMAP, "Two categories by value suits a heatmap"))
  if is_array and len(numbers) >= 5:
    candidates.append((WidgetType.CHART_BOX, "Five or more numeric fields fit a box plot"))
  if is_array and strings and numbers:
    candidates.append((WidgetType.CHART_WATERFALL, "Category by value can display as a waterfall chart"))
    candidates.append((WidgetType.CHART_TREEMAP, "Category by value can display as a treemap"))
  if is_array and "label" in keys and "value" in keys:
    candidates.append((WidgetType.STAT_GROUP, 'Records with "label" and "value" keys match a stat group'))
  if len(keys) >= 2:
    candidates.append((WidgetType.TABLE, "Multi-field data renders well as a table"))
  if is_array and strings:
    candidates.append((WidgetType.LIST, "String fields can display as a list"))
  return candidates


def _suggest_for(widget: WidgetType, data: Any, profile: FieldProfile, reason: str | None = None) -> MappingSuggestion:
  mapping = infer_mapping(widget, data)
  confidence = _assess(widget, mapping, profile)
  if reason is None:
    reason = f"Inferred mapping for {widget.value}" if mapping else f"No mapping could be inferred for {widget.value} from this data shape"
  return MappingSuggestion(widget=widget, mapping=mapping, confidence=confidence, reason=reason)


def suggest_mapping(data: Any, widget: WidgetType | str | None = None) -> list[MappingSuggestion]:
  """
  Return candidate widgets and mappings for `data`, best first.

  Suggestions are ordered by confidence, keeping candidate order within a
  level; the type `infer` picks leads its confidence level. Passing
  `widget` restricts the result to that widget type.
  """
  constrained = resolve_widget_type(widget) if widget is not None else None
  if _is_empty(data):
    return []

  # Scalars and scalar lists only ever fit a metric or a list.
  if _is_scalar(data) or _is_scalar_list(data):
    target = WidgetType.LIST if _is_scalar_list(data) else WidgetType.METRIC
    mapping = {"primary": "value"} if target is WidgetType.LIST else None
    if constrained is not None and constrained is not target:
      return [MappingSuggestion(widget=constrained, mapping=None, confidence=Confidence.LOW, reason=f"Scalar data does not fit {constrained.value}")]
    reason = "Scalar values display as a list" if target is WidgetType.LIST else "A single value displays as a metric"
    return [MappingSuggestion(widget=target, mapping=mapping, confidence=Confidence.HIGH, reason=reason)]

  profile = _profile(data)
  if constrained is not None:
    return [_suggest_for(constrained, data, profile)]

  inferred = infer(data)
  suggestions = [_suggest_for(inferred, data, profile, reason=f"Best fit for the data shape ({inferred.value})")]
  seen = {inferred}
  for candidate, reason in _candidates(data, profile):
    if candidate in seen:
      continue
    seen.add(candidate)
    suggestions.append(_suggest_for(candidate, data, profile, reason=reason))

  # sorted() is stable, so candidate order survives within a level.
  return sorted(suggestions, key=lambda suggestion: suggestion.confidence.rank)


def _shape_data(widget: WidgetType, data: Any) -> Any:
  """Reshape `data` into what `widget` expects."""
  if _is_scalar(data):
    return {"value": data}
  if _is_scalar_list(data):
    return [{"value": item} for item in data]
  if isinstance(data, Mapping) and widget in ARRAY_DATA_WIDGETS:
    return [dict(data)]
  return data


def auto_spec(data: Any) -> WidgetSpec | None:
  """Build a normalized spec from the top-ranked suggestion for `data`, or None for empty data."""
  suggestions = suggest_mapping(data)
  if not suggestions:
    return None

  top = suggestions[0]
  spec: dict[str, Any] = {"widget": top.widget.value, "data": _shape_data(top.widget, data)}
  if top.mapping:
    spec["mapping"] = top.mapping
  logger.debug("Auto spec widget=%s confidence=%s", top.widget.value, top.confidence.value)
  return normalize(spec)
