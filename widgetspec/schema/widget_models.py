"""Canonical widget spec structures produced by the normalizer."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, get_args

import msgspec

from widgetspec.schema.errors import UnrecognizedWidgetError


class WidgetType(str, Enum):
  """Closed set of widget identifiers, in canonical order."""

  CHART_BAR = "chart.bar"
  CHART_LINE = "chart.line"
  CHART_AREA = "chart.area"
  CHART_PIE = "chart.pie"
  CHART_SCATTER = "chart.scatter"
  CHART_RADAR = "chart.radar"
  CHART_HEATMAP = "chart.heatmap"
  CHART_BOX = "chart.box"
  CHART_FUNNEL = "chart.funnel"
  CHART_WATERFALL = "chart.waterfall"
  CHART_TREEMAP = "chart.treemap"
  METRIC = "metric"
  STAT_GROUP = "stat-group"
  GAUGE = "gauge"
  PROGRESS = "progress"
  TABLE = "table"
  LIST = "list"
  FORM = "form"
  CONFIRM = "confirm"
  COMPOSE = "compose"
  MARKDOWN = "markdown"
  IMAGE = "image"
  CALLOUT = "callout"

  @property
  def is_chart(self) -> bool:
    return self.value.startswith("chart.")


FieldType = Literal["text", "email", "password", "tel", "url", "textarea", "number", "select", "multiselect", "date", "datetime", "time", "toggle", "range", "radio", "checkbox"]
ActionStyle = Literal["primary", "danger", "default"]
ComposeLayout = Literal["stack", "row", "grid"]
ColumnAlign = Literal["left", "center", "right"]
FormatKind = Literal["number", "currency", "percent", "date", "datetime", "bytes"]
EventType = Literal["submit", "action", "change", "select"]
WidgetCategory = Literal["chart", "display", "data", "input", "content", "container"]
DataShape = Literal["object", "array", "none"]

KNOWN_WIDGETS: tuple[str, ...] = tuple(member.value for member in WidgetType)
FIELD_TYPES: tuple[str, ...] = get_args(FieldType)
ACTION_STYLES: tuple[str, ...] = get_args(ActionStyle)
COMPOSE_LAYOUTS: tuple[str, ...] = get_args(ComposeLayout)
COLUMN_ALIGNS: tuple[str, ...] = get_args(ColumnAlign)
FORMAT_KINDS: tuple[str, ...] = get_args(FormatKind)
CHOICE_FIELD_TYPES = frozenset({"select", "multiselect", "radio"})

SCALAR_MAPPING_ROLES: tuple[str, ...] = ("x", "label", "value", "color", "size", "axis", "primary", "secondary", "icon", "avatar", "trailing", "badge")
MAPPING_ROLES: tuple[str, ...] = ("x", "y", *SCALAR_MAPPING_ROLES[1:])

# Widgets whose `data` must be a list of records vs a single object.
ARRAY_DATA_WIDGETS = frozenset({WidgetType.STAT_GROUP, WidgetType.TABLE, WidgetType.LIST} | {member for member in WidgetType if member.is_chart})
OBJECT_DATA_WIDGETS = frozenset({WidgetType.METRIC, WidgetType.GAUGE, WidgetType.PROGRESS})

WIDGET_CATEGORIES: dict[WidgetType, WidgetCategory] = {
  **{member: "chart" for member in WidgetType if member.is_chart},
  WidgetType.METRIC: "display",
  WidgetType.STAT_GROUP: "display",
  WidgetType.GAUGE: "display",
  WidgetType.PROGRESS: "display",
  WidgetType.TABLE: "data",
  WidgetType.LIST: "data",
  WidgetType.FORM: "input",
  WidgetType.CONFIRM: "input",
  WidgetType.MARKDOWN: "content",
  WidgetType.IMAGE: "content",
  WidgetType.CALLOUT: "content",
  WidgetType.COMPOSE: "container",
}

_Y_PRIMARY_WIDGETS = frozenset({WidgetType.CHART_BAR, WidgetType.CHART_LINE, WidgetType.CHART_AREA, WidgetType.CHART_SCATTER, WidgetType.CHART_BOX, WidgetType.CHART_WATERFALL})


class Mapping(msgspec.Struct, frozen=True, omit_defaults=True):
  """Role to data-key assignments. `y` is always a tuple once normalized."""

  x: str | None = None
  y: tuple[str, ...] | None = None
  label: str | None = None
  value: str | None = None
  color: str | None = None
  size: str | None = None
  axis: str | None = None
  primary: str | None = None
  secondary: str | None = None
  icon: str | None = None
  avatar: str | None = None
  trailing: str | None = None
  badge: str | None = None

  def roles(self) -> dict[str, str | tuple[str, ...]]:
    """Return only the roles that are mapped."""
    return {role: getattr(self, role) for role in MAPPING_ROLES if getattr(self, role) is not None}


class ColumnDefinition(msgspec.Struct, frozen=True, omit_defaults=True):
  key: str
  label: str | None = None
  format: str | None = None
  align: ColumnAlign | None = None


class FieldDefinition(msgspec.Struct, frozen=True, omit_defaults=True, rename="camel"):
  """One input of a form widget."""

  name: str
  type: FieldType
  label: str | None = None
  required: bool | None = None
  placeholder: str | None = None
  options: tuple[str, ...] | None = None
  message: str | None = None
  attributes: dict[str, Any] | None = None
  min_length: int | None = None
  max_length: int | None = None
  pattern: str | None = None
  rows: int | None = None
  min: float | str | None = None
  max: float | str | None = None
  step: float | None = None


class Action(msgspec.Struct, frozen=True, omit_defaults=True):
  label: str
  action: str
  style: ActionStyle
  disabled: bool | None = None
  url: str | None = None


class WidgetEvent(msgspec.Struct, frozen=True, omit_defaults=True):
  """Declarative description of what a widget emits after interaction."""

  type: EventType
  widget: str
  id: str | None = None
  action: str | None = None
  data: dict[str, Any] | None = None


class WidgetSpec(msgspec.Struct, frozen=True, omit_defaults=True):
  """Canonical widget spec. Only `normalize` builds these."""

  widget: WidgetType
  id: str | None = None
  title: str | None = None
  description: str | None = None
  data: Any = None
  mapping: Mapping | None = None
  fields: tuple[FieldDefinition, ...] | None = None
  columns: tuple[ColumnDefinition, ...] | None = None
  actions: tuple[Action, ...] | None = None
  children: tuple[WidgetSpec, ...] | None = None
  layout: ComposeLayout | None = None
  options: dict[str, Any] | None = None
  span: int | None = None
  version: str | None = None

  def to_dict(self) -> dict[str, Any]:
    """Return the JSON-compatible form of the spec."""
    return msgspec.to_builtins(self)


def is_known_widget(widget: Any) -> bool:
  return isinstance(widget, str) and widget in KNOWN_WIDGETS


def resolve_widget_type(widget: Any) -> WidgetType:
  """Resolve a widget string to `WidgetType`, raising with a typo suggestion when unknown."""
  if isinstance(widget, WidgetType):
    return widget
  if is_known_widget(widget):
    return WidgetType(widget)

  from widgetspec.services.suggest import suggest_widget

  suggestion = suggest_widget(widget) if isinstance(widget, str) else None
  raise UnrecognizedWidgetError(widget, suggestion=suggestion)


def primary_mapping_role(widget: WidgetType) -> str:
  """Return the role a bare-string mapping expands into for this widget."""
  if widget in _Y_PRIMARY_WIDGETS:
    return "y"
  if widget is WidgetType.LIST:
    return "primary"
  return "value"


def expected_data_shape(widget: WidgetType) -> DataShape:
  if widget in ARRAY_DATA_WIDGETS:
    return "array"
  if widget in OBJECT_DATA_WIDGETS:
    return "object"
  return "none"
