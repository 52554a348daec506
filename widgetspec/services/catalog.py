"""Widget catalog, starter templates and event contracts."""

from __future__ import annotations

import copy
from dataclasses import asdict, dataclass, field
from typing import Any

from widgetspec.schema.widget_models import WIDGET_CATEGORIES, DataShape, WidgetCategory, WidgetType, resolve_widget_type


@dataclass(frozen=True)
class WidgetInfo:
  """Catalog entry describing one widget type."""

  widget: str
  category: WidgetCategory
  description: str
  mapping_keys: tuple[str, ...]
  data_shape: DataShape

  def to_dict(self) -> dict[str, Any]:
    payload = asdict(self)
    payload["mapping_keys"] = list(self.mapping_keys)
    return payload


@dataclass(frozen=True)
class WidgetDetail:
  """Full description returned for an exact widget lookup."""

  info: WidgetInfo
  auto_inference: str
  mapping_docs: dict[str, str]
  events: tuple[str, ...]
  examples: list[dict[str, Any]] = field(default_factory=list)
  field_docs: dict[str, str] | None = None

  def to_dict(self) -> dict[str, Any]:
    payload = self.info.to_dict()
    payload.update({"auto_inference": self.auto_inference, "mapping_docs": dict(self.mapping_docs), "events": list(self.events), "examples": copy.deepcopy(self.examples)})
    if self.field_docs is not None:
      payload["field_docs"] = dict(self.field_docs)
    return payload


MAPPING_DOCS = {
  "x": "X-axis / category field",
  "y": "Y-axis value field(s)",
  "label": "Label field (pie/funnel)",
  "value": "Value field (pie/funnel/heatmap)",
  "color": "Color grouping field (scatter)",
  "size": "Size encoding field (scatter bubble)",
  "axis": "Axis field (radar indicators)",
  "columns": "Column definitions (table)",
  "primary": "Primary text field (list)",
  "secondary": "Secondary text field (list)",
  "icon": "Icon letter field (list)",
  "avatar": "Avatar image URL field (list)",
  "trailing": "Trailing value field (list)",
  "badge": "Badge/tag field (list)",
}

FIELD_DOCS = {
  "name": "Key name in submitted data",
  "label": "Display label",
  "type": "Input type",
  "required": "Must be filled before submit",
  "placeholder": "Placeholder text",
  "options": "Choices for select/radio/multiselect",
  "minLength": "Minimum character length",
  "maxLength": "Maximum character length",
  "pattern": "Custom regex pattern",
  "rows": "Textarea visible rows",
  "min": "Minimum value",
  "max": "Maximum value",
  "step": "Number/range step increment",
  "message": "Custom validation error message",
}

_ENTRIES: tuple[tuple[WidgetType, str, tuple[str, ...], DataShape, str], ...] = (
  (WidgetType.CHART_BAR, "Bar chart for category by value comparison", ("x", "y"), "array", "mapping omittable. First string to x, number fields to y."),
  (WidgetType.CHART_LINE, "Line chart for trends over a category axis", ("x", "y"), "array", "mapping omittable. Date-like field preferred for x, numbers to y."),
  (WidgetType.CHART_AREA, "Area chart (filled line chart)", ("x", "y"), "array", "mapping omittable. Same as line."),
  (WidgetType.CHART_PIE, "Pie or donut chart for proportions", ("label", "value"), "array", "mapping omittable. First string to label, first number to value."),
  (WidgetType.CHART_SCATTER, "Scatter plot for two numeric dimensions", ("x", "y", "color", "size"), "array", "mapping omittable. First two numbers to x, y."),
  (WidgetType.CHART_RADAR, "Radar chart for multi-axis comparison", ("axis", "value"), "array", "mapping omittable. First string to axis, first number to value."),
  (WidgetType.CHART_HEATMAP, "Heatmap for matrix data visualization", ("x", "y", "value"), "array", "mapping recommended. x, y (categories), value (intensity)."),
  (WidgetType.CHART_BOX, "Box plot for statistical distribution", ("x", "y"), "array", "mapping recommended. x (group), y mapped to [min, q1, median, q3, max]."),
  (WidgetType.CHART_FUNNEL, "Funnel chart for sequential stages", ("label", "value"), "array", "mapping omittable. First string to label, first number to value."),
  (WidgetType.CHART_WATERFALL, "Waterfall chart for cumulative values", ("x", "y"), "array", "mapping omittable. First string to x, numbers to y."),
  (WidgetType.CHART_TREEMAP, "Treemap for hierarchical data", (), "array", "No mapping. data is [{name, value, children?}]."),
  (WidgetType.METRIC, "Single KPI value with optional trend", (), "object", "No mapping needed. data is {value, label?, unit?, change?, trend?}."),
  (WidgetType.STAT_GROUP, "Multiple KPI values in a row", (), "array", "No mapping needed. data is [{label, value, ...}]."),
  (WidgetType.GAUGE, "Arc gauge for a value within a range", (), "object", "No mapping needed. data is {value}. Set min/max/unit in options."),
  (WidgetType.PROGRESS, "Progress bar for a value within a range", (), "object", "No mapping needed. data is {value, max?}."),
  (WidgetType.TABLE, "Sortable data table with auto-inferred columns", ("columns",), "array", "columns omittable; inferred from data keys."),
  (WidgetType.LIST, "Structured list with avatars and trailing values", ("primary", "secondary", "avatar", "icon", "trailing", "badge"), "array", "mapping omittable when data has string fields."),
  (WidgetType.FORM, "Data entry form with typed fields", (), "object", "Uses fields[] or formdown, not mapping. data provides defaults."),
  (WidgetType.CONFIRM, "Yes/no confirmation dialog", (), "object", "Uses title, description, actions. data is optional."),
  (WidgetType.COMPOSE, "Combine multiple widgets with layout hints", (), "none", "Uses children[] and layout. Each child is a widget spec."),
  (WidgetType.MARKDOWN, "Render markdown text", (), "object", 'No mapping. data is {content: "markdown string"}.'),
  (WidgetType.IMAGE, "Display an image", (), "object", "No mapping. data is {src, alt?, caption?}."),
  (WidgetType.CALLOUT, "Callout/alert banner", (), "object", "No mapping. data is {message, title?, level?}."),
)

CATALOG: tuple[WidgetInfo, ...] = tuple(WidgetInfo(widget=widget.value, category=WIDGET_CATEGORIES[widget], description=description, mapping_keys=keys, data_shape=shape) for widget, description, keys, shape, _ in _ENTRIES)
_AUTO_INFERENCE = {widget.value: hint for widget, _, _, _, hint in _ENTRIES}

TEMPLATES: dict[str, dict[str, Any]] = {
  "chart.bar": {"widget": "chart.bar", "data": [{"category": "A", "value": 30}, {"category": "B", "value": 70}, {"category": "C", "value": 45}], "mapping": {"x": "category", "y": "value"}},
  "chart.line": {"widget": "chart.line", "data": [{"month": "Jan", "value": 100}, {"month": "Feb", "value": 120}, {"month": "Mar", "value": 90}], "mapping": {"x": "month", "y": "value"}},
  "chart.area": {"widget": "chart.area", "data": [{"month": "Jan", "value": 100}, {"month": "Feb", "value": 120}, {"month": "Mar", "value": 90}], "mapping": {"x": "month", "y": "value"}},
  "chart.pie": {"widget": "chart.pie", "data": [{"name": "A", "value": 40}, {"name": "B", "value": 35}, {"name": "C", "value": 25}], "mapping": {"label": "name", "value": "value"}},
  "chart.scatter": {"widget": "chart.scatter", "data": [{"x": 10, "y": 20}, {"x": 30, "y": 40}, {"x": 50, "y": 15}], "mapping": {"x": "x", "y": "y"}},
  "chart.radar": {"widget": "chart.radar", "data": [{"axis": "Speed", "value": 80}, {"axis": "Power", "value": 90}, {"axis": "Defense", "value": 60}], "mapping": {"axis": "axis", "value": "value"}},
  "chart.heatmap": {
    "widget": "chart.heatmap",
    "data": [{"x": "Mon", "y": "Morning", "value": 10}, {"x": "Mon", "y": "Afternoon", "value": 20}, {"x": "Tue", "y": "Morning", "value": 15}, {"x": "Tue", "y": "Afternoon", "value": 25}],
    "mapping": {"x": "x", "y": "y", "value": "value"},
  },
  "chart.box": {"widget": "chart.box", "data": [{"group": "A", "min": 10, "q1": 25, "median": 50, "q3": 75, "max": 90}], "mapping": {"x": "group", "y": ["min", "q1", "median", "q3", "max"]}},
  "chart.funnel": {"widget": "chart.funnel", "data": [{"stage": "Visit", "count": 1000}, {"stage": "Click", "count": 600}, {"stage": "Purchase", "count": 200}], "mapping": {"label": "stage", "value": "count"}},
  "chart.waterfall": {"widget": "chart.waterfall", "data": [{"item": "Revenue", "amount": 500}, {"item": "Cost", "amount": -200}, {"item": "Tax", "amount": -50}], "mapping": {"x": "item", "y": "amount"}},
  "chart.treemap": {"widget": "chart.treemap", "data": [{"name": "Group A", "value": 100}, {"name": "Group B", "value": 80}]},
  "metric": {"widget": "metric", "data": {"value": 1284, "unit": "users", "change": 12.5, "trend": "up"}},
  "stat-group": {"widget": "stat-group", "data": [{"label": "Users", "value": 1284}, {"label": "Revenue", "value": 42000, "suffix": "$"}]},
  "gauge": {"widget": "gauge", "data": {"value": 73}, "options": {"min": 0, "max": 100, "unit": "%"}},
  "progress": {"widget": "progress", "data": {"value": 65}, "options": {"min": 0, "max": 100, "unit": "%"}},
  "table": {"widget": "table", "data": [{"name": "Alice", "role": "Engineer", "status": "Active"}, {"name": "Bob", "role": "Designer", "status": "Away"}]},
  "list": {"widget": "list", "data": [{"name": "Alice", "role": "Engineer"}, {"name": "Bob", "role": "Designer"}], "mapping": {"primary": "name", "secondary": "role"}},
  "form": {
    "widget": "form",
    "fields": [{"name": "name", "label": "Name", "type": "text", "required": True}, {"name": "email", "label": "Email", "type": "email"}],
    "actions": [{"label": "Submit", "action": "submit", "style": "primary"}],
  },
  "confirm": {
    "widget": "confirm",
    "title": "Are you sure?",
    "description": "This action cannot be undone.",
    "actions": [{"label": "Confirm", "action": "submit", "style": "danger"}, {"label": "Cancel", "action": "cancel"}],
  },
  "compose": {"widget": "compose", "layout": "grid", "children": [{"widget": "metric", "data": {"value": 42, "unit": "items"}}, {"widget": "metric", "data": {"value": 95, "unit": "%"}}]},
  "markdown": {"widget": "markdown", "data": {"content": "# Hello\n\nThis is **markdown** content."}},
  "image": {"widget": "image", "data": {"src": "https://placehold.co/300x200", "alt": "Placeholder image"}},
  "callout": {"widget": "callout", "data": {"message": "This is an informational callout.", "level": "info"}},
}

WIDGET_EVENTS: dict[str, tuple[str, ...]] = {
  "chart": ("select",),
  "table": ("select",),
  "list": ("select",),
  "form": ("submit", "change", "action"),
  "confirm": ("submit", "action"),
}


def get_widget_events(widget: str) -> tuple[str, ...]:
  """Return the event types a widget emits; `chart.*` resolves to `chart`."""
  return WIDGET_EVENTS.get(widget) or WIDGET_EVENTS.get(widget.split(".", 1)[0], ())


def template(widget: WidgetType | str) -> dict[str, Any]:
  """Return a minimal valid starter spec for `widget`."""
  widget_type = resolve_widget_type(widget)
  return copy.deepcopy(TEMPLATES[widget_type.value])


def widget_detail(widget: WidgetType | str) -> WidgetDetail:
  widget_type = resolve_widget_type(widget)
  info = next(entry for entry in CATALOG if entry.widget == widget_type.value)
  is_input = widget_type in {WidgetType.FORM, WidgetType.CONFIRM}
  return WidgetDetail(
    info=info,
    auto_inference=_AUTO_INFERENCE[info.widget],
    mapping_docs={key: MAPPING_DOCS[key] for key in info.mapping_keys if key in MAPPING_DOCS},
    events=get_widget_events(info.widget),
    examples=[{"label": "Minimal", "spec": template(widget_type)}],
    field_docs=dict(FIELD_DOCS) if is_input else None,
  )


def help_widgets(query: str | None = None) -> list[WidgetInfo] | WidgetDetail:
  """
  Look up the catalog.

  No query lists every widget, an exact widget name returns its detail, and
  otherwise entries are filtered by category, then by widget-name prefix.
  """
  if not query:
    return list(CATALOG)
  if any(entry.widget == query for entry in CATALOG):
    return widget_detail(query)

  by_category = [entry for entry in CATALOG if entry.category == query]
  if by_category:
    return by_category
  return [entry for entry in CATALOG if entry.widget.startswith(query)]
