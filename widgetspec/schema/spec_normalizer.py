"""Normalization of author-supplied widget specs into canonical structs."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping as MappingABC
from typing import Any

import msgspec

from widgetspec.schema.errors import MalformedSpecError, UnrecognizedWidgetError
from widgetspec.schema.widget_models import MAPPING_ROLES, Mapping, WidgetSpec, WidgetType, is_known_widget, primary_mapping_role
from widgetspec.services.formdown import parse_formdown
from widgetspec.services.suggest import suggest_widget

logger = logging.getLogger(__name__)

SPEC_KEYS = frozenset({"widget", "id", "title", "description", "data", "mapping", "fields", "formdown", "columns", "actions", "children", "layout", "options", "span", "type", "version"})
_PASSTHROUGH_KEYS = ("id", "title", "description", "span", "version")
_CAMEL_FIELD_KEYS = {"min_length": "minLength", "max_length": "maxLength"}


def _to_plain(value: Any) -> Any:
  """Return a detached, JSON-compatible copy of `value`."""
  try:
    return msgspec.to_builtins(value)
  except TypeError:
    logger.debug("Falling back to deepcopy for value type=%s", type(value).__name__)
    return copy.deepcopy(value)


def _resolve_widget(raw: Any, path: str) -> WidgetType:
  if isinstance(raw, WidgetType):
    return raw
  if is_known_widget(raw):
    return WidgetType(raw)
  if not isinstance(raw, str) or not raw:
    raise MalformedSpecError("Spec requires a non-empty 'widget' string.", path=path)

  suggestion = suggest_widget(raw)
  logger.warning("Unknown widget type=%s suggestion=%s path=%s", raw, suggestion, path)
  raise UnrecognizedWidgetError(raw, suggestion=suggestion, path=path)


def normalize_mapping(mapping: Any, widget: WidgetType | str | None = None) -> Mapping:
  """
  Expand a mapping into its canonical struct.

  A bare string targets the widget's primary role, `y` always becomes a
  tuple, and the deprecated nested `fields`/`columns` keys are ignored here.
  """
  if mapping is None:
    return Mapping()
  if isinstance(mapping, Mapping):
    return mapping
  if isinstance(mapping, str):
    widget_type = WidgetType(widget) if is_known_widget(widget) or isinstance(widget, WidgetType) else None
    role = primary_mapping_role(widget_type) if widget_type is not None else "value"
    mapping = {role: mapping}
  if not isinstance(mapping, MappingABC):
    raise MalformedSpecError("Mapping must be an object or a string.", path="mapping")

  roles: dict[str, Any] = {}
  for role in MAPPING_ROLES:
    value = mapping.get(role)
    if value is None:
      continue
    if role == "y":
      value = (value,) if isinstance(value, str) else tuple(value)
    roles[role] = value

  try:
    return msgspec.convert(roles, Mapping)
  except msgspec.ValidationError as exc:
    raise MalformedSpecError(f"Invalid mapping: {exc}", path="mapping") from exc


def _normalize_field(item: Any) -> Any:
  if not isinstance(item, MappingABC):
    return item
  field = dict(item)
  if "name" not in field and "field" in field:
    field["name"] = field.pop("field")
  for snake, camel in _CAMEL_FIELD_KEYS.items():
    if snake in field and camel not in field:
      field[camel] = field.pop(snake)
  field.setdefault("type", "text")
  return _to_plain(field)


def _normalize_column(item: Any) -> Any:
  if not isinstance(item, MappingABC):
    return item
  column = dict(item)
  if "key" not in column and "field" in column:
    column["key"] = column.pop("field")
  return column


def _normalize_action(item: Any) -> Any:
  if not isinstance(item, MappingABC):
    return item
  action = dict(item)
  if action.get("style") is None:
    action["style"] = "default"
  return action


def _normalize_payload(spec: MappingABC[str, Any], prefix: str) -> dict[str, Any]:
  widget = _resolve_widget(spec.get("widget"), f"{prefix}widget")
  ignored = sorted(str(key) for key in spec if key not in SPEC_KEYS)
  if ignored:
    logger.debug("Dropping unknown widget keys widget=%s keys=%s", widget.value, ignored)

  result: dict[str, Any] = {"widget": widget.value}
  for key in _PASSTHROUGH_KEYS:
    if spec.get(key) is not None:
      result[key] = spec[key]
  if spec.get("data") is not None:
    result["data"] = _to_plain(spec["data"])

  options = dict(spec["options"]) if isinstance(spec.get("options"), MappingABC) else None
  fields = spec.get("fields")
  columns = spec.get("columns")
  actions = spec.get("actions")
  raw_mapping = spec.get("mapping")

  # Deprecated nested mapping.fields / mapping.columns move to the top level.
  if isinstance(raw_mapping, MappingABC):
    if fields is None and raw_mapping.get("fields") is not None:
      fields = raw_mapping["fields"]
    if columns is None and raw_mapping.get("columns") is not None:
      columns = raw_mapping["columns"]

  # A compose grid may carry its column count as a bare integer.
  if widget is WidgetType.COMPOSE and isinstance(columns, int) and not isinstance(columns, bool):
    options = options or {}
    options.setdefault("columns", columns)
    columns = None

  formdown = spec.get("formdown")
  if fields is None and isinstance(formdown, str) and formdown.strip():
    data = spec.get("data")
    parsed = parse_formdown(formdown, data if isinstance(data, MappingABC) else None)
    fields = parsed.fields
    if actions is None and parsed.actions:
      actions = parsed.actions

  mapping = normalize_mapping(raw_mapping, widget)
  if mapping.roles():
    result["mapping"] = msgspec.to_builtins(mapping)
  if fields is not None:
    result["fields"] = [_normalize_field(item) for item in fields]
  if columns is not None:
    result["columns"] = [_normalize_column(item) for item in columns]
  if actions is not None:
    result["actions"] = [_normalize_action(item) for item in actions]
  if options is not None:
    result["options"] = _to_plain(options)

  children = spec.get("children")
  if children is not None:
    if not isinstance(children, list | tuple):
      raise MalformedSpecError("'children' must be a list of widget specs.", path=f"{prefix}children")
    normalized_children = []
    for index, child in enumerate(children):
      child_path = f"{prefix}children[{index}]"
      if isinstance(child, WidgetSpec):
        child = child.to_dict()
      if not isinstance(child, MappingABC):
        raise MalformedSpecError("Child spec must be a mapping.", path=child_path)
      normalized_children.append(_normalize_payload(child, f"{child_path}."))
    result["children"] = normalized_children

  layout = spec.get("layout")
  if widget is WidgetType.COMPOSE:
    result["layout"] = layout or "stack"
  elif layout is not None:
    result["layout"] = layout
  return result


def normalize(spec: Any) -> WidgetSpec:
  """
  Return the canonical `WidgetSpec` for an author-supplied spec.

  Defaults are filled and shorthand is expanded; structurally broken input is
  not repaired. Raises `MalformedSpecError` for input that cannot form a spec
  and `UnrecognizedWidgetError` for unknown widget types.
  """
  if isinstance(spec, WidgetSpec):
    spec = spec.to_dict()
  if not isinstance(spec, MappingABC):
    raise MalformedSpecError("Spec must be a non-null object.")

  payload = _normalize_payload(spec, "")
  try:
    return msgspec.convert(payload, WidgetSpec)
  except msgspec.ValidationError as exc:
    raise MalformedSpecError(f"Invalid widget spec: {exc}") from exc
