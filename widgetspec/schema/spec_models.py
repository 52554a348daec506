"""Input-side widget spec models with strict validation."""

from __future__ import annotations

import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, field_validator, model_validator

from widgetspec.schema.widget_models import FORMAT_KINDS

FieldTypeLiteral = Literal["text", "email", "password", "tel", "url", "textarea", "number", "select", "multiselect", "date", "datetime", "time", "toggle", "range", "radio", "checkbox"]


def _is_number(value: Any) -> bool:
  return isinstance(value, int | float) and not isinstance(value, bool) and math.isfinite(value)


def _alias_legacy_key(data: Any, target: str) -> Any:
  """Copy the legacy `field` key into `target` when only the legacy key is present."""
  if isinstance(data, dict) and target not in data and "field" in data:
    data = dict(data)
    data[target] = data.pop("field")
  return data


class SpecBaseModel(BaseModel):
  """Base model tolerating unknown keys for forward compatibility."""

  model_config = ConfigDict(extra="allow", populate_by_name=True)


class ColumnModel(SpecBaseModel):
  """Table or list column definition."""

  key: StrictStr = Field(min_length=1)
  label: StrictStr | None = None
  format: StrictStr | None = None
  align: Literal["left", "center", "right"] | None = None

  @model_validator(mode="before")
  @classmethod
  def accept_legacy_field_key(cls, data: Any) -> Any:
    return _alias_legacy_key(data, "key")

  @field_validator("format")
  @classmethod
  def validate_format_kind(cls, value: str | None) -> str | None:
    if value is None:
      return value
    kind = value.split(":", 1)[0]
    if kind not in FORMAT_KINDS:
      raise ValueError(f"format must be one of: {', '.join(FORMAT_KINDS)}")
    return value


class FieldModel(SpecBaseModel):
  """Form field definition."""

  name: StrictStr = Field(min_length=1)
  type: FieldTypeLiteral = "text"
  label: StrictStr | None = None
  required: StrictBool | None = None
  placeholder: StrictStr | None = None
  options: list[StrictStr] | None = None
  message: StrictStr | None = None
  attributes: dict[str, Any] | None = None
  min_length: StrictInt | None = Field(default=None, alias="minLength", ge=0)
  max_length: StrictInt | None = Field(default=None, alias="maxLength", ge=0)
  pattern: StrictStr | None = None
  rows: StrictInt | None = Field(default=None, ge=1)
  min: Any = None
  max: Any = None
  step: Any = None

  @model_validator(mode="before")
  @classmethod
  def accept_legacy_field_key(cls, data: Any) -> Any:
    return _alias_legacy_key(data, "name")

  @field_validator("min", "max")
  @classmethod
  def validate_bound(cls, value: Any) -> Any:
    if value is None or _is_number(value) or isinstance(value, str):
      return value
    raise ValueError("bound must be a number or a string")

  @field_validator("step")
  @classmethod
  def validate_step(cls, value: Any) -> Any:
    if value is None or (_is_number(value) and value > 0):
      return value
    raise ValueError("step must be a positive number")


class ActionModel(SpecBaseModel):
  """Button or link attached to a widget."""

  label: StrictStr
  action: StrictStr
  style: Literal["primary", "danger", "default"] = "default"
  disabled: StrictBool | None = None
  url: StrictStr | None = None


class MappingModel(SpecBaseModel):
  """Role to data-key assignments, plus the deprecated nested fields/columns."""

  x: StrictStr | None = None
  y: list[StrictStr] | None = None
  label: StrictStr | None = None
  value: StrictStr | None = None
  color: StrictStr | None = None
  size: StrictStr | None = None
  axis: StrictStr | None = None
  primary: StrictStr | None = None
  secondary: StrictStr | None = None
  icon: StrictStr | None = None
  avatar: StrictStr | None = None
  trailing: StrictStr | None = None
  badge: StrictStr | None = None
  fields: list[FieldModel] | None = None
  columns: list[ColumnModel] | None = None

  @field_validator("y", mode="before")
  @classmethod
  def wrap_single_series(cls, value: Any) -> Any:
    if isinstance(value, str):
      return [value]
    return value


class WidgetSpecModel(SpecBaseModel):
  """Structural contract of an author-supplied widget spec."""

  widget: StrictStr = Field(min_length=1)
  id: StrictStr | None = None
  title: StrictStr | None = None
  description: StrictStr | None = None
  data: Any = None
  mapping: MappingModel | None = None
  fields: list[FieldModel] | None = None
  formdown: StrictStr | None = None
  columns: list[ColumnModel] | None = None
  actions: list[ActionModel] | None = None
  children: list[WidgetSpecModel] | None = None
  layout: Literal["stack", "row", "grid"] | None = None
  options: dict[str, Any] | None = None
  span: StrictInt | None = Field(default=None, ge=1)
  type: Literal["u-widget"] | None = None
  version: StrictStr | None = None

  @model_validator(mode="before")
  @classmethod
  def lift_compose_column_count(cls, data: Any) -> Any:
    """Move a compose grid's numeric `columns` into `options.columns`."""
    if not isinstance(data, dict) or data.get("widget") != "compose":
      return data
    columns = data.get("columns")
    if isinstance(columns, int) and not isinstance(columns, bool):
      data = dict(data)
      options = data.get("options")
      options = dict(options) if isinstance(options, dict) else {}
      options.setdefault("columns", data.pop("columns"))
      data["options"] = options
    return data

  @field_validator("mapping", mode="before")
  @classmethod
  def expand_bare_mapping(cls, value: Any) -> Any:
    # The target role depends on the widget; the rules pass resolves it.
    if isinstance(value, str):
      return {"value": value}
    return value
