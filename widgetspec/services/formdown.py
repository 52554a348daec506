"""Formdown markup parsing behind a swappable parser slot."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from widgetspec.schema.widget_models import ACTION_STYLES, FIELD_TYPES

logger = logging.getLogger(__name__)

# Field line: @name*{opt1,opt2}(Label): marker[attrs]
FIELD_RE = re.compile(r"^@(\w+)(\*)?(?:\{([^}]*)\})?(?:\(([^)]*)\))?\s*:\s*(.*)$")
# Action line: @[action "Label"] or @[action "Label" style]
ACTION_RE = re.compile(r'^@\[\s*(\w+)\s+"([^"]+)"(?:\s+(\w+))?\s*\]$')
# Type marker: optional prefix, optional row count, bracketed attributes.
MARKER_RE = re.compile(r"^([T@#?%&dts]|dt|c|r|ms|R|\^)?(\d*)?\[([^\]]*)\]$")

MARKER_TYPES = {
  "": "text",
  "@": "email",
  "#": "number",
  "?": "password",
  "%": "tel",
  "&": "url",
  "d": "date",
  "dt": "datetime",
  "t": "time",
  "s": "select",
  "r": "radio",
  "c": "checkbox",
  "^": "toggle",
  "R": "range",
  "ms": "multiselect",
}

EXTERNAL_TYPE_ALIASES = {"datetime-local": "datetime"}


class FormdownParser(Protocol):
  """Capability contract of a formdown parser (e.g. a FormManager)."""

  def parse(self, text: str) -> Any:
    """Parse markup and keep the result as parser state."""

  def set_defaults(self, data: Mapping[str, Any]) -> None:
    """Apply default values keyed by field name."""

  def get_input_fields(self) -> list[Any]:
    """Return parsed input fields (mappings or objects with `name`, `type`, ...)."""

  def get_actions(self) -> list[Any]:
    """Return parsed actions (mappings or objects with `name`, `label`)."""


@dataclass(frozen=True)
class FormdownResult:
  """Fields and actions in the plain-dict shape accepted by `normalize`."""

  fields: list[dict[str, Any]] = field(default_factory=list)
  actions: list[dict[str, Any]] = field(default_factory=list)


class MinimalFormdownParser:
  """Built-in parser covering field and action lines."""

  def __init__(self) -> None:
    self._fields: list[dict[str, Any]] = []
    self._actions: list[dict[str, Any]] = []

  def parse(self, text: str) -> None:
    self._fields = []
    self._actions = []
    for raw_line in text.splitlines():
      line = raw_line.strip()
      if not line:
        continue

      action_match = ACTION_RE.match(line)
      if action_match:
        name, label, style = action_match.groups()
        action: dict[str, Any] = {"name": name, "label": label}
        if style:
          action["style"] = style
        self._actions.append(action)
        continue

      field_match = FIELD_RE.match(line)
      if not field_match:
        logger.debug("Skipping unrecognized formdown line=%s", line)
        continue
      self._fields.append(self._parse_field(*field_match.groups()))

  def _parse_field(self, name: str, required: str | None, options: str | None, label: str | None, marker: str) -> dict[str, Any]:
    item: dict[str, Any] = {"name": name, "type": "text", "attributes": {}}
    if label:
      item["label"] = label
    if required:
      item["required"] = True
    if options:
      item["options"] = [option.strip() for option in options.split(",")]

    marker_match = MARKER_RE.match(marker.strip())
    if not marker_match:
      return item

    prefix, count, attrs = marker_match.groups()
    prefix = prefix or ""
    if prefix == "T":
      item["type"] = "textarea"
      if count:
        item["attributes"]["rows"] = count
    else:
      item["type"] = MARKER_TYPES.get(prefix, "text")

    # Inline attributes: min=1, max=5, placeholder=Your name
    for part in (attrs or "").split(","):
      key, sep, value = part.partition("=")
      if sep and key.strip():
        item["attributes"][key.strip()] = value.strip()
    return item

  def set_defaults(self, data: Mapping[str, Any]) -> None:
    for item in self._fields:
      if item["name"] in data:
        item["attributes"]["value"] = data[item["name"]]

  def get_input_fields(self) -> list[dict[str, Any]]:
    return [dict(item, attributes=dict(item["attributes"])) for item in self._fields]

  def get_actions(self) -> list[dict[str, Any]]:
    return [dict(action) for action in self._actions]


class _ParserRegistry:
  """Single slot holding the active parser; empty means built-in."""

  def __init__(self) -> None:
    self._parser: FormdownParser | None = None

  def register(self, parser: FormdownParser | None) -> None:
    if parser is None:
      logger.debug("Formdown parser unregistered")
    else:
      logger.debug("Formdown parser registered type=%s", type(parser).__name__)
    self._parser = parser

  def resolve(self) -> FormdownParser:
    if self._parser is None:
      return MinimalFormdownParser()
    return self._parser


_registry = _ParserRegistry()


def register_formdown_parser(parser: FormdownParser | None) -> None:
  """Install `parser` as the active formdown parser; None restores the built-in one."""
  _registry.register(parser)


def get_formdown_parser() -> FormdownParser:
  return _registry.resolve()


def reset_formdown_parser() -> None:
  _registry.register(None)


def _read(item: Any, key: str) -> Any:
  if isinstance(item, Mapping):
    return item.get(key)
  return getattr(item, key, None)


def _number_or_text(value: Any) -> Any:
  if isinstance(value, int | float) and not isinstance(value, bool):
    return value
  text = str(value).strip()
  try:
    return int(text)
  except ValueError:
    pass
  try:
    return float(text)
  except ValueError:
    return text


def _as_int(value: Any) -> int | None:
  number = _number_or_text(value)
  if isinstance(number, int):
    return number
  if isinstance(number, float) and number.is_integer():
    return int(number)
  return None


def _is_positive_number(value: Any) -> bool:
  return isinstance(value, int | float) and not isinstance(value, bool) and value > 0


def map_field_type(field_type: Any) -> str:
  """Map an external parser's field type onto the closed field-type set."""
  if not isinstance(field_type, str):
    return "text"
  field_type = EXTERNAL_TYPE_ALIASES.get(field_type, field_type)
  return field_type if field_type in FIELD_TYPES else "text"


def map_fields(items: Iterable[Any]) -> list[dict[str, Any]]:
  """Convert parser fields into field definition dicts."""
  fields: list[dict[str, Any]] = []
  for item in items:
    definition: dict[str, Any] = {"name": _read(item, "name"), "type": map_field_type(_read(item, "type"))}
    for key in ("label", "placeholder"):
      if _read(item, key):
        definition[key] = _read(item, key)
    if _read(item, "required"):
      definition["required"] = True
    options = _read(item, "options")
    if options:
      definition["options"] = [str(option) for option in options]

    extra: dict[str, Any] = {}
    for key, value in dict(_read(item, "attributes") or {}).items():
      if value is None:
        continue
      if key in {"min", "max"}:
        definition[key] = _number_or_text(value)
      elif key == "step" and _is_positive_number(_number_or_text(value)):
        definition["step"] = _number_or_text(value)
      elif key == "rows" and (_as_int(value) or 0) >= 1:
        definition["rows"] = _as_int(value)
      elif key in {"maxlength", "minlength"} and _as_int(value) is not None and _as_int(value) >= 0:
        definition[{"maxlength": "maxLength", "minlength": "minLength"}[key]] = _as_int(value)
      elif key in {"placeholder", "pattern"}:
        definition.setdefault(key, str(value))
      else:
        extra[key] = value
    if extra:
      definition["attributes"] = extra
    fields.append(definition)
  return fields


def map_actions(items: Iterable[Any]) -> list[dict[str, Any]]:
  """Convert parser actions into action dicts; `reset` becomes `cancel`."""
  actions: list[dict[str, Any]] = []
  for item in items:
    name = _read(item, "name")
    action: dict[str, Any] = {"action": "cancel" if name == "reset" else name, "label": _read(item, "label") or name}
    style = _read(item, "style")
    if style in ACTION_STYLES:
      action["style"] = style
    elif name == "submit":
      action["style"] = "primary"
    elif name in {"reset", "cancel"}:
      action["style"] = "default"
    actions.append(action)
  return actions


def parse_formdown(text: str, data: Mapping[str, Any] | None = None) -> FormdownResult:
  """Parse formdown markup with the active parser."""
  parser = get_formdown_parser()
  parser.parse(text)
  if data:
    parser.set_defaults(data)
  return FormdownResult(fields=map_fields(parser.get_input_fields()), actions=map_actions(parser.get_actions()))
