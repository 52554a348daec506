"""
JSON Schema export for the widget spec contract.

The document is generated from the canonical msgspec structs and then widened
where author input is more permissive than the canonical form (bare-string
mappings, a single `y` series, optional field types and action styles).
"""

from __future__ import annotations

import copy
from functools import lru_cache
from typing import Any

import msgspec

from widgetspec.schema.widget_models import KNOWN_WIDGETS, WidgetSpec

SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"
_REF_TEMPLATE = "#/$defs/{name}"
_WIDGET_TYPE_REF = "#/$defs/widgetType"


def _rewrite_refs(node: Any, old: str, new: str) -> Any:
  """Point every `$ref` equal to `old` at `new`."""
  if isinstance(node, dict):
    return {key: (new if key == "$ref" and value == old else _rewrite_refs(value, old, new)) for key, value in node.items()}
  if isinstance(node, list):
    return [_rewrite_refs(item, old, new) for item in node]
  return node


def _drop_required(definition: dict[str, Any], name: str) -> None:
  required = [item for item in definition.get("required", []) if item != name]
  if required:
    definition["required"] = required
  else:
    definition.pop("required", None)


def _nullable(schema: dict[str, Any]) -> dict[str, Any]:
  return {"anyOf": [schema, {"type": "null"}], "default": None}


@lru_cache(maxsize=1)
def _build_schema() -> dict[str, Any]:
  generated = msgspec.json.schema(WidgetSpec, ref_template=_REF_TEMPLATE)
  defs: dict[str, Any] = generated.get("$defs", {})

  # Expose the widget enum under a stable name.
  defs.pop("WidgetType", None)
  defs = _rewrite_refs(defs, _REF_TEMPLATE.format(name="WidgetType"), _WIDGET_TYPE_REF)
  defs["widgetType"] = {"title": "widgetType", "type": "string", "enum": list(KNOWN_WIDGETS)}

  spec_def = defs["WidgetSpec"]
  spec_props = spec_def.setdefault("properties", {})
  spec_props["formdown"] = _nullable({"type": "string"})
  spec_props["type"] = _nullable({"enum": ["u-widget"]})
  spec_props["mapping"] = {"anyOf": [{"$ref": _REF_TEMPLATE.format(name="Mapping")}, {"type": "string"}, {"type": "null"}], "default": None}

  mapping_props = defs["Mapping"].setdefault("properties", {})
  mapping_props["y"] = {"anyOf": [{"type": "string"}, {"type": "array", "items": {"type": "string"}}, {"type": "null"}], "default": None}

  _drop_required(defs["FieldDefinition"], "type")
  _drop_required(defs["Action"], "style")

  return {
    "$schema": SCHEMA_DIALECT,
    "title": "WidgetSpec",
    "$ref": _REF_TEMPLATE.format(name="WidgetSpec"),
    "$defs": defs,
  }


def widget_spec_schema() -> dict[str, Any]:
  """Return the JSON Schema document describing an author-supplied widget spec."""
  return copy.deepcopy(_build_schema())
