"""Validation, normalization and inference for declarative widget specs."""

__version__ = "0.1.0"

from widgetspec.schema import (  # noqa: E402
  MalformedSpecError,
  UnrecognizedWidgetError,
  ValidationIssue,
  ValidationResult,
  WidgetSpec,
  WidgetSpecError,
  WidgetType,
  is_widget_spec,
  normalize,
  normalize_mapping,
  validate,
)
from widgetspec.services.formatting import format_value  # noqa: E402
from widgetspec.services.formdown import parse_formdown, register_formdown_parser  # noqa: E402
from widgetspec.services.infer import infer  # noqa: E402
from widgetspec.services.suggest import suggest_widget  # noqa: E402
from widgetspec.services.suggest_mapping import auto_spec, suggest_mapping  # noqa: E402

__all__ = [
  "MalformedSpecError",
  "UnrecognizedWidgetError",
  "ValidationIssue",
  "ValidationResult",
  "WidgetSpec",
  "WidgetSpecError",
  "WidgetType",
  "auto_spec",
  "format_value",
  "infer",
  "is_widget_spec",
  "normalize",
  "normalize_mapping",
  "parse_formdown",
  "register_formdown_parser",
  "suggest_mapping",
  "suggest_widget",
  "validate",
]
