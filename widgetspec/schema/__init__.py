"""Schema package exports."""

from .errors import MalformedSpecError, UnrecognizedWidgetError, WidgetSpecError
from .spec_normalizer import normalize, normalize_mapping
from .validate_spec import ValidationIssue, ValidationResult, is_widget_spec, validate
from .widget_models import Action, ColumnDefinition, FieldDefinition, Mapping, WidgetEvent, WidgetSpec, WidgetType

__all__ = ["Action", "ColumnDefinition", "FieldDefinition", "Mapping", "WidgetEvent", "WidgetSpec", "WidgetType", "WidgetSpecError", "MalformedSpecError", "UnrecognizedWidgetError", "ValidationIssue", "ValidationResult", "validate", "is_widget_spec", "normalize", "normalize_mapping"]
