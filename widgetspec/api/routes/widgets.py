from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, HTTPException, Query, status

from widgetspec.api.models import DataRequest, FormatRequest, FormatResponse, SpecRequest, SuggestMappingResponse, SuggestRequest, SuggestResponse, ValidationResponse
from widgetspec.schema.errors import UnrecognizedWidgetError
from widgetspec.schema.schema_export import widget_spec_schema
from widgetspec.schema.spec_normalizer import normalize
from widgetspec.schema.validate_spec import validate
from widgetspec.services.catalog import help_widgets, template
from widgetspec.services.formatting import format_value
from widgetspec.services.suggest import suggest_widget
from widgetspec.services.suggest_mapping import auto_spec, suggest_mapping

router = APIRouter()


@router.get("/catalog")
async def get_catalog(widget: str | None = Query(default=None, description="Exact widget, category or prefix.")) -> Any:
  """List catalog entries, or the full detail for an exact widget name."""
  result = help_widgets(widget)
  if isinstance(result, list):
    return [entry.to_dict() for entry in result]
  return result.to_dict()


@router.get("/templates/{widget}")
async def get_template(widget: str) -> dict[str, Any]:
  """Return a minimal starter spec for a widget."""
  try:
    return template(widget)
  except UnrecognizedWidgetError as exc:
    # Unknown widgets are a missing resource here, not an invalid spec.
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail={"detail": exc.message, "suggestion": exc.suggestion}) from exc


@router.get("/schema")
async def get_schema() -> dict[str, Any]:
  """Return the JSON Schema document of the widget spec contract."""
  return widget_spec_schema()


@router.post("/validate", response_model=ValidationResponse)
async def validate_spec(request: SpecRequest) -> ValidationResponse:
  """Validate a spec and report every issue found."""
  result = validate(request.spec)
  return ValidationResponse(valid=result.valid, errors=[asdict(issue) for issue in result.errors], warnings=[asdict(issue) for issue in result.warnings])


@router.post("/normalize")
async def normalize_spec(request: SpecRequest) -> dict[str, Any]:
  """Validate then normalize a spec; invalid specs are rejected with their issues."""
  result = validate(request.spec)
  if not result.valid:
    raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail={"detail": "Invalid widget spec", "errors": [asdict(issue) for issue in result.errors]})
  return normalize(request.spec).to_dict()


@router.post("/suggest", response_model=SuggestResponse)
async def suggest(request: SuggestRequest) -> SuggestResponse:
  """Suggest the closest known widget for a mistyped identifier."""
  return SuggestResponse(input=request.widget, suggestion=suggest_widget(request.widget))


@router.post("/suggest-mapping", response_model=SuggestMappingResponse)
async def suggest_mapping_for_data(request: DataRequest) -> SuggestMappingResponse:
  """Rank widget and mapping candidates for raw data."""
  suggestions = suggest_mapping(request.data, request.widget)
  return SuggestMappingResponse(suggestions=[suggestion.to_dict() for suggestion in suggestions])


@router.post("/auto-spec")
async def auto_spec_for_data(request: DataRequest) -> dict[str, Any]:
  """Build a normalized spec from raw data alone."""
  spec = auto_spec(request.data)
  if spec is None:
    raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="No widget could be derived from empty data")
  return spec.to_dict()


@router.post("/format", response_model=FormatResponse)
async def format_for_display(request: FormatRequest) -> FormatResponse:
  """Format a single value for display."""
  return FormatResponse(text=format_value(request.value, request.kind, request.locale))
