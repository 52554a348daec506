from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, StrictStr


class SpecRequest(BaseModel):
  """Request payload carrying a raw widget spec."""

  spec: Any = Field(description="Author-supplied widget spec.")


class ValidationIssueModel(BaseModel):
  path: str
  message: str
  code: str | None = None


class ValidationResponse(BaseModel):
  """Response model for widget spec validation results."""

  valid: bool
  errors: list[ValidationIssueModel]
  warnings: list[ValidationIssueModel]


class SuggestRequest(BaseModel):
  widget: StrictStr = Field(description="Possibly mistyped widget identifier.", examples=["chart.barr"])


class SuggestResponse(BaseModel):
  input: str
  suggestion: str | None


class DataRequest(BaseModel):
  """Request payload carrying raw data for inference."""

  data: Any = Field(description="Scalar, object or list of records.")
  widget: StrictStr | None = Field(default=None, description="Optional widget type to constrain suggestions.")


class MappingSuggestionModel(BaseModel):
  widget: str
  mapping: dict[str, Any] | None
  confidence: str
  reason: str


class SuggestMappingResponse(BaseModel):
  suggestions: list[MappingSuggestionModel]


class FormatRequest(BaseModel):
  value: Any = None
  kind: StrictStr | None = Field(default=None, examples=["number", "currency:EUR", "bytes"])
  locale: StrictStr | None = None


class FormatResponse(BaseModel):
  text: str
