import logging
from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from widgetspec.schema.errors import UnrecognizedWidgetError, WidgetSpecError


def _error_payload(detail: Any, *, suggestion: str | None = None, path: str | None = None) -> dict[str, Any]:
  """Build an error payload that carries only client-facing details."""
  payload: dict[str, Any] = {"detail": detail}
  if suggestion:
    payload["suggestion"] = suggestion
  if path:
    payload["path"] = path
  return payload


def _sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
  """Return validation errors without raw input or context payloads."""
  return [{"loc": list(error.get("loc", ())), "msg": str(error.get("msg", "")), "type": str(error.get("type", ""))} for error in errors]


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
  """Catch unhandled errors and hide their details from callers."""
  logger = logging.getLogger("uvicorn.error")
  logger.error("Global exception path=%s error_type=%s", request.url.path, type(exc).__name__, exc_info=True)
  return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=_error_payload("Internal Server Error"))


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
  """Log request validation errors without leaking payloads."""
  sanitized_errors = _sanitize_validation_errors(list(exc.errors()))
  logger = logging.getLogger("uvicorn.error")
  logger.warning("Request validation failed path=%s method=%s errors=%s", request.url.path, request.method, sanitized_errors)
  return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=_error_payload(sanitized_errors))


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
  """Handle HTTPExceptions; 5xx details stay in the logs."""
  if exc.status_code >= 500:
    logger = logging.getLogger("uvicorn.error")
    logger.error("HTTPException path=%s status_code=%s detail=%s", request.url.path, exc.status_code, exc.detail, exc_info=True)
    return JSONResponse(status_code=exc.status_code, content=_error_payload("Internal Server Error"))

  return JSONResponse(status_code=exc.status_code, content=exc.detail if isinstance(exc.detail, dict) else _error_payload(exc.detail))


async def widget_spec_exception_handler(request: Request, exc: WidgetSpecError) -> JSONResponse:
  """Return a 422 for specs the normalizer refuses."""
  logger = logging.getLogger("uvicorn.error")
  logger.info("Widget spec rejected path=%s error_type=%s spec_path=%s", request.url.path, type(exc).__name__, exc.path)
  suggestion = exc.suggestion if isinstance(exc, UnrecognizedWidgetError) else None
  return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=_error_payload(exc.message, suggestion=suggestion, path=exc.path))
