from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from widgetspec import __version__
from widgetspec.api.routes import widgets
from widgetspec.config import get_settings
from widgetspec.core.exceptions import global_exception_handler, http_exception_handler, request_validation_exception_handler, widget_spec_exception_handler
from widgetspec.core.lifespan import lifespan
from widgetspec.schema.errors import WidgetSpecError

settings = get_settings()

app = FastAPI(title="widgetspec", version=__version__, lifespan=lifespan)

if settings.allowed_origins:
  app.add_middleware(CORSMiddleware, allow_origins=list(settings.allowed_origins), allow_credentials=False, allow_methods=["GET", "POST", "OPTIONS"], allow_headers=["content-type"])


# Add exception handlers
app.add_exception_handler(Exception, global_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(WidgetSpecError, widget_spec_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)


@app.get("/health", include_in_schema=False)
async def health_check() -> dict[str, str]:
  """Return a simple health status."""
  return {"status": "ok", "version": __version__}


app.include_router(widgets.router, prefix="/api/widgets", tags=["widgets"])
