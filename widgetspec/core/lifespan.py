import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from widgetspec.core.logging import initialize_logging
from widgetspec.services.locale import get_effective_locale, set_default_locale


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
  """Set up logging and process defaults once uvicorn has started."""
  from widgetspec.config import get_settings

  settings = get_settings()
  logger = logging.getLogger("widgetspec.core.lifespan")

  initialize_logging(settings)
  # Seed the process default locale unless a caller already chose one.
  if settings.default_locale and get_effective_locale() is None:
    set_default_locale(settings.default_locale)
  logger.info("Startup complete environment=%s", settings.environment)

  yield

  logger.info("Shutdown complete")
