"""Logging setup for the widgetspec service."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from widgetspec.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_HANDLER_MARKER = "_widgetspec_handler"


def _mark(handler: logging.Handler) -> logging.Handler:
  setattr(handler, _HANDLER_MARKER, True)
  return handler


def initialize_logging(settings: Settings) -> logging.Logger:
  """Attach stream (and optional rotating file) handlers to the package logger."""
  logger = logging.getLogger("widgetspec")
  level = logging.DEBUG if settings.debug else settings.log_level_value
  logger.setLevel(level)

  # Re-running after uvicorn reconfigures logging must not duplicate handlers.
  for handler in list(logger.handlers):
    if getattr(handler, _HANDLER_MARKER, False):
      logger.removeHandler(handler)
      handler.close()

  formatter = logging.Formatter(LOG_FORMAT)
  stream_handler = _mark(logging.StreamHandler())
  stream_handler.setFormatter(formatter)
  logger.addHandler(stream_handler)

  if settings.log_file:
    log_path = Path(settings.log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = _mark(RotatingFileHandler(log_path, maxBytes=settings.log_max_bytes, backupCount=settings.log_backup_count, encoding="utf-8"))
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

  logger.debug("Logging initialised level=%s file=%s", logging.getLevelName(level), settings.log_file)
  return logger
