"""Application configuration loaded from environment variables."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from functools import lru_cache

_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
  """Typed settings for the widgetspec service."""

  environment: str
  debug: bool
  log_level: str
  log_file: str | None
  log_max_bytes: int
  log_backup_count: int
  default_locale: str | None
  currency: str
  allowed_origins: tuple[str, ...]

  @property
  def log_level_value(self) -> int:
    return logging.getLevelName(self.log_level)


def _parse_origins(raw: str | None) -> tuple[str, ...]:
  if not raw:
    return ()

  origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
  if any(origin == "*" for origin in origins):
    raise ValueError("WIDGETSPEC_ALLOWED_ORIGINS must not include wildcard origins.")

  return tuple(origins)


def _parse_bool(raw: str | None) -> bool:
  """Parse a boolean-ish string from environment variables."""

  if raw is None:
    return False

  normalized = raw.strip().lower()
  return normalized in {"1", "true", "yes", "on"}


def _parse_int(name: str, raw: str | None, default: int) -> int:
  if raw is None or not raw.strip():
    return default
  try:
    return int(raw)
  except ValueError as exc:
    raise ValueError(f"{name} must be an integer.") from exc


def _optional(raw: str | None) -> str | None:
  if raw is None:
    return None
  value = raw.strip()
  return value or None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  """Load settings once per process."""

  log_level = (os.getenv("WIDGETSPEC_LOG_LEVEL") or "INFO").strip().upper()
  if log_level not in _LOG_LEVELS:
    raise ValueError(f"WIDGETSPEC_LOG_LEVEL must be one of: {', '.join(sorted(_LOG_LEVELS))}.")

  log_max_bytes = _parse_int("WIDGETSPEC_LOG_MAX_BYTES", os.getenv("WIDGETSPEC_LOG_MAX_BYTES"), 5 * 1024 * 1024)
  if log_max_bytes <= 0:
    raise ValueError("WIDGETSPEC_LOG_MAX_BYTES must be a positive integer.")

  log_backup_count = _parse_int("WIDGETSPEC_LOG_BACKUP_COUNT", os.getenv("WIDGETSPEC_LOG_BACKUP_COUNT"), 10)
  if log_backup_count < 0:
    raise ValueError("WIDGETSPEC_LOG_BACKUP_COUNT must be zero or a positive integer.")

  currency = (os.getenv("WIDGETSPEC_CURRENCY") or "USD").strip().upper()
  if not _CURRENCY_RE.match(currency):
    raise ValueError("WIDGETSPEC_CURRENCY must be a three-letter currency code.")

  return Settings(
    environment=(os.getenv("WIDGETSPEC_ENV") or "development").strip(),
    debug=_parse_bool(os.getenv("WIDGETSPEC_DEBUG")),
    log_level=log_level,
    log_file=_optional(os.getenv("WIDGETSPEC_LOG_FILE")),
    log_max_bytes=log_max_bytes,
    log_backup_count=log_backup_count,
    default_locale=_optional(os.getenv("WIDGETSPEC_DEFAULT_LOCALE")),
    currency=currency,
    allowed_origins=_parse_origins(os.getenv("WIDGETSPEC_ALLOWED_ORIGINS")),
  )
