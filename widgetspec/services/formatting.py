"""Display formatting for raw data values."""

from __future__ import annotations

import logging
import math
import re
from datetime import date, datetime
from typing import Any

from widgetspec.config import get_settings
from widgetspec.services.locale import get_locale_strings, resolve_locale
from widgetspec.utils.dates import ISO_DATE_PREFIX_RE

logger = logging.getLogger(__name__)

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")
CURRENCY_GLYPHS = {"USD": "$", "EUR": "€", "GBP": "£", "JPY": "¥", "KRW": "₩"}
ZERO_DECIMAL_CURRENCIES = frozenset({"JPY", "KRW"})
_CURRENCY_CODE_RE = re.compile(r"^[A-Za-z]{3}$")


def _plain(value: Any) -> str:
  """String coercion shared by every passthrough path."""
  if isinstance(value, bool):
    return "true" if value else "false"
  if isinstance(value, float) and math.isfinite(value) and value.is_integer():
    return str(int(value))
  return str(value)


def _to_number(value: Any) -> int | float | None:
  """Return a finite number parsed from `value`, or None."""
  if isinstance(value, bool):
    return None
  if isinstance(value, int):
    return value
  if isinstance(value, float):
    return value if math.isfinite(value) else None
  if isinstance(value, str):
    text = value.strip()
    if not text:
      return None
    try:
      return int(text)
    except ValueError:
      pass
    try:
      number = float(text)
    except ValueError:
      return None
    return number if math.isfinite(number) else None
  return None


def _localize(text: str, locale: str | None) -> str:
  strings = get_locale_strings(resolve_locale(locale))
  group = strings["group_separator"]
  decimal = strings["decimal_separator"]
  if group == "," and decimal == ".":
    return text
  return text.translate(str.maketrans({",": group, ".": decimal}))


def _group(number: int | float) -> str:
  if isinstance(number, int) or number.is_integer():
    return f"{int(number):,}"
  # At most three fraction digits, trailing zeros dropped.
  text = f"{number:,.3f}".rstrip("0").rstrip(".")
  return text if text not in {"-0", ""} else "0"


def _format_number(value: Any, locale: str | None) -> str:
  number = _to_number(value)
  if number is None:
    return _plain(value)
  return _localize(_group(number), locale)


def _format_currency(value: Any, code: str | None, locale: str | None) -> str:
  number = _to_number(value)
  if number is None:
    return _plain(value)
  if not code or not _CURRENCY_CODE_RE.match(code):
    if code:
      logger.debug("Invalid currency code=%s, using default", code)
    code = get_settings().currency
  code = code.upper()
  decimals = 0 if code in ZERO_DECIMAL_CURRENCIES else 2
  prefix = CURRENCY_GLYPHS.get(code, f"{code} ")
  sign = "-" if number < 0 else ""
  return sign + prefix + _localize(f"{abs(number):,.{decimals}f}", locale)


def _format_percent(value: Any) -> str:
  number = _to_number(value)
  if number is None:
    return _plain(value)
  return f"{_plain(number)}%"


def _format_date(value: Any) -> str:
  if isinstance(value, datetime):
    return value.date().isoformat()
  if isinstance(value, date):
    return value.isoformat()
  if isinstance(value, str) and ISO_DATE_PREFIX_RE.match(value):
    return value[:10]
  return _plain(value)


def _format_datetime(value: Any) -> str:
  if isinstance(value, datetime):
    return value.strftime("%Y-%m-%d %H:%M")
  if isinstance(value, date):
    return value.isoformat()
  if isinstance(value, str) and ISO_DATE_PREFIX_RE.match(value):
    return value[:16].replace("T", " ", 1)
  return _plain(value)


def _format_bytes(value: Any) -> str:
  number = _to_number(value)
  if number is None:
    return _plain(value)

  sign = "-" if number < 0 else ""
  magnitude = float(abs(number))
  unit = 0
  while magnitude >= 1024 and unit < len(BYTE_UNITS) - 1:
    magnitude /= 1024
    unit += 1
  scaled = f"{magnitude:.0f}" if unit == 0 else f"{magnitude:.1f}"
  return f"{sign}{scaled} {BYTE_UNITS[unit]}"


def format_value(value: Any, kind: str | None = None, locale: str | None = None) -> str:
  """
  Render `value` for display according to a format kind.

  `kind` is one of number, currency (optionally `currency:EUR`), percent,
  date, datetime or bytes. Unknown kinds and values a kind cannot interpret
  fall back to plain string coercion.
  """
  if value is None:
    return ""
  if not kind or not isinstance(kind, str):
    return _plain(value)

  name, _, param = kind.partition(":")
  try:
    if name == "number":
      return _format_number(value, locale)
    if name == "currency":
      return _format_currency(value, param or None, locale)
    if name == "percent":
      return _format_percent(value)
    if name == "date":
      return _format_date(value)
    if name == "datetime":
      return _format_datetime(value)
    if name == "bytes":
      return _format_bytes(value)
  except OverflowError:
    # Integers beyond float range cannot be scaled or rounded.
    logger.debug("Value out of range for format kind=%s", kind)
    return _plain(value)

  logger.debug("Unknown format kind=%s", kind)
  return _plain(value)
