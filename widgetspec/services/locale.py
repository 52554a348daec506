"""Process-wide registry of localized chrome strings and number conventions."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from widgetspec.config import get_settings

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")

ENGLISH_STRINGS: dict[str, str] = {
  # Table pagination chrome.
  "prev": "Prev",
  "next": "Next",
  "search_placeholder": "Search...",
  # ARIA labels.
  "search_table": "Search table",
  "previous_page": "Previous page",
  "next_page": "Next page",
  "table_pagination": "Table pagination",
  "data_table": "Data table",
  # Form validation templates.
  "required": "{label} is required",
  "min_length": "{label} must be at least {min} characters",
  "max_length": "{label} must be at most {max} characters",
  "min_value": "{label} must be at least {min}",
  "max_value": "{label} must be at most {max}",
  "invalid_email": "{label} must be a valid email address",
  "invalid_url": "{label} must be a valid URL",
  "invalid_pattern": "{label} format is invalid",
  # Number conventions used by the value formatter.
  "group_separator": ",",
  "decimal_separator": ".",
}


class _LocaleRegistry:
  """Holds registered locale tables and the process default tag."""

  def __init__(self) -> None:
    self._tables: dict[str, dict[str, str]] = {}
    self._default_locale: str | None = None

  def register(self, lang: str, strings: Mapping[str, Any]) -> None:
    table = dict(ENGLISH_STRINGS)
    for key, value in strings.items():
      if key not in ENGLISH_STRINGS:
        logger.warning("Ignoring unknown locale key lang=%s key=%s", lang, key)
        continue
      table[key] = str(value)
    self._tables[lang.lower()] = table

  def lookup(self, lang: str | None) -> dict[str, str]:
    if not lang:
      return ENGLISH_STRINGS
    key = lang.lower()
    if key in self._tables:
      return self._tables[key]
    # Fall back from a region tag to its base language.
    base = key.split("-", 1)[0]
    if base != key and base in self._tables:
      return self._tables[base]
    return ENGLISH_STRINGS

  @property
  def default_locale(self) -> str | None:
    return self._default_locale

  @default_locale.setter
  def default_locale(self, lang: str | None) -> None:
    self._default_locale = lang or None

  def reset(self) -> None:
    self._tables.clear()
    self._default_locale = None


_registry = _LocaleRegistry()


def register_locale(lang: str, strings: Mapping[str, Any]) -> None:
  """Register `strings` for `lang`, merged over the English defaults."""
  if not isinstance(lang, str) or not lang.strip():
    raise ValueError("Locale tag must be a non-empty string.")
  _registry.register(lang.strip(), strings)


def get_locale_strings(lang: str | None = None) -> dict[str, str]:
  """Resolve a table by exact tag, then base language, then English."""
  return dict(_registry.lookup(lang))


def format_template(template: str, params: Mapping[str, Any]) -> str:
  """Replace `{key}` placeholders; unknown placeholders are kept as written."""

  def _substitute(match: re.Match[str]) -> str:
    value = params.get(match.group(1))
    return match.group(0) if value is None else str(value)

  return _PLACEHOLDER_RE.sub(_substitute, template)


def get_default_locale() -> dict[str, str]:
  """Return a copy of the English defaults."""
  return dict(ENGLISH_STRINGS)


def set_default_locale(lang: str | None) -> None:
  _registry.default_locale = lang


def get_effective_locale() -> str | None:
  return _registry.default_locale


def resolve_locale(widget_locale: str | None = None) -> str | None:
  """Pick the locale for a widget: explicit, then process default, then settings."""
  if widget_locale:
    return widget_locale
  if _registry.default_locale:
    return _registry.default_locale
  return get_settings().default_locale


def reset_locales() -> None:
  """Drop registered locales and the process default."""
  _registry.reset()
