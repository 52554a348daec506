"""Date-shape helpers shared by inference and formatting."""

from __future__ import annotations

import re
from typing import Any

ISO_DATE_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")
_SLASH_DMY_RE = re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$")
_SLASH_YMD_RE = re.compile(r"^\d{4}/\d{2}/\d{2}$")
_MONTH_NAME_RE = re.compile(r"^(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?\s+\d", re.IGNORECASE)

MIN_DATE_LENGTH = 6
MAX_DATE_LENGTH = 30


def is_date_like_string(value: Any) -> bool:
  """Return True when `value` is a string that reads like a calendar date."""
  if not isinstance(value, str):
    return False
  text = value.strip()
  if not MIN_DATE_LENGTH <= len(text) <= MAX_DATE_LENGTH:
    return False
  return bool(ISO_DATE_PREFIX_RE.match(text) or _SLASH_DMY_RE.match(text) or _SLASH_YMD_RE.match(text) or _MONTH_NAME_RE.match(text))
