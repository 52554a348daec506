"""Closest-known-widget lookup for mistyped widget identifiers."""

from __future__ import annotations

import logging

from widgetspec.schema.widget_models import KNOWN_WIDGETS

MAX_SUGGESTION_DISTANCE = 3

logger = logging.getLogger(__name__)


def levenshtein(a: str, b: str) -> int:
  """
  Return the edit distance between two strings.

  Uses a single rolling row sized to the shorter string, so memory stays
  O(min(len(a), len(b))).
  """
  if a == b:
    return 0
  # Keep the rolling row on the shorter string.
  if len(a) < len(b):
    a, b = b, a
  if not b:
    return len(a)

  row = list(range(len(b) + 1))
  for i, char_a in enumerate(a, start=1):
    diagonal = row[0]
    row[0] = i
    for j, char_b in enumerate(b, start=1):
      above = row[j]
      cost = 0 if char_a == char_b else 1
      row[j] = min(row[j] + 1, row[j - 1] + 1, diagonal + cost)
      diagonal = above
  return row[-1]


def suggest_widget(value: str, candidates: tuple[str, ...] = KNOWN_WIDGETS) -> str | None:
  """Return the closest known widget type, or None when nothing is close enough."""
  if not isinstance(value, str) or not value:
    return None

  needle = value.lower()
  threshold = min(MAX_SUGGESTION_DISTANCE, len(needle) // 2)
  best: str | None = None
  best_distance = threshold + 1
  for candidate in candidates:
    distance = levenshtein(needle, candidate)
    # Strict comparison keeps the earliest candidate on ties.
    if 0 < distance < best_distance:
      best = candidate
      best_distance = distance

  if best is not None:
    logger.debug("Widget suggestion input=%s suggestion=%s distance=%s", value, best, best_distance)
  return best
