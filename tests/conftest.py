"""Shared fixtures for widgetspec tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from widgetspec.config import get_settings
from widgetspec.services.formdown import reset_formdown_parser
from widgetspec.services.locale import reset_locales


@pytest.fixture(autouse=True)
def reset_registries() -> Iterator[None]:
  """Give every test a fresh parser slot, locale registry and settings cache."""
  reset_formdown_parser()
  reset_locales()
  get_settings.cache_clear()
  yield
  reset_formdown_parser()
  reset_locales()
  get_settings.cache_clear()
