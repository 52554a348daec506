"""Error types raised at the edges of the widget spec pipeline."""

from __future__ import annotations

from typing import Any


class WidgetSpecError(ValueError):
  """Base class for specs that cannot be turned into a canonical widget spec."""

  def __init__(self, message: str, *, path: str = "") -> None:
    self.message = message
    self.path = path
    super().__init__(message)

  def to_dict(self) -> dict[str, Any]:
    return {"error_type": self.__class__.__name__, "message": self.message, "path": self.path}


class MalformedSpecError(WidgetSpecError):
  """Raised when the input is not shaped like a widget spec at all."""


class UnrecognizedWidgetError(WidgetSpecError):
  """Raised when a widget type string is not part of the known widget set."""

  def __init__(self, widget: Any, *, suggestion: str | None = None, path: str = "widget") -> None:
    self.widget = widget
    self.suggestion = suggestion
    message = f"Unknown widget type {widget!r}."
    if suggestion:
      message = f"{message} Did you mean {suggestion!r}?"
    super().__init__(message, path=path)

  def to_dict(self) -> dict[str, Any]:
    payload = super().to_dict()
    payload["widget"] = self.widget if isinstance(self.widget, str) else str(self.widget)
    payload["suggestion"] = self.suggestion
    return payload
