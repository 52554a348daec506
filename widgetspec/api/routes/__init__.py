"""HTTP routers."""

from . import widgets

__all__ = ["widgets"]
