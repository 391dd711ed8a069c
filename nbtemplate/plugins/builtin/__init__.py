"""Built-in nb-template plugins."""

from __future__ import annotations

from . import dates

BUILTIN_PLUGINS = (dates,)

__all__ = ["BUILTIN_PLUGINS"]
