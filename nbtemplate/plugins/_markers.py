"""Pluggy markers and constants for the nb-template plugin namespace."""

from __future__ import annotations

import pluggy

PLUGIN_NAMESPACE = "nb_template"
ENTRY_POINT_GROUP = "nb_template.plugins"

hookspec = pluggy.HookspecMarker(PLUGIN_NAMESPACE)
hookimpl = pluggy.HookimplMarker(PLUGIN_NAMESPACE)

__all__ = ["PLUGIN_NAMESPACE", "ENTRY_POINT_GROUP", "hookspec", "hookimpl"]
