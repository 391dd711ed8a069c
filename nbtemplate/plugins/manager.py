"""Helpers for creating and working with the nb-template plugin manager."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from functools import lru_cache
from typing import Any

import pluggy

from ..config import NbTemplateConfig
from ._markers import ENTRY_POINT_GROUP, PLUGIN_NAMESPACE
from .spec import NbTemplateHookSpec


class PluginRegistrationError(RuntimeError):
    """Raised when a plugin fails validation or registration."""


def create_plugin_manager(*, load_entry_points: bool = True) -> pluggy.PluginManager:
    """Instantiate a pluggy ``PluginManager`` configured for nb-template."""

    manager = pluggy.PluginManager(PLUGIN_NAMESPACE)
    manager.add_hookspecs(NbTemplateHookSpec)

    if load_entry_points:
        manager.load_setuptools_entrypoints(ENTRY_POINT_GROUP)

    return manager


def register_modules(
    manager: pluggy.PluginManager,
    modules: Sequence[object],
) -> None:
    """Register in-process plugin modules with the manager."""

    for module in modules:
        try:
            manager.register(module)
        except (ValueError, pluggy.PluginValidationError) as exc:
            raise PluginRegistrationError(str(exc)) from exc


def iter_plugin_modules() -> tuple[object, ...]:
    """Return plugin modules bundled with nb-template."""

    from .builtin import BUILTIN_PLUGINS

    return BUILTIN_PLUGINS


@lru_cache(maxsize=1)
def _build_plugin_manager() -> pluggy.PluginManager:
    manager = create_plugin_manager()
    register_modules(manager, iter_plugin_modules())
    return manager


def get_plugin_manager() -> pluggy.PluginManager:
    """Return the cached plugin manager instance."""

    return _build_plugin_manager()


def reset_plugin_manager_cache() -> None:
    """Clear cached plugin manager so future calls rebuild state."""

    _build_plugin_manager.cache_clear()


def collect_template_globals(
    config: NbTemplateConfig,
    manager: pluggy.PluginManager | None = None,
) -> dict[str, Any]:
    """Merge ``template_globals`` contributions from all registered plugins."""

    manager = manager if manager is not None else get_plugin_manager()

    merged: dict[str, Any] = {}
    for contribution in manager.hook.template_globals(config=config):
        if not contribution:
            continue
        if not isinstance(contribution, Mapping):
            raise PluginRegistrationError(
                "template_globals hooks must return a mapping of names to values."
            )
        for name, value in contribution.items():
            if not isinstance(name, str) or not name.isidentifier():
                raise PluginRegistrationError(
                    f"Invalid template global name: {name!r}."
                )
            if name in merged:
                raise PluginRegistrationError(
                    f"Duplicate template global detected: '{name}'."
                )
            merged[name] = value

    return merged


__all__ = [
    "PluginRegistrationError",
    "collect_template_globals",
    "create_plugin_manager",
    "get_plugin_manager",
    "iter_plugin_modules",
    "register_modules",
    "reset_plugin_manager_cache",
]
