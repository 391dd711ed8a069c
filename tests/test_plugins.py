"""Tests covering template global plugin integration."""

from __future__ import annotations

import types

import pytest
from nbtemplate.config import NbTemplateConfig
from nbtemplate.plugins import (
    PluginRegistrationError,
    collect_template_globals,
    create_plugin_manager,
    hookimpl,
    register_modules,
)
from nbtemplate.plugins import manager as plugin_manager
from nbtemplate.plugins.builtin import BUILTIN_PLUGINS
from nbtemplate.utils.datetime_fmt import moment


@pytest.fixture(autouse=True)
def reset_plugin_cache() -> None:
    plugin_manager.reset_plugin_manager_cache()
    yield
    plugin_manager.reset_plugin_manager_cache()


def _manager_with(*modules: object):
    manager = create_plugin_manager(load_entry_points=False)
    register_modules(manager, (*BUILTIN_PLUGINS, *modules))
    return manager


def _plugin(name: str, values) -> types.ModuleType:
    module = types.ModuleType(name)

    @hookimpl
    def template_globals(config: NbTemplateConfig):
        return values(config) if callable(values) else values

    module.template_globals = template_globals
    return module


def test_builtin_plugin_contributes_date_helper() -> None:
    template_globals = collect_template_globals(NbTemplateConfig())
    assert template_globals["moment"] is moment


def test_custom_plugin_globals_are_merged_and_see_config() -> None:
    module = _plugin(
        "nbtemplate_test_plugin",
        lambda config: {"author": config.plugins["people"]["me"]},
    )
    config = NbTemplateConfig(plugins={"people": {"me": "Ada"}})

    merged = collect_template_globals(config, _manager_with(module))

    assert merged["author"] == "Ada"
    assert merged["moment"] is moment


def test_duplicate_global_names_are_rejected() -> None:
    module = _plugin("nbtemplate_dup_plugin", {"moment": object()})

    with pytest.raises(PluginRegistrationError, match="Duplicate"):
        collect_template_globals(NbTemplateConfig(), _manager_with(module))


def test_non_mapping_contribution_is_rejected() -> None:
    module = _plugin("nbtemplate_bad_plugin", ["not", "a", "mapping"])

    with pytest.raises(PluginRegistrationError, match="mapping"):
        collect_template_globals(NbTemplateConfig(), _manager_with(module))


def test_invalid_global_name_is_rejected() -> None:
    module = _plugin("nbtemplate_badname_plugin", {"not-valid": 1})

    with pytest.raises(PluginRegistrationError, match="Invalid template global"):
        collect_template_globals(NbTemplateConfig(), _manager_with(module))


def test_registering_same_module_twice_fails() -> None:
    manager = create_plugin_manager(load_entry_points=False)
    with pytest.raises(PluginRegistrationError):
        register_modules(manager, (*BUILTIN_PLUGINS, *BUILTIN_PLUGINS))
