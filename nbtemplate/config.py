"""Configuration management for nb-template."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_DIR = Path("~/.config/nb-template").expanduser()
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"
DEFAULT_NB_COMMAND = "nb"
DEFAULT_LOG_LEVEL = "warning"

LOG_LEVELS = ("debug", "info", "warning", "error")


class ConfigError(RuntimeError):
    """Base error for configuration related issues."""


class MissingConfigError(ConfigError):
    """Raised when an explicitly requested configuration file cannot be found."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Configuration file not found at {path}")
        self.path = path


class InvalidConfigError(ConfigError):
    """Raised when the configuration file holds malformed values."""


@dataclass(slots=True)
class NbTemplateConfig:
    """In-memory representation of the nb-template configuration file."""

    nb_command: str = DEFAULT_NB_COMMAND
    remove_title: bool = True
    log_level: str = DEFAULT_LOG_LEVEL
    plugins: dict[str, dict[str, Any]] = field(default_factory=dict)
    source_path: Path | None = None


def load_config(path: Path | None = None) -> NbTemplateConfig:
    """Load configuration from ``path`` or the default location.

    Parameters
    ----------
    path:
        Optional location of the configuration file. When ``None`` the default
        path (``~/.config/nb-template/config.toml``) is used, and built-in
        defaults apply if that file does not exist.

    Raises
    ------
    MissingConfigError
        If ``path`` was given explicitly and cannot be found.
    InvalidConfigError
        If settings are malformed.
    """

    config_path = (path or DEFAULT_CONFIG_PATH).expanduser()
    if not config_path.exists():
        if path is not None:
            raise MissingConfigError(config_path)
        return NbTemplateConfig()

    try:
        with config_path.open("rb") as fh:
            raw = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise InvalidConfigError(f"Invalid TOML in {config_path}: {exc}") from exc

    section = raw.get("nb_template", {})
    if not isinstance(section, dict):
        raise InvalidConfigError("'nb_template' section must be a table")

    nb_command_raw = section.get("nb_command", DEFAULT_NB_COMMAND)
    if not isinstance(nb_command_raw, str) or not nb_command_raw.strip():
        raise InvalidConfigError("'nb_command' must be a non-empty string")
    nb_command = str(Path(nb_command_raw.strip()).expanduser())

    remove_title = section.get("remove_title", True)
    if not isinstance(remove_title, bool):
        raise InvalidConfigError("'remove_title' must be a boolean when provided")

    log_level_raw = section.get("log_level", DEFAULT_LOG_LEVEL)
    if not isinstance(log_level_raw, str):
        raise InvalidConfigError("'log_level' must be a string when provided")
    log_level = log_level_raw.strip().lower()
    if log_level not in LOG_LEVELS:
        allowed = ", ".join(LOG_LEVELS)
        raise InvalidConfigError(f"'log_level' must be one of: {allowed}")

    plugins_section = raw.get("plugins")
    plugins: dict[str, dict[str, Any]] = {}
    if isinstance(plugins_section, dict):
        for key, value in plugins_section.items():
            if isinstance(value, dict):
                plugins[key] = dict(value)
            else:
                plugins[key] = {}

    return NbTemplateConfig(
        nb_command=nb_command,
        remove_title=remove_title,
        log_level=log_level,
        plugins=plugins,
        source_path=config_path,
    )
