"""Shared helpers for the nb-template CLI."""

from __future__ import annotations

from pathlib import Path
from typing import IO, Any

import click

from ..app import AppContext, bootstrap
from ..config import ConfigError, MissingConfigError
from ..plugins import PluginRegistrationError

CONTEXT_SETTINGS: dict[str, Any] = {"help_option_names": ["-h", "--help"]}


class NbTemplateCliError(click.ClickException):
    """Shared Click exception wrapper for CLI failures.

    The message is shown verbatim on stderr so diagnostics from ``nb`` reach
    the user unchanged.
    """

    def show(self, file: IO[Any] | None = None) -> None:
        message = self.format_message()
        click.echo(message, file=file, err=True, nl=not message.endswith("\n"))


def get_app(ctx: click.Context) -> AppContext:
    """Return a cached AppContext for the current CLI invocation."""

    ctx.ensure_object(dict)
    app: AppContext | None = ctx.obj.get("app")
    if app is not None:
        return app

    config_path_opt: Path | None = ctx.obj.get("config_path")

    try:
        app = bootstrap(config_path_opt)
    except MissingConfigError as exc:
        raise NbTemplateCliError(
            f"Configuration not found at {exc.path}. Check --config or NB_TEMPLATE_CONFIG."
        ) from exc
    except (ConfigError, PluginRegistrationError) as exc:
        raise NbTemplateCliError(str(exc)) from exc

    ctx.obj["app"] = app
    return app
