"""nb-template CLI package."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import click

from ..log import get_logger, resolve_level, setup_logging
from ..notestore import NoteStoreError
from ..render import RenderError
from ..services.notes import (
    TemplateRequest,
    TemplateVariableError,
    create_note_from_template,
)
from ..utils.datetime_fmt import moment
from ._args import TEMPLATE_VARIABLES_KEY, TemplateCommand
from ._common import CONTEXT_SETTINGS, NbTemplateCliError, get_app

__all__ = ["cli", "main", "NbTemplateCliError"]

logger = get_logger(__name__)

# Evaluated once at import; each run is a fresh process.
DEFAULT_DATE = moment().format()


@click.command(
    name="nb-template", cls=TemplateCommand, context_settings=CONTEXT_SETTINGS
)
@click.argument("template")
@click.argument("note")
@click.option(
    "--date",
    "date_opt",
    default=DEFAULT_DATE,
    show_default="now",
    help="Date variable. Default is today.",
)
@click.option(
    "--title",
    default=None,
    help="Title variable. If present, the template heading is replaced with it.",
)
@click.option(
    "--removeTitle",
    "--remove-title",
    "remove_title",
    type=click.BOOL,
    default=None,
    help="Remove the template heading. Defaults to true.",
)
@click.option(
    "--dry-run",
    "dry_run",
    type=click.BOOL,
    default=False,
    help="Print the rendered template without creating a new note.",
)
@click.option(
    "-c",
    "--config",
    "config_path_opt",
    type=click.Path(path_type=Path),
    envvar="NB_TEMPLATE_CONFIG",
    default=None,
    help="Path to configuration TOML file.",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Log progress to stderr (repeat for debug output).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    template: str,
    note: str,
    date_opt: str,
    title: str | None,
    remove_title: bool | None,
    dry_run: bool,
    config_path_opt: Path | None,
    verbose: int,
) -> None:
    """Create a note from another note used as a template.

    TEMPLATE is [<notebook>:][<folder-path>/][<id> | <filename> | <title>]
    and NOTE is [<notebook>:][<folder-path>/]<filename>.

    Any other option becomes a template variable:

    \b
        nb-template daily.md 2024-01-01.md --mood sunny
        <%= mood %>

    moment() is available to format dates within the template:

    \b
        <%= moment().format('YYYY-MM-DD') %>
        <%= moment(date).add(1, 'day').format('dddd') %>

    Templates use <%= expr %> for output, <% if x %>...<% endif %> for
    control flow and Jinja2 expression syntax.
    """

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path_opt

    app = get_app(ctx)
    setup_logging(resolve_level(app.config.log_level, verbose))

    request = TemplateRequest(
        template=template,
        note=note,
        date=date_opt,
        title=title,
        remove_title=app.config.remove_title if remove_title is None else remove_title,
        dry_run=dry_run,
        variables=dict(ctx.meta.get(TEMPLATE_VARIABLES_KEY, {})),
    )
    logger.debug("Parsed invocation", template=template, note=note, dry_run=dry_run)

    try:
        result = create_note_from_template(app, request)
    except TemplateVariableError as exc:
        raise click.UsageError(str(exc), ctx=ctx) from exc
    except (NoteStoreError, RenderError) as exc:
        raise NbTemplateCliError(str(exc)) from exc

    if not result.created:
        click.echo(result.content, nl=False)
        return

    click.echo("Note created.")


def main(argv: Sequence[str] | None = None) -> int:
    args = list(argv) if argv is not None else None
    try:
        result = cli.main(args=args, prog_name="nb-template", standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except SystemExit as exc:
        return int(exc.code or 0)
    return result if isinstance(result, int) else 0
