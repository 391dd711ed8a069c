"""High-level note workflow used by the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ..app import AppContext
from ..headings import rewrite_heading
from ..log import get_logger

logger = get_logger(__name__)

# Names bound from the known command-line parameters.
PARAMETER_NAMES = ("template", "note", "date", "title", "removeTitle", "dry_run")


class TemplateVariableError(ValueError):
    """Raised when an extra variable collides with a reserved scope name."""


@dataclass(slots=True)
class TemplateRequest:
    """Parameters of a single run, parsed once from the command line."""

    template: str
    note: str
    date: str
    title: str | None = None
    remove_title: bool = True
    dry_run: bool = False
    variables: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class NoteResult:
    """Outcome of the pipeline: the final text and whether it was written."""

    content: str
    created: bool
    store_output: str = ""


def build_render_scope(
    request: TemplateRequest, template_globals: Mapping[str, Any]
) -> dict[str, Any]:
    """Merge parameters, extra variables and plugin globals into one scope."""

    scope: dict[str, Any] = {
        "template": request.template,
        "note": request.note,
        "date": request.date,
        "removeTitle": request.remove_title,
        "dry_run": request.dry_run,
    }
    if request.title is not None:
        scope["title"] = request.title

    reserved = set(PARAMETER_NAMES) | set(template_globals)
    for name, value in request.variables.items():
        if name in reserved:
            raise TemplateVariableError(
                f"'--{name}' cannot be used as a template variable: the name is reserved."
            )
        scope[name] = value

    scope.update(template_globals)
    return scope


def render_note(ctx: AppContext, request: TemplateRequest) -> str:
    """Fetch the template, render it and rewrite its heading."""

    scope = build_render_scope(request, ctx.template_globals)

    template_text = ctx.store.read_template(request.template)
    logger.info("Template fetched", template=request.template, size=len(template_text))

    rendered = ctx.renderer.render(template_text, scope)
    return rewrite_heading(
        rendered, title=request.title, remove_title=request.remove_title
    )


def create_note_from_template(ctx: AppContext, request: TemplateRequest) -> NoteResult:
    """Run the whole pipeline, writing the note unless ``dry_run`` is set."""

    content = render_note(ctx, request)

    if request.dry_run:
        logger.info("Dry run, note not written", note=request.note)
        return NoteResult(content=content, created=False)

    output = ctx.store.write_note(request.note, content)
    logger.info("Note written", note=request.note)
    return NoteResult(content=content, created=True, store_output=output)
