"""Template rendering with ERB-style tags on top of Jinja2.

Tags:

- ``<%= expr %>`` outputs the value of ``expr``
- ``<% stmt %>`` runs a statement (``if``, ``for``, ``set``, ...)
- ``<%# text %>`` is a comment

Every name in the scope is visible bare, so ``<%= author %>`` reads the
``author`` variable directly. Undefined names raise :class:`RenderError`
unless the template guards them (``<% if author is defined %>``).
"""

from __future__ import annotations

from typing import Any, Mapping

from jinja2 import Environment, StrictUndefined, TemplateError


class RenderError(RuntimeError):
    """Raised when a template cannot be rendered."""


def create_environment() -> Environment:
    return Environment(
        block_start_string="<%",
        block_end_string="%>",
        variable_start_string="<%=",
        variable_end_string="%>",
        comment_start_string="<%#",
        comment_end_string="%>",
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
    )


class TemplateRenderer:
    """Expand template text against a variable mapping."""

    def __init__(self, environment: Environment | None = None) -> None:
        self._env = environment if environment is not None else create_environment()

    def render(self, template_text: str, scope: Mapping[str, Any]) -> str:
        try:
            template = self._env.from_string(template_text)
            return template.render(dict(scope))
        except TemplateError as exc:
            raise RenderError(_describe(exc)) from exc
        except Exception as exc:
            raise RenderError(f"Template expression failed: {exc}") from exc


def _describe(exc: TemplateError) -> str:
    lineno = getattr(exc, "lineno", None)
    if lineno:
        return f"Template error on line {lineno}: {exc.message}"
    return f"Template error: {exc.message}"
