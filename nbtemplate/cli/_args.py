"""Split free-form ``--name value`` options out of argv.

Options the command does not declare become template variables. They are
removed before click parses the rest, so they may appear anywhere on the
command line.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Sequence

import click

TEMPLATE_VARIABLES_KEY = "nbtemplate.variables"

# Only literal words, so a numeric note id after a bare flag stays positional.
_BOOL_LITERALS = frozenset({"true", "false"})
_NUMBER_RE = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)$")


def split_template_variables(
    args: Sequence[str], params: Iterable[click.Parameter]
) -> tuple[list[str], dict[str, Any]]:
    """Return ``(known_args, variables)`` for ``args``.

    Boolean options accept ``--opt``, ``--opt=false``, ``--opt false`` and
    ``--no-opt``; they are normalized to ``--opt=<value>`` for click.
    Unknown ``--name=value`` and ``--name value`` pairs become variables; a
    bare ``--name`` becomes ``True``. A value may start with ``-`` only when it
    is a number, as in ``--offset -1``. Dashes in names turn into underscores.
    """

    flag_opts: set[str] = set()
    value_opts: set[str] = set()
    bool_opts: set[str] = set()
    negated: dict[str, str] = {}

    for param in params:
        if not isinstance(param, click.Option):
            continue
        names = [*param.opts, *param.secondary_opts]
        if param.is_flag or param.count:
            flag_opts.update(names)
        elif isinstance(param.type, click.types.BoolParamType):
            bool_opts.update(names)
            for name in names:
                if name.startswith("--"):
                    negated[f"--no-{name[2:]}"] = name
        else:
            value_opts.update(names)

    known: list[str] = []
    variables: dict[str, Any] = {}
    tokens = list(args)
    index = 0

    while index < len(tokens):
        token = tokens[index]
        following = tokens[index + 1] if index + 1 < len(tokens) else None

        if token == "--":
            known.extend(tokens[index:])
            break

        name, has_value, inline = token.partition("=")

        if name in flag_opts:
            known.append(token)
        elif name in bool_opts:
            if has_value:
                known.append(token)
            elif following is not None and following.lower() in _BOOL_LITERALS:
                known.append(f"{name}={following}")
                index += 1
            else:
                known.append(f"{name}=true")
        elif name in negated and not has_value:
            known.append(f"{negated[name]}=false")
        elif name in value_opts:
            known.append(token)
            if not has_value and following is not None:
                known.append(following)
                index += 1
        elif name.startswith("--") and len(name) > 2:
            key = _variable_name(name)
            if has_value:
                variables[key] = inline
            elif following is not None and (
                not following.startswith("-") or _NUMBER_RE.match(following)
            ):
                variables[key] = following
                index += 1
            else:
                variables[key] = True
        else:
            known.append(token)

        index += 1

    return known, variables


def _variable_name(option: str) -> str:
    key = option[2:].replace("-", "_")
    if not key.isidentifier():
        raise click.UsageError(f"Invalid template variable name: {option}")
    return key


class TemplateCommand(click.Command):
    """Click command that collects undeclared options as template variables."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            known, variables = split_template_variables(args, self.get_params(ctx))
        except click.UsageError as exc:
            exc.ctx = ctx
            raise
        ctx.meta[TEMPLATE_VARIABLES_KEY] = variables
        return super().parse_args(ctx, known)

    def collect_usage_pieces(self, ctx: click.Context) -> list[str]:
        return [*super().collect_usage_pieces(ctx), "[--NAME VALUE]..."]
