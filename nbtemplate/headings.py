"""Rewrite the leading heading of a rendered note."""

from __future__ import annotations

import re

HEADING_MARKER = "#"

# Textual match only: the first line starting with "#", wherever it appears.
_FIRST_HEADING_RE = re.compile(r"^#[^\r\n]*", re.MULTILINE)


def rewrite_heading(
    text: str, *, title: str | None = None, remove_title: bool = True
) -> str:
    """Replace or drop the first ``#`` line of ``text``.

    A non-empty ``title`` replaces that line with ``# <title>``. Otherwise the
    line is emptied when ``remove_title`` is set, leaving its newline in place.
    Only the first match is touched.
    """

    if title:
        heading = f"{HEADING_MARKER} {title}"
        return _FIRST_HEADING_RE.sub(lambda _match: heading, text, count=1)
    if remove_title:
        return _FIRST_HEADING_RE.sub("", text, count=1)
    return text
