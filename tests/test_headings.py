from __future__ import annotations

from nbtemplate.headings import rewrite_heading


def test_title_replaces_first_heading_only() -> None:
    text = "# Old Title\nBody\n# Second\n"
    assert rewrite_heading(text, title="New") == "# New\nBody\n# Second\n"


def test_title_replaces_deeper_heading_marker_line() -> None:
    text = "intro\n## Section\ntext"
    assert rewrite_heading(text, title="New") == "intro\n# New\ntext"


def test_remove_title_empties_line_without_normalizing_blanks() -> None:
    text = "# Template\n\nBody\n"
    assert rewrite_heading(text) == "\n\nBody\n"


def test_remove_title_is_idempotent_without_further_headings() -> None:
    text = "# Template\nBody\n"
    once = rewrite_heading(text, remove_title=True)
    assert rewrite_heading(once, remove_title=True) == once


def test_remove_title_second_pass_hits_next_heading() -> None:
    text = "# One\n# Two\n"
    once = rewrite_heading(text)
    assert once == "\n# Two\n"
    assert rewrite_heading(once) == "\n\n"


def test_keep_title_leaves_text_untouched() -> None:
    text = "# Template\nBody"
    assert rewrite_heading(text, remove_title=False) == text


def test_empty_title_falls_back_to_removal() -> None:
    assert rewrite_heading("# Template\nBody", title="") == "\nBody"


def test_title_with_backslashes_is_inserted_literally() -> None:
    assert rewrite_heading("# T", title=r"C:\notes \1") == r"# C:\notes \1"


def test_matches_hash_line_inside_code_fence() -> None:
    text = "```sh\n# comment\n```\n# Real"
    assert rewrite_heading(text, title="X") == "```sh\n# X\n```\n# Real"


def test_no_heading_is_noop() -> None:
    text = "Body only\n  # indented\n"
    assert rewrite_heading(text, title="X") == text
    assert rewrite_heading(text) == text


def test_crlf_line_endings_are_preserved() -> None:
    assert rewrite_heading("# Old\r\nBody", title="New") == "# New\r\nBody"
