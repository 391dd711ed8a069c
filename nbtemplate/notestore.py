"""Integration with the ``nb`` note manager for reading and writing notes."""

from __future__ import annotations

import subprocess
from typing import Protocol

from .config import DEFAULT_NB_COMMAND
from .log import get_logger

logger = get_logger(__name__)


class NoteStoreError(RuntimeError):
    """Raised when the note store rejects a read or write."""


class NoteStore(Protocol):
    """Minimal contract the note pipeline needs from a note store."""

    def read_template(self, identifier: str) -> str:
        """Return the raw content of the note addressed by ``identifier``."""

    def write_note(self, filename: str, content: str) -> str:
        """Create a note named ``filename`` holding ``content`` literally."""


class NbNoteStore:
    """Wrapper around ``nb`` commands for reading templates and adding notes."""

    def __init__(self, command: str = DEFAULT_NB_COMMAND) -> None:
        self.command = command

    def read_template(self, identifier: str) -> str:
        """Print a note's raw content via ``nb show``.

        ``identifier`` accepts anything ``nb`` resolves:
        ``[<notebook>:][<folder-path>/][<id> | <filename> | <title>]``.
        """

        return self._run_nb("show", "--no-color", "--print", identifier)

    def write_note(self, filename: str, content: str) -> str:
        """Add a new note with literal ``content`` via ``nb add``."""

        return self._run_nb("add", "--filename", filename, "--content", content)

    # ---------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------
    def _run_nb(self, *args: str) -> str:
        subcommand = args[0]
        logger.debug("Running nb", command=self.command, subcommand=subcommand)
        try:
            process = subprocess.run(
                [self.command, *args],
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise NoteStoreError(
                f"Note manager executable not found: {self.command}"
            ) from exc

        logger.debug(
            "nb finished", subcommand=subcommand, returncode=process.returncode
        )
        if process.returncode != 0:
            diagnostic = process.stderr or process.stdout
            if not diagnostic.strip():
                diagnostic = f"nb {subcommand} failed (exit {process.returncode})"
            raise NoteStoreError(diagnostic)
        return process.stdout
