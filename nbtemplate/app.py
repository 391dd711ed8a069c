"""Application bootstrap and context container for nb-template."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .config import NbTemplateConfig, load_config
from .notestore import NbNoteStore, NoteStore
from .plugins import collect_template_globals
from .render import TemplateRenderer


@dataclass(slots=True)
class AppContext:
    """Aggregates core services for the CLI lifecycle."""

    config: NbTemplateConfig
    store: NoteStore
    renderer: TemplateRenderer
    template_globals: dict[str, Any] = field(default_factory=dict)


def bootstrap(config_path: Path | None) -> AppContext:
    """Load configuration and wire the note store, renderer and plugins."""

    # Defer error mapping to the CLI, which knows how to present messages.
    config = load_config(config_path)

    store = NbNoteStore(config.nb_command)
    template_globals = collect_template_globals(config)

    return AppContext(
        config=config,
        store=store,
        renderer=TemplateRenderer(),
        template_globals=template_globals,
    )
