"""Hook specifications for nb-template plugins."""

from __future__ import annotations

from typing import Any, Mapping

from nbtemplate.config import NbTemplateConfig

from ._markers import hookspec


class NbTemplateHookSpec:
    """Collection of pluggy hook specifications."""

    @hookspec
    def template_globals(self, config: NbTemplateConfig) -> Mapping[str, Any]:
        """Return names to expose in every render scope (helpers, constants)."""
