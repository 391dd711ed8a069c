"""Built-in plugin exposing the ``moment`` date helper to templates."""

from __future__ import annotations

from typing import Any, Mapping

from ...config import NbTemplateConfig
from ...utils.datetime_fmt import moment
from .._markers import hookimpl

DATE_HELPER_NAME = "moment"


@hookimpl
def template_globals(config: NbTemplateConfig) -> Mapping[str, Any]:
    """Contribute the date-formatting helper under its reserved name."""

    return {DATE_HELPER_NAME: moment}
