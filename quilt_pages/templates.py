"""Resolve a page's theme and template references to a template file."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from ._constants import TEMPLATE_EXTENSION
from .logging import get_logger

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import PageSettings

logger = get_logger("templates")


@dc.dataclass(frozen=True, slots=True)
class ResolvedTemplate:
    """A template file located under ``<themes>/<theme>/<template>.html``."""

    theme: str
    template: str
    path: Path


class TemplateResolver:
    """Locate template files inside an optional themes root."""

    def __init__(self, themes_dir: Path | None) -> None:
        """Bind the resolver to ``themes_dir``; ``None`` disables theming."""
        self.themes_dir = themes_dir

    def resolve(self, settings: PageSettings) -> ResolvedTemplate | None:
        """Return the template requested by ``settings``, if it exists.

        Partial settings (a theme without a template or the reverse) request
        nothing. A requested template that cannot be found falls back to the
        built-in template with a warning.
        """
        if not settings.requests_template:
            return None
        theme = typ.cast("str", settings.theme)
        template = typ.cast("str", settings.template)
        if self.themes_dir is None:
            logger.warning("No themes directory, but %s requested a theme.", theme)
            return None
        candidate = self.themes_dir / theme / f"{template}.{TEMPLATE_EXTENSION}"
        if not candidate.is_file():
            logger.warning("Template does not exist %s/%s", theme, template)
            return None
        return ResolvedTemplate(theme=theme, template=template, path=candidate)


__all__ = ["ResolvedTemplate", "TemplateResolver"]
