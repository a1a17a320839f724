"""Render markdown bodies into template shells."""

from __future__ import annotations

import typing as typ

from markdown import Markdown

from ._constants import BUILTIN_TEMPLATE, TEMPLATE_MARKER
from .errors import TemplateError

if typ.TYPE_CHECKING:
    from pathlib import Path


class PageRenderer:
    """Render markdown and wrap it in a template around ``{{content}}``."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Initialize a renderer using ``pygments_style`` for code blocks."""
        self.pygments_style = pygments_style

    def markdown(self, text: str) -> str:
        """Render markdown into an HTML fragment."""
        md = Markdown(
            extensions=["fenced_code", "codehilite", "tables", "sane_lists"],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return md.convert(text)

    def render(self, body: str, template_path: Path | None = None) -> str:
        """Render ``body`` and substitute it into the template.

        Parameters
        ----------
        body : str
            Markdown source of the page.
        template_path : Path, optional
            Template file to wrap the fragment in; the built-in shell is used
            when omitted.

        Returns
        -------
        str
            Template prefix, rendered fragment, and template suffix
            concatenated verbatim.

        Raises
        ------
        TemplateError
            If the template does not contain exactly one ``{{content}}``
            marker.
        OSError
            If the template file cannot be read.
        """
        if template_path is None:
            shell = BUILTIN_TEMPLATE
        else:
            shell = template_path.read_text(encoding="utf-8")
        fragment = self.markdown(body)
        parts = shell.split(TEMPLATE_MARKER)
        if len(parts) != 2:
            label = template_path if template_path is not None else "<built-in>"
            msg = f"Invalid template {label}: no {TEMPLATE_MARKER}."
            raise TemplateError(msg)
        prefix, suffix = parts
        return f"{prefix}{fragment}{suffix}"


__all__ = ["PageRenderer"]
