"""Dataclasses describing a composed quilt site."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path, PurePosixPath

from ._constants import OUTPUT_EXTENSION
from .config import PageSettings


@dc.dataclass(slots=True)
class Page:
    """One logical page: a markdown file plus an optional sibling config.

    Attributes
    ----------
    name : str
        File stem shared by the paired files.
    section_id : int
        Position of the owning section in :attr:`Site.sections`.
    settings : PageSettings
        Theme and template references from the config file.
    content_path : Path or None
        The markdown file, once discovered.
    config_path : Path or None
        The config file, once discovered.
    """

    name: str
    section_id: int
    settings: PageSettings = dc.field(default_factory=PageSettings)
    content_path: Path | None = None
    config_path: Path | None = None

    @property
    def has_content(self) -> bool:
        """Return ``True`` when a markdown file backs this page."""
        return self.content_path is not None

    @property
    def has_config(self) -> bool:
        """Return ``True`` when a config file backs this page."""
        return self.config_path is not None


@dc.dataclass(frozen=True, slots=True)
class Site:
    """The typed model produced by one compose pass over a source tree.

    Attributes
    ----------
    content_dir : Path
        The ``site`` content root.
    static_dir : Path or None
        Site-wide static assets root.
    themes_dir : Path or None
        Root holding ``<theme>/<template>.html`` files.
    sections : tuple[Path, ...]
        Section paths relative to the content root, in walk order. Index 0 is
        always the root section ``Path()``.
    pages : dict[Path, Page]
        Pages keyed by ``section path / stem``, in discovery order.
    """

    content_dir: Path
    static_dir: Path | None
    themes_dir: Path | None
    sections: tuple[Path, ...]
    pages: dict[Path, Page]

    def section_path(self, page: Page) -> Path:
        """Return the section directory ``page`` belongs to."""
        return self.sections[page.section_id]

    def output_path(self, page: Page) -> PurePosixPath:
        """Return the output-relative HTML path for ``page``."""
        section = PurePosixPath(self.section_path(page).as_posix())
        return section / f"{page.name}.{OUTPUT_EXTENSION}"


__all__ = ["Page", "Site"]
