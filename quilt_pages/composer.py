"""Compose a typed :class:`~quilt_pages.models.Site` from a source tree.

The composer classifies the source root, then walks the ``site`` content root
once, depth first and in sorted name order. Directories become sections;
``.md`` files and their sibling config files (same stem, same section) are
paired into pages. Static and themes roots are only located, never walked.

Example
-------
>>> from pathlib import Path
>>> from quilt_pages.composer import compose_site
>>> site = compose_site(Path("."))  # doctest: +SKIP
>>> sorted(str(key) for key in site.pages)  # doctest: +SKIP
['guide/start', 'intro']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
from pathlib import Path

from ._constants import CONFIG_EXTENSIONS, CONTENT_EXTENSION, STATIC_OUTPUT_DIR
from .classifier import classify_source
from .config import load_page_settings
from .errors import CompositionError, WalkError
from .logging import get_logger
from .models import Page, Site

logger = get_logger("composer")


@dc.dataclass(slots=True)
class _WalkState:
    """Sequential state accumulated over one walk of the content root."""

    sections: list[Path] = dc.field(default_factory=lambda: [Path()])
    current_section: Path = dc.field(default_factory=Path)
    current_id: int = 0
    pages: dict[Path, Page] = dc.field(default_factory=dict)

    def enter_section(self, section: Path) -> None:
        """Make ``section`` current, appending it unless it was the last one."""
        if self.sections[-1] != section:
            self.sections.append(section)
        self.current_section = section
        self.current_id = len(self.sections) - 1

    def section_id(self, section: Path) -> int:
        """Return the index of the most recent entry matching ``section``."""
        if section == self.current_section:
            return self.current_id
        for index in range(len(self.sections) - 1, -1, -1):
            if self.sections[index] == section:
                self.current_section = section
                self.current_id = index
                return index
        msg = f"Section {section} was never entered during the walk."
        raise CompositionError(msg)


class SiteComposer:
    """Walk a source tree and pair its content files into pages."""

    def __init__(self, source_root: Path) -> None:
        """Remember the ``source_root`` holding ``site/``, ``static/`` and ``themes/``."""
        self.source_root = source_root

    def compose(self) -> Site:
        """Classify the source tree and build the site model.

        Returns
        -------
        Site
            Sections in walk order and pages keyed by ``section / stem``.

        Raises
        ------
        CompositionError
            If the content root is missing, a file has an unsupported
            extension, or a page receives two files of the same kind.
        ConfigError
            If a page config file cannot be decoded.
        WalkError
            If a directory cannot be listed.
        """
        layout = classify_source(self.source_root)
        content_dir = layout.content_dir
        state = _WalkState()

        for path, is_dir in _walk_tree(content_dir):
            relative = path.relative_to(content_dir)
            if is_dir:
                if relative.parts[0] == STATIC_OUTPUT_DIR:
                    msg = (
                        f"Section {relative} collides with the '{STATIC_OUTPUT_DIR}' "
                        "output directory."
                    )
                    raise CompositionError(msg)
                state.enter_section(relative)
                continue
            self._visit_file(state, content_dir, path)

        return Site(
            content_dir=content_dir,
            static_dir=layout.static_dir,
            themes_dir=layout.themes_dir,
            sections=tuple(state.sections),
            pages=state.pages,
        )

    @staticmethod
    def _visit_file(state: _WalkState, content_dir: Path, path: Path) -> None:
        """Pair ``path`` into the page keyed by its section and stem."""
        if not path.suffix:
            logger.debug("ignoring extensionless file %s", path)
            return
        extension = path.suffix[1:]
        is_content = extension == CONTENT_EXTENSION
        if not is_content and extension not in CONFIG_EXTENSIONS:
            msg = f"{path} is not a valid page file."
            raise CompositionError(msg)

        section = path.parent.relative_to(content_dir)
        key = section / path.stem
        page = state.pages.get(key)
        if page is None:
            page = Page(name=path.stem, section_id=state.section_id(section))
            state.pages[key] = page

        if is_content:
            if page.has_content:
                msg = f"Unexpected file: {path}"
                raise CompositionError(msg)
            page.content_path = path
            logger.debug("paired content %s -> %s", path, key)
            return

        if page.has_config:
            msg = f"Unexpected file: {path}"
            raise CompositionError(msg)
        page.config_path = path
        page.settings = load_page_settings(path)
        logger.debug("paired config %s -> %s", path, key)


def compose_site(source_root: Path) -> Site:
    """Compose the site found under ``source_root``."""
    return SiteComposer(source_root).compose()


def _walk_tree(directory: Path) -> cabc.Iterator[tuple[Path, bool]]:
    """Yield ``(path, is_dir)`` for every entry below ``directory``, pre-order."""
    try:
        entries = sorted(directory.iterdir())
    except OSError as exc:
        msg = f"{directory}: {exc.strerror or exc}"
        raise WalkError(msg) from exc
    for entry in entries:
        if entry.is_dir():
            yield entry, True
            yield from _walk_tree(entry)
        else:
            yield entry, False


__all__ = ["SiteComposer", "compose_site"]
