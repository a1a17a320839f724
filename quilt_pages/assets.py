"""Copy static asset trees and stage the merged ``static/`` output."""

from __future__ import annotations

import shutil
import typing as typ

from ._constants import STAGING_DIR_NAME, STATIC_OUTPUT_DIR, THEME_STATIC_DIR, THEMES_OUTPUT_DIR
from .logging import get_logger

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = get_logger("assets")


def copy_tree(source: Path, destination: Path) -> None:
    """Copy every file below ``source`` into ``destination``.

    Relative structure is preserved and existing files are overwritten, so
    several sources can be layered into one destination.
    """
    for path in sorted(source.rglob("*")):
        if not path.is_file():
            continue
        target = destination / path.relative_to(source)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(path, target)
    destination.mkdir(parents=True, exist_ok=True)


class StaticMerger:
    """Assemble site and theme assets in a staging area, then publish them."""

    def __init__(
        self,
        build_dir: Path,
        *,
        static_dir: Path | None,
        themes_dir: Path | None,
    ) -> None:
        """Stage under ``<build_dir>/.quilt_tmp`` and publish to ``<build_dir>/static``."""
        self.build_dir = build_dir
        self.static_dir = static_dir
        self.themes_dir = themes_dir
        self.staging_root = build_dir / STAGING_DIR_NAME
        self.staging_static = self.staging_root / STATIC_OUTPUT_DIR

    def run(self, templates: typ.Iterable[tuple[str, str]]) -> Path:
        """Merge assets for the resolved ``(theme, template)`` pairs.

        Returns
        -------
        Path
            The published ``static`` output directory.
        """
        if self.staging_root.exists():
            shutil.rmtree(self.staging_root)

        if self.static_dir is not None:
            copy_tree(self.static_dir, self.staging_static)
        else:
            self.staging_static.mkdir(parents=True)

        if self.themes_dir is not None:
            for theme, template in sorted(set(templates)):
                self._stage_theme(theme, template)

        published = self.build_dir / STATIC_OUTPUT_DIR
        copy_tree(self.staging_static, published)
        shutil.rmtree(self.staging_root)
        return published

    def _stage_theme(self, theme: str, template: str) -> None:
        """Copy a theme's shared assets and one template's own assets."""
        themes_dir = typ.cast("Path", self.themes_dir)
        theme_dir = themes_dir / theme
        staged_theme = self.staging_static / THEMES_OUTPUT_DIR / theme

        theme_static = theme_dir / THEME_STATIC_DIR
        if theme_static.is_dir():
            logger.debug("staging %s", theme_static)
            copy_tree(theme_static, staged_theme)

        template_assets = theme_dir / template
        if template_assets.is_dir():
            logger.debug("staging %s", template_assets)
            copy_tree(template_assets, staged_theme / template)


__all__ = ["StaticMerger", "copy_tree"]
