"""Manifest-tracked build of a composed site into an output directory.

:class:`SiteBuilder` drives one build through four steps:

1. Clear the previous output. When ``<output>/_quilt`` exists its entries are
   replayed and the manifest removed; an output directory without a manifest
   was not produced by quilt and is renamed to ``<name>-old-<unix-seconds>``
   instead of being deleted.
2. Create every section directory and render every page with content.
3. Merge site and theme assets into ``<output>/static``.
4. Write a new manifest listing every artifact in safe removal order.

Any error aborts the build where it happens; whatever was written is left for
the next build's manifest or rename step to clear.

Example
-------
>>> from pathlib import Path
>>> from quilt_pages.builder import SiteBuilder
>>> from quilt_pages.composer import compose_site
>>> site = compose_site(Path("."))  # doctest: +SKIP
>>> SiteBuilder(site, Path("public")).run().pages  # doctest: +SKIP
[PosixPath('public/intro.html'), PosixPath('public/guide/start.html')]
"""

from __future__ import annotations

import dataclasses as dc
import time
import typing as typ
from pathlib import Path, PurePosixPath

from ._constants import MANIFEST_FILENAME, STATIC_OUTPUT_DIR
from .assets import StaticMerger
from .logging import get_logger
from .manifest import BuildManifest, replay_manifest
from .renderer import PageRenderer
from .templates import TemplateResolver

if typ.TYPE_CHECKING:
    from .models import Site

logger = get_logger("builder")


@dc.dataclass(slots=True)
class BuildResult:
    """Summary of a finished build.

    Attributes
    ----------
    pages : list[Path]
        HTML files written, in generation order.
    skipped : list[Path]
        Keys of pages skipped for lack of a markdown file.
    manifest_path : Path
        Location of the manifest written for the next build.
    cleaned : int
        Number of previous-manifest entries replayed.
    renamed_to : Path or None
        Where an unmanaged output directory was moved, if one was.
    """

    pages: list[Path] = dc.field(default_factory=list)
    skipped: list[Path] = dc.field(default_factory=list)
    manifest_path: Path | None = None
    cleaned: int = 0
    renamed_to: Path | None = None


class SiteBuilder:
    """Render a :class:`~quilt_pages.models.Site` into ``output_dir``."""

    def __init__(
        self,
        site: Site,
        output_dir: Path,
        *,
        renderer: PageRenderer | None = None,
        resolver: TemplateResolver | None = None,
        clock: typ.Callable[[], float] = time.time,
    ) -> None:
        """Prepare a build of ``site`` into ``output_dir``.

        Parameters
        ----------
        site : Site
            Composed site model; read only.
        output_dir : Path
            Build directory holding the generated tree and its manifest.
        renderer : PageRenderer, optional
            Markdown renderer; defaults to :class:`PageRenderer`.
        resolver : TemplateResolver, optional
            Template lookup; defaults to one bound to ``site.themes_dir``.
        clock : Callable[[], float], optional
            Source of the Unix timestamp used when renaming unmanaged output.
        """
        self.site = site
        self.output_dir = output_dir
        self.renderer = renderer or PageRenderer()
        self.resolver = resolver or TemplateResolver(site.themes_dir)
        self._clock = clock

    @property
    def manifest_path(self) -> Path:
        """Location of the ``_quilt`` manifest inside the output directory."""
        return self.output_dir / MANIFEST_FILENAME

    def run(self) -> BuildResult:
        """Clear the previous output, then generate pages, assets, and manifest.

        Returns
        -------
        BuildResult
            Written pages, skipped pages, and cleanup details.

        Raises
        ------
        ManifestError
            If the previous manifest holds an invalid entry.
        TemplateError
            If a resolved template lacks a single ``{{content}}`` marker.
        OSError
            If any filesystem operation fails.
        """
        result = BuildResult()
        self._clear_previous(result)

        manifest = BuildManifest()
        templates = self._generate(manifest, result)
        StaticMerger(
            self.output_dir,
            static_dir=self.site.static_dir,
            themes_dir=self.site.themes_dir,
        ).run(templates)
        manifest.add_tree(STATIC_OUTPUT_DIR)

        result.manifest_path = manifest.write(self.manifest_path)
        return result

    def _clear_previous(self, result: BuildResult) -> None:
        """Replay the previous manifest, or move unmanaged output aside."""
        if not self.output_dir.exists():
            return
        if not self.output_dir.is_dir():
            msg = f"Build output {self.output_dir} exists and is not a directory"
            raise NotADirectoryError(msg)
        if self.manifest_path.is_file():
            result.cleaned = replay_manifest(self.output_dir, self.manifest_path)
            logger.info("cleaned %d artifacts from previous build", result.cleaned)
            return
        result.renamed_to = self._rename_unmanaged()

    def _rename_unmanaged(self) -> Path:
        """Move an output directory without a manifest to a timestamped sibling."""
        absolute = self.output_dir.absolute()
        target = absolute.with_name(f"{absolute.name}-old-{int(self._clock())}")
        absolute.rename(target)
        logger.warning("No %s manifest in %s; moved it to %s", MANIFEST_FILENAME, absolute, target)
        return target

    def _generate(self, manifest: BuildManifest, result: BuildResult) -> set[tuple[str, str]]:
        """Create section directories and write every page with content.

        Returns
        -------
        set[tuple[str, str]]
            ``(theme, template)`` pairs resolved by at least one page.
        """
        recorded: set[PurePosixPath] = set()
        for section in self.site.sections:
            (self.output_dir / section).mkdir(parents=True, exist_ok=True)
            relative = PurePosixPath(section.as_posix())
            if relative.parts and relative not in recorded:
                recorded.add(relative)
                manifest.add_path(relative)

        resolved: set[tuple[str, str]] = set()
        for key, page in self.site.pages.items():
            if page.content_path is None:
                logger.warning(
                    "Page %s (%s) does not have an associated markdown file - skipping.",
                    page.name,
                    key,
                )
                result.skipped.append(key)
                continue

            template = self.resolver.resolve(page.settings)
            if template is not None:
                resolved.add((template.theme, template.template))
            body = page.content_path.read_text(encoding="utf-8")
            html = self.renderer.render(body, template.path if template else None)

            relative = self.site.output_path(page)
            output_path = self.output_dir.joinpath(*relative.parts)
            output_path.write_text(html, encoding="utf-8")
            manifest.add_path(relative)
            result.pages.append(output_path)
            logger.debug("wrote %s", output_path)
        return resolved


def build_site(site: Site, output_dir: Path, *, pygments_style: str = "monokai") -> BuildResult:
    """Build ``site`` into ``output_dir`` with a default renderer."""
    return SiteBuilder(site, output_dir, renderer=PageRenderer(pygments_style)).run()


__all__ = ["BuildResult", "SiteBuilder", "build_site"]
