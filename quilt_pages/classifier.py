"""Classify the top-level directories of a quilt source tree.

Only three names are meaningful directly under the source root: ``site`` (the
content root, required), ``static`` (site-wide assets) and ``themes``
(templates and their assets). Everything else at the top level is ignored and
never descended into.

Example
-------
>>> from pathlib import Path
>>> from quilt_pages.classifier import classify_source
>>> layout = classify_source(Path("."))  # doctest: +SKIP
>>> layout.content_dir  # doctest: +SKIP
PosixPath('site')
"""

from __future__ import annotations

import dataclasses as dc
import enum
from pathlib import Path

from ._constants import CONTENT_DIR_NAME, STATIC_DIR_NAME, THEMES_DIR_NAME
from .errors import CompositionError, WalkError
from .logging import get_logger

logger = get_logger("classifier")


class DirectoryRole(enum.Enum):
    """Role played by an immediate child directory of the source root."""

    CONTENT = CONTENT_DIR_NAME
    STATIC = STATIC_DIR_NAME
    THEMES = THEMES_DIR_NAME
    UNCLASSIFIED = ""


@dc.dataclass(frozen=True, slots=True)
class SourceLayout:
    """Locations of the reserved roots found under a source tree.

    Attributes
    ----------
    root : Path
        The source root that was scanned.
    content_dir : Path
        The ``site`` content root.
    static_dir : Path or None
        The ``static`` assets root, when present.
    themes_dir : Path or None
        The ``themes`` root, when present.
    """

    root: Path
    content_dir: Path
    static_dir: Path | None = None
    themes_dir: Path | None = None


def classify_directory(root: Path, path: Path) -> DirectoryRole:
    """Return the role of ``path`` relative to the source ``root``.

    Matching is exact and case-sensitive, and applies only to immediate
    children of ``root``.
    """
    if path.parent != root:
        return DirectoryRole.UNCLASSIFIED
    for role in (DirectoryRole.CONTENT, DirectoryRole.STATIC, DirectoryRole.THEMES):
        if path.name == role.value:
            return role
    return DirectoryRole.UNCLASSIFIED


def classify_source(root: Path) -> SourceLayout:
    """Scan the immediate children of ``root`` and locate the reserved roots.

    Parameters
    ----------
    root : Path
        Source tree to classify.

    Returns
    -------
    SourceLayout
        Content root plus the optional static and themes roots.

    Raises
    ------
    WalkError
        If ``root`` cannot be listed.
    CompositionError
        If no ``site`` content root exists under ``root``.
    """
    try:
        children = sorted(root.iterdir())
    except OSError as exc:
        msg = f"{root}: {exc.strerror or exc}"
        raise WalkError(msg) from exc

    found: dict[DirectoryRole, Path] = {}
    for child in children:
        if not child.is_dir():
            continue
        role = classify_directory(root, child)
        if role is DirectoryRole.UNCLASSIFIED:
            logger.debug("ignoring top-level directory %s", child)
            continue
        found[role] = child

    content_dir = found.get(DirectoryRole.CONTENT)
    if content_dir is None:
        msg = "content root not found"
        raise CompositionError(msg)
    return SourceLayout(
        root=root,
        content_dir=content_dir,
        static_dir=found.get(DirectoryRole.STATIC),
        themes_dir=found.get(DirectoryRole.THEMES),
    )


__all__ = ["DirectoryRole", "SourceLayout", "classify_directory", "classify_source"]
