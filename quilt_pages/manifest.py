r"""Read, replay, and write the ``_quilt`` build manifest.

A build records every artifact it creates so the next build can remove exactly
those artifacts before regenerating. The manifest is a line-oriented text file
at the output root:

* ``# ...`` lines are comments and are skipped.
* ``!<path>`` names a directory removed together with its contents.
* ``<path>`` names a file, or a directory that must already be empty.

Entries are stored in removal order. A build accumulates entries as sections,
then pages, then ``!static``; reversing that list yields an order in which
replaying top to bottom never asks to remove a non-empty directory.

Example
-------
>>> from quilt_pages.manifest import BuildManifest
>>> manifest = BuildManifest()
>>> manifest.add_path("guide")
>>> manifest.add_path("guide/start.html")
>>> manifest.add_tree("static")
>>> manifest.removal_order()
['!static', 'guide/start.html', 'guide']
"""

from __future__ import annotations

import dataclasses as dc
import shutil
import typing as typ
from pathlib import PurePosixPath

from ._constants import COMMENT_MARKER, MANIFEST_HEADER, RECURSIVE_MARKER
from .errors import ManifestError
from .logging import get_logger

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = get_logger("manifest")


@dc.dataclass(frozen=True, slots=True)
class ManifestEntry:
    """One artifact recorded by a build.

    Attributes
    ----------
    path : PurePosixPath
        Artifact location relative to the output directory.
    recursive : bool
        ``True`` when the directory is removed with all of its contents.
    """

    path: PurePosixPath
    recursive: bool = False

    @classmethod
    def parse(cls, line: str) -> ManifestEntry | None:
        """Return the entry described by ``line``; ``None`` for comments and blanks."""
        text = line.rstrip("\r\n")
        if not text.strip() or text.startswith(COMMENT_MARKER):
            return None
        recursive = text.startswith(RECURSIVE_MARKER)
        if recursive:
            text = text[len(RECURSIVE_MARKER) :]
        path = PurePosixPath(text)
        if not text or path.is_absolute() or ".." in path.parts:
            msg = f"Bad manifest entry: {text!r} is outside the build directory."
            raise ManifestError(msg)
        return cls(path=path, recursive=recursive)

    def to_line(self) -> str:
        """Serialize the entry as a manifest line."""
        prefix = RECURSIVE_MARKER if self.recursive else ""
        return f"{prefix}{self.path.as_posix()}"

    def remove(self, build_dir: Path) -> None:
        """Delete the artifact this entry names below ``build_dir``.

        Raises
        ------
        ManifestError
            If a recursive entry does not name a directory.
        OSError
            If the removal fails, including ``rmdir`` on a non-empty directory.
        """
        target = build_dir.joinpath(*self.path.parts)
        if self.recursive:
            if not target.is_dir():
                msg = f"Bad manifest entry: {RECURSIVE_MARKER} precedes a file name: {self.path}"
                raise ManifestError(msg)
            shutil.rmtree(target)
        elif target.is_dir():
            target.rmdir()
        else:
            target.unlink()
        logger.debug("removed %s", target)


class BuildManifest:
    """Accumulate artifacts in creation order and persist them for removal."""

    def __init__(self, entries: typ.Iterable[ManifestEntry] = ()) -> None:
        """Start from ``entries``, given in creation order."""
        self.entries: list[ManifestEntry] = list(entries)

    def add_path(self, path: str | PurePosixPath) -> None:
        """Record a file or a directory that will be empty when its turn comes."""
        self.entries.append(ManifestEntry(PurePosixPath(path)))

    def add_tree(self, path: str | PurePosixPath) -> None:
        """Record a directory removed recursively."""
        self.entries.append(ManifestEntry(PurePosixPath(path), recursive=True))

    def removal_order(self) -> list[str]:
        """Return manifest lines in the order they must be replayed."""
        return [entry.to_line() for entry in reversed(self.entries)]

    def write(self, path: Path) -> Path:
        """Persist the manifest at ``path`` in removal order."""
        lines = [MANIFEST_HEADER, *self.removal_order()]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path


def read_manifest(path: Path) -> list[ManifestEntry]:
    """Parse the manifest at ``path`` into entries in removal order."""
    text = path.read_text(encoding="utf-8")
    entries: list[ManifestEntry] = []
    for line in text.splitlines():
        entry = ManifestEntry.parse(line)
        if entry is not None:
            entries.append(entry)
    return entries


def replay_manifest(build_dir: Path, manifest_path: Path) -> int:
    """Remove every artifact listed in ``manifest_path``, then the manifest.

    Parameters
    ----------
    build_dir : Path
        Output directory the manifest entries are relative to.
    manifest_path : Path
        The ``_quilt`` file written by the previous build.

    Returns
    -------
    int
        Number of entries replayed.

    Raises
    ------
    ManifestError
        If an entry is malformed or a recursive entry names a file.
    OSError
        If a listed artifact cannot be removed.
    """
    entries = read_manifest(manifest_path)
    for entry in entries:
        entry.remove(build_dir)
    manifest_path.unlink()
    return len(entries)


__all__ = ["BuildManifest", "ManifestEntry", "read_manifest", "replay_manifest"]
