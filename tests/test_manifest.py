from __future__ import annotations

from pathlib import Path, PurePosixPath

import pytest

from quilt_pages._constants import MANIFEST_HEADER
from quilt_pages.errors import ManifestError
from quilt_pages.manifest import BuildManifest, ManifestEntry, read_manifest, replay_manifest


def test_parse_entry_kinds() -> None:
    assert ManifestEntry.parse("# comment") is None
    assert ManifestEntry.parse("   ") is None
    assert ManifestEntry.parse("!static") == ManifestEntry(PurePosixPath("static"), recursive=True)
    assert ManifestEntry.parse("guide/start.html") == ManifestEntry(
        PurePosixPath("guide/start.html")
    )


def test_parse_keeps_surrounding_spaces_in_names() -> None:
    assert ManifestEntry.parse(" notes.html") == ManifestEntry(PurePosixPath(" notes.html"))
    assert ManifestEntry.parse("draft .html\r\n") == ManifestEntry(PurePosixPath("draft .html"))


@pytest.mark.parametrize("line", ["../escape.html", "/etc/passwd", "!", "!../up"])
def test_parse_rejects_entries_outside_build(line: str) -> None:
    with pytest.raises(ManifestError):
        ManifestEntry.parse(line)


def test_write_reverses_accumulation(tmp_path: Path) -> None:
    manifest = BuildManifest()
    manifest.add_path("guide")
    manifest.add_path("guide/start.html")
    manifest.add_path("intro.html")
    manifest.add_tree("static")

    path = manifest.write(tmp_path / "_quilt")

    assert path.read_text(encoding="utf-8").splitlines() == [
        MANIFEST_HEADER,
        "!static",
        "intro.html",
        "guide/start.html",
        "guide",
    ]
    assert [entry.to_line() for entry in read_manifest(path)] == manifest.removal_order()


def test_replay_removes_file_then_directory(tmp_path: Path) -> None:
    (tmp_path / "guide").mkdir()
    (tmp_path / "guide" / "start.html").write_text("x", encoding="utf-8")
    (tmp_path / "static" / "css").mkdir(parents=True)
    (tmp_path / "static" / "css" / "site.css").write_text("x", encoding="utf-8")
    (tmp_path / "untracked.txt").write_text("keep", encoding="utf-8")
    manifest_path = tmp_path / "_quilt"
    manifest_path.write_text("# header\n!static\nguide/start.html\nguide\n", encoding="utf-8")

    assert replay_manifest(tmp_path, manifest_path) == 3

    assert sorted(p.name for p in tmp_path.iterdir()) == ["untracked.txt"]


def test_replay_rejects_recursive_marker_on_file(tmp_path: Path) -> None:
    (tmp_path / "page.html").write_text("x", encoding="utf-8")
    manifest_path = tmp_path / "_quilt"
    manifest_path.write_text("!page.html\n", encoding="utf-8")

    with pytest.raises(ManifestError, match="Bad manifest entry"):
        replay_manifest(tmp_path, manifest_path)
    assert (tmp_path / "page.html").exists()


def test_replay_refuses_non_empty_directory(tmp_path: Path) -> None:
    (tmp_path / "guide").mkdir()
    (tmp_path / "guide" / "start.html").write_text("x", encoding="utf-8")
    manifest_path = tmp_path / "_quilt"
    manifest_path.write_text("guide\nguide/start.html\n", encoding="utf-8")

    with pytest.raises(OSError):
        replay_manifest(tmp_path, manifest_path)
    assert (tmp_path / "guide" / "start.html").exists()
