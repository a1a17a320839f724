"""Tests for the development server's path fallbacks."""

from __future__ import annotations

import functools
import threading
import urllib.error
import urllib.request
from http import HTTPStatus
from http.server import ThreadingHTTPServer
from pathlib import Path

import pytest

from quilt_pages.serve import QuiltRequestHandler, resolve_request


@pytest.fixture
def served_root(tmp_path: Path) -> Path:
    (tmp_path / "guide").mkdir()
    (tmp_path / "index.html").write_text("home", encoding="utf-8")
    (tmp_path / "guide" / "start.html").write_text("start", encoding="utf-8")
    (tmp_path / "404.html").write_text("missing", encoding="utf-8")
    return tmp_path


def test_existing_file_is_served(served_root: Path) -> None:
    assert resolve_request(served_root, "/guide/start.html") == (
        served_root / "guide" / "start.html",
        HTTPStatus.OK,
    )


def test_root_serves_index(served_root: Path) -> None:
    assert resolve_request(served_root, "/") == (served_root / "index.html", HTTPStatus.OK)


def test_html_extension_fallback(served_root: Path) -> None:
    assert resolve_request(served_root, "/guide/start?ref=nav") == (
        served_root / "guide" / "start.html",
        HTTPStatus.OK,
    )


def test_not_found_page_fallback(served_root: Path) -> None:
    assert resolve_request(served_root, "/nope") == (
        served_root / "404.html",
        HTTPStatus.NOT_FOUND,
    )


def test_escaping_paths_never_resolve(served_root: Path) -> None:
    target, status = resolve_request(served_root, "/guide/../../secret")
    assert target == served_root / "404.html"
    assert status is HTTPStatus.NOT_FOUND


def test_plain_not_found_without_404_page(tmp_path: Path) -> None:
    assert resolve_request(tmp_path, "/nope") == (None, HTTPStatus.NOT_FOUND)


def test_handler_serves_fallbacks(served_root: Path) -> None:
    handler = functools.partial(QuiltRequestHandler, directory=str(served_root))
    server = ThreadingHTTPServer(("127.0.0.1", 0), handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    base = f"http://127.0.0.1:{server.server_port}"
    try:
        with urllib.request.urlopen(f"{base}/guide/start") as response:
            assert response.status == 200
            assert response.read() == b"start"

        with pytest.raises(urllib.error.HTTPError) as excinfo:
            urllib.request.urlopen(f"{base}/missing")
        assert excinfo.value.code == 404
        assert excinfo.value.read() == b"missing"
    finally:
        server.shutdown()
        server.server_close()
