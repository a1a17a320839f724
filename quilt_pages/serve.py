"""Development server for a built quilt site.

Requests are answered from the build directory. A path that does not exist is
retried with an ``.html`` extension so ``/guide/start`` serves
``guide/start.html``; failing that, the site's own ``404.html`` is returned
with a 404 status, and only then a plain "not found" error.
"""

from __future__ import annotations

import functools
import io
import posixpath
import typing as typ
import urllib.parse
from http import HTTPStatus
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

from ._constants import NOT_FOUND_PAGE, OUTPUT_EXTENSION
from .logging import get_logger

logger = get_logger("serve")


def resolve_request(root: Path, request_path: str) -> tuple[Path | None, HTTPStatus]:
    """Map a URL path onto a file below ``root``.

    Parameters
    ----------
    root : Path
        Directory being served.
    request_path : str
        Raw request path, possibly with a query string.

    Returns
    -------
    tuple[Path | None, HTTPStatus]
        The file to send and the status to send it with. ``None`` means
        nothing matched, not even ``404.html``.
    """
    path = urllib.parse.urlsplit(request_path).path
    normalized = posixpath.normpath(urllib.parse.unquote(path)).lstrip("/")
    parts = [part for part in normalized.split("/") if part not in {"", "."}]
    if ".." not in parts:
        candidate = root.joinpath(*parts)
        if candidate.is_file():
            return candidate, HTTPStatus.OK
        if candidate.is_dir() and (candidate / "index.html").is_file():
            return candidate / "index.html", HTTPStatus.OK
        if parts:
            alternative = candidate.with_name(f"{candidate.name}.{OUTPUT_EXTENSION}")
            if alternative.is_file():
                return alternative, HTTPStatus.OK
    not_found = root / NOT_FOUND_PAGE
    if not_found.is_file():
        return not_found, HTTPStatus.NOT_FOUND
    return None, HTTPStatus.NOT_FOUND


class QuiltRequestHandler(SimpleHTTPRequestHandler):
    """Serve files with ``.html`` and ``404.html`` fallbacks."""

    def send_head(self) -> typ.BinaryIO | None:
        """Resolve the request and send headers for the chosen file."""
        root = Path(self.directory)
        target, status = resolve_request(root, self.path)
        if target is None:
            self.send_error(HTTPStatus.NOT_FOUND, "not found")
            return None
        data = target.read_bytes()
        self.send_response(status)
        self.send_header("Content-type", self.guess_type(str(target)))
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        return io.BytesIO(data)

    def log_message(self, format: str, *args: typ.Any) -> None:  # noqa: A002 - stdlib signature
        logger.info(format, *args)


def serve(directory: Path, *, host: str = "127.0.0.1", port: int = 8000) -> None:
    """Serve ``directory`` until interrupted."""
    if not directory.is_dir():
        msg = f"Build directory {directory} does not exist"
        raise FileNotFoundError(msg)
    handler = functools.partial(QuiltRequestHandler, directory=str(directory))
    with ThreadingHTTPServer((host, port), handler) as server:
        print(f"serving {directory} at http://{host}:{server.server_port}/")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("stopping server")


__all__ = ["QuiltRequestHandler", "resolve_request", "serve"]
