"""Shared fixtures for quilt tests."""

from __future__ import annotations

import collections.abc as cabc
import logging
import textwrap
from pathlib import Path

import pytest

TreeWriter = cabc.Callable[[cabc.Mapping[str, str]], Path]


@pytest.fixture
def write_tree(tmp_path: Path) -> TreeWriter:
    """Return a writer that materialises ``path -> contents`` below a project root.

    Keys ending in ``/`` create empty directories. The project root is
    returned so tests can compose it directly.
    """
    root = tmp_path / "project"
    root.mkdir()

    def _write(files: cabc.Mapping[str, str]) -> Path:
        for relative, content in files.items():
            path = root / relative
            if relative.endswith("/"):
                path.mkdir(parents=True, exist_ok=True)
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return root

    return _write


@pytest.fixture(autouse=True)
def _reset_quilt_logger() -> cabc.Iterator[None]:
    """Undo ``configure_logging`` so caplog sees quilt records in every test."""
    yield
    logger = logging.getLogger("quilt")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
