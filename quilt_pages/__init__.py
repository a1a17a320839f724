"""Static-site builds with manifest-tracked cleanup.

quilt composes a source tree (``site/`` content, optional ``static/`` assets,
optional ``themes/`` templates) into HTML pages plus merged assets, and records
every artifact in a ``_quilt`` manifest so the next build can remove exactly
what it produced before regenerating.

Exports
-------
- ``app``: Cyclopts application exposing ``build`` and ``serve``.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``compose_site``: Build the typed site model from a source tree.
- ``SiteBuilder``: Render a composed site into an output directory.

Examples
--------
>>> from pathlib import Path
>>> from quilt_pages import SiteBuilder, compose_site
>>> site = compose_site(Path("."))  # doctest: +SKIP
>>> SiteBuilder(site, Path("public")).run()  # doctest: +SKIP
"""

from __future__ import annotations

from .builder import SiteBuilder
from .cli import app, main
from .composer import compose_site

__all__ = ["SiteBuilder", "app", "compose_site", "main"]
