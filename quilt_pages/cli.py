"""Cyclopts CLI entrypoint for building and serving quilt sites.

The ``quilt`` console script reads build profiles from ``Quilt.toml``,
composes the ``site/``, ``static/`` and ``themes/`` directories of the source
tree, and writes the rendered output into the selected profile's ``out``
directory. ``quilt serve`` serves that directory for local previews.

Every fatal error is reported once, tagged with the phase and subsystem that
raised it, and the process exits with status 1.

Examples
--------
Build the default profile:

>>> from quilt_pages.cli import main
>>> main(["build"])  # doctest: +SKIP

Build and preview a named profile:

>>> main(["build", "preview"])  # doctest: +SKIP
>>> main(["serve", "preview", "--port", "8080"])  # doctest: +SKIP
"""

from __future__ import annotations

import contextlib
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .builder import build_site
from .composer import compose_site
from .config import DEFAULT_PROJECT_CONFIG, BuildProfile, load_project_config
from .errors import QuiltError
from .logging import configure_logging
from .serve import serve as serve_directory

app = App(name="quilt", config=cyclopts.config.Env("QUILT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@contextlib.contextmanager
def _phase(name: str) -> typ.Iterator[None]:
    """Turn any fatal error raised inside the block into a tagged exit."""
    try:
        yield
    except QuiltError as exc:
        _fail(name, exc.source, exc.message)
    except (OSError, UnicodeDecodeError) as exc:
        _fail(name, "IO", str(exc))


def _fail(phase: str, source: str, message: str) -> typ.NoReturn:
    print(f"Error: [{phase}] [{source}] {message}", file=sys.stderr)
    raise SystemExit(1)


def _load_profile(config: Path, name: str | None) -> BuildProfile:
    """Load ``config`` and select the profile, exiting on failure."""
    with _phase("Init"):
        profile = load_project_config(config).select(name)
    if name is None:
        print(f"No build specified, using default: {profile.name}")
    return profile


def _output_dir(config: Path, profile: BuildProfile) -> Path:
    """Resolve a profile's ``out`` directory relative to the config file."""
    if profile.out.is_absolute():
        return profile.out
    return config.parent / profile.out


@app.command(help="Compose the source tree and build the selected profile.")
def build(
    name: typ.Annotated[
        str | None, Parameter(help="Build profile name; defaults to the default profile")
    ] = None,
    *,
    source: typ.Annotated[
        Path, Parameter(help="Source tree holding site/, static/ and themes/")
    ] = Path("."),
    config: typ.Annotated[
        Path, Parameter(help="Path to the project build profiles")
    ] = DEFAULT_PROJECT_CONFIG,
    verbose: typ.Annotated[bool, Parameter(help="Log every file touched")] = False,
) -> None:
    """Build the site for one profile declared in ``Quilt.toml``.

    Parameters
    ----------
    name : str or None, optional
        Profile to build; when ``None`` the profile marked ``default = true``
        is used.
    source : Path, optional
        Source tree to compose. Defaults to the working directory.
    config : Path, optional
        Project configuration file listing ``[[build]]`` profiles.
    verbose : bool, optional
        Enable debug logging.

    Returns
    -------
    None
        Writes the output tree and prints each generated page.

    Raises
    ------
    SystemExit
        With status 1 when configuration, composition, or the build fails.
    """
    configure_logging(verbose=verbose)
    profile = _load_profile(config, name)
    output_dir = _output_dir(config, profile)

    print(f"Initiating build: {_format_path(source)} => {_format_path(output_dir)}")
    print("....composing site")
    with _phase("Composition"):
        site = compose_site(source)

    print("....building site")
    with _phase("Build"):
        result = build_site(site, output_dir, pygments_style=profile.pygments_style)
    if result.renamed_to is not None:
        print(f"moved unmanaged output to {_format_path(result.renamed_to)}")
    for path in result.pages:
        print(f"wrote {_format_path(path)}")
    print("Build Complete")


@app.command(help="Serve a profile's build output for local previews.")
def serve(
    name: typ.Annotated[
        str | None, Parameter(help="Build profile name; defaults to the default profile")
    ] = None,
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to the project build profiles")
    ] = DEFAULT_PROJECT_CONFIG,
    host: typ.Annotated[str, Parameter(help="Interface to bind")] = "127.0.0.1",
    port: typ.Annotated[int, Parameter(help="Port to listen on")] = 8000,
) -> None:
    """Serve the output directory of the selected build profile."""
    configure_logging()
    profile = _load_profile(config, name)
    with _phase("Serve"):
        serve_directory(_output_dir(config, profile), host=host, port=port)


def main(tokens: list[str] | None = None) -> None:
    """Invoke the Cyclopts application that powers the ``quilt`` command."""
    app(tokens)


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
