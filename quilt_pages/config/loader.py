"""Load page settings and ``Quilt.toml`` build profiles into dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import tomlkit
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from tomlkit.exceptions import TOMLKitError

from quilt_pages.errors import ConfigError

from .models import BuildProfile, PageSettings, ProjectConfig

DEFAULT_PROJECT_CONFIG = Path("Quilt.toml")
_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def load_page_settings(path: Path) -> PageSettings:
    """Parse a page config file into :class:`PageSettings`.

    Parameters
    ----------
    path : Path
        A ``.toml``, ``.yaml`` or ``.yml`` file sitting next to a page's
        markdown file.

    Returns
    -------
    PageSettings
        The ``theme`` and ``template`` references; both ``None`` for an empty
        document. Unknown keys are ignored.

    Raises
    ------
    ConfigError
        If the document cannot be parsed, is not a mapping, or holds a
        non-string ``theme``/``template`` value, or a value that is not a
        single path component.
    OSError
        If the file cannot be read.
    """
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in _YAML_SUFFIXES:
        raw = _parse_yaml(text, path)
    else:
        raw = _parse_toml(text, path)
    return PageSettings(
        theme=_optional_str(raw.get("theme"), path),
        template=_optional_str(raw.get("template"), path),
    )


def load_project_config(path: Path = DEFAULT_PROJECT_CONFIG) -> ProjectConfig:
    """Load the ``[[build]]`` profiles declared in ``Quilt.toml``.

    Raises
    ------
    ConfigError
        If the file is missing, cannot be decoded, or a build table lacks a
        ``name`` or ``out`` value.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Could not open {path.name}"
        raise ConfigError(msg, source="Init") from exc
    try:
        raw = tomlkit.parse(text).unwrap()
    except TOMLKitError as exc:
        msg = f"Could not decode {path.name}"
        raise ConfigError(msg) from exc

    builds_raw = raw.get("build") or []
    if not isinstance(builds_raw, list):
        msg = f"Could not decode {path.name}: 'build' must be an array of tables"
        raise ConfigError(msg)
    builds = tuple(_build_profile(entry, path) for entry in builds_raw)
    return ProjectConfig(builds=builds)


def _build_profile(payload: object, path: Path) -> BuildProfile:
    """Build a BuildProfile from one ``[[build]]`` table."""
    if not isinstance(payload, dict):
        msg = f"Could not decode {path.name}: build entries must be tables"
        raise ConfigError(msg)
    name = payload.get("name")
    out = payload.get("out")
    if not isinstance(name, str) or not isinstance(out, str):
        msg = f"Could not decode {path.name}: build entries need 'name' and 'out'"
        raise ConfigError(msg)
    return BuildProfile(
        name=name,
        out=Path(out),
        default=bool(payload.get("default", False)),
        pygments_style=str(payload.get("pygments_style", "monokai")),
    )


def _parse_toml(text: str, path: Path) -> dict[str, typ.Any]:
    try:
        return tomlkit.parse(text).unwrap()
    except TOMLKitError as exc:
        msg = f"Could not decode {path}"
        raise ConfigError(msg, source="Toml") from exc


def _parse_yaml(text: str, path: Path) -> dict[str, typ.Any]:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(text)
    except YAMLError as exc:
        msg = f"Could not decode {path}"
        raise ConfigError(msg, source="Yaml") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        msg = f"Could not decode {path}: top-level YAML structure must be a mapping"
        raise ConfigError(msg, source="Yaml")
    return dict(loaded)


def _optional_str(value: object | None, path: Path) -> str | None:
    """Return ``value`` when it is a single path component, ``None`` when absent."""
    source = "Yaml" if path.suffix.lower() in _YAML_SUFFIXES else "Toml"
    match value:
        case None:
            return None
        case str() if _is_plain_name(value):
            return value
        case str():
            msg = f"Could not decode {path}: {value!r} is not a plain theme or template name"
            raise ConfigError(msg, source=source)
        case _:
            msg = f"Could not decode {path}: theme and template must be strings"
            raise ConfigError(msg, source=source)


def _is_plain_name(value: str) -> bool:
    """Return ``True`` when ``value`` names one entry inside a directory."""
    return value not in {"", ".", ".."} and not any(sep in value for sep in "/\\")


__all__ = ["DEFAULT_PROJECT_CONFIG", "load_page_settings", "load_project_config"]
