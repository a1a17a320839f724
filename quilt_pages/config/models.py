"""Typed dataclasses describing quilt page settings and build profiles."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from quilt_pages.errors import ConfigError


@dc.dataclass(frozen=True, slots=True)
class PageSettings:
    """Theme and template references read from a page's config file."""

    theme: str | None = None
    template: str | None = None

    @property
    def requests_template(self) -> bool:
        """Return ``True`` when both a theme and a template are named."""
        return self.theme is not None and self.template is not None


@dc.dataclass(frozen=True, slots=True)
class BuildProfile:
    """Named output target declared under ``[[build]]`` in ``Quilt.toml``."""

    name: str
    out: Path
    default: bool = False
    pygments_style: str = "monokai"


@dc.dataclass(frozen=True, slots=True)
class ProjectConfig:
    """Every build profile declared by a project, in file order."""

    builds: tuple[BuildProfile, ...]

    def select(self, name: str | None = None) -> BuildProfile:
        """Return the profile called ``name``, or the default profile.

        Parameters
        ----------
        name : str or None, optional
            Profile to select. When ``None`` the first profile flagged
            ``default = true`` is returned.

        Returns
        -------
        BuildProfile
            The matching build profile.

        Raises
        ------
        ConfigError
            If no profile carries ``name``, or no name was given and no
            profile is marked as the default.
        """
        for build in self.builds:
            if name is not None and build.name == name:
                return build
            if name is None and build.default:
                return build
        if name is not None:
            msg = f"No build named {name}."
            raise ConfigError(msg, source="Pre-Build")
        msg = "No build specified and no default."
        raise ConfigError(msg, source="Pre-Build")


__all__ = ["BuildProfile", "ConfigError", "PageSettings", "ProjectConfig"]
