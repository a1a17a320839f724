"""Load per-page settings and project build profiles for quilt builds.

Page settings live next to each markdown file (``intro.toml`` or
``intro.yaml``) and name an optional theme and template. Build profiles live
in the project's ``Quilt.toml`` as an array of ``[[build]]`` tables, each
naming an output directory; one may be flagged as the default.

Examples
--------
>>> from pathlib import Path
>>> from quilt_pages.config import load_project_config
>>> profile = load_project_config(Path("Quilt.toml")).select()  # doctest: +SKIP
>>> profile.out  # doctest: +SKIP
PosixPath('public')
"""

from .loader import DEFAULT_PROJECT_CONFIG, load_page_settings, load_project_config
from .models import BuildProfile, ConfigError, PageSettings, ProjectConfig

__all__ = [
    "DEFAULT_PROJECT_CONFIG",
    "BuildProfile",
    "ConfigError",
    "PageSettings",
    "ProjectConfig",
    "load_page_settings",
    "load_project_config",
]
