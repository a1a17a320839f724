"""Tagged exceptions raised by the quilt build pipeline.

Every fatal condition is raised as a :class:`QuiltError` subclass carrying the
subsystem that detected it. The CLI is the single place that catches these,
prefixes the build phase, and exits non-zero.

Examples
--------
>>> from quilt_pages.errors import CompositionError
>>> str(CompositionError("content root not found"))
'[Composer] content root not found'
"""

from __future__ import annotations


class QuiltError(Exception):
    """Base class for fatal build errors tagged with their origin subsystem."""

    default_source = "Quilt"

    def __init__(self, message: str, *, source: str | None = None) -> None:
        """Store the human-readable ``message`` and the ``source`` tag."""
        super().__init__(message)
        self.message = message
        self.source = source or self.default_source

    def __str__(self) -> str:
        return f"[{self.source}] {self.message}"


class WalkError(QuiltError):
    """Raised when the source tree cannot be traversed."""

    default_source = "WalkDir"


class CompositionError(QuiltError):
    """Raised when the content tree breaks a page pairing invariant."""

    default_source = "Composer"


class ConfigError(QuiltError):
    """Raised when a page config or build profile cannot be decoded."""

    default_source = "Toml"


class TemplateError(QuiltError):
    """Raised when a resolved template lacks a single substitution marker."""

    default_source = "Generator"


class ManifestError(QuiltError):
    """Raised when a previous build manifest contains an invalid entry."""

    default_source = "Manifest"


__all__ = [
    "CompositionError",
    "ConfigError",
    "ManifestError",
    "QuiltError",
    "TemplateError",
    "WalkError",
]
