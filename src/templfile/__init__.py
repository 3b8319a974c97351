"""
templfile - parser for templ files.

Turns ``.templ`` sources (Go code interleaved with ``templ``, ``css`` and
``script`` declarations) into an immutable document tree for code
generation.
"""

from __future__ import annotations

from importlib.metadata import version as _metadata_version

from .core import ir
from .core.errors import (
    ConfigError,
    LegacyFormatError,
    ParseError,
    TemplateNotFoundError,
    TemplfileError,
)
from .core.templatefile import parse_file, parse_string


def _get_version() -> str:
    """Get version from installed metadata."""
    try:
        return _metadata_version("templfile")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "ConfigError",
    "LegacyFormatError",
    "ParseError",
    "TemplateNotFoundError",
    "TemplfileError",
    "parse_file",
    "parse_string",
]
