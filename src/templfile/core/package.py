"""
Package section parsing and default package names.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from .cursor import Cursor
from .errors import make_parse_error
from .ir import Expression, PackageSection, Position

logger = logging.getLogger(__name__)

PACKAGE_KEYWORD = "package "
FALLBACK_PACKAGE = "main"

_PACKAGE_NAME_RE = re.compile(r"[ \t]*([^\W\d]\w*)")


def is_identifier(name: str) -> bool:
    """
    Check that ``name`` is a bare identifier.

    Non-empty, starting with a letter or underscore, continuing with
    letters, underscores or digits.
    """
    if not name:
        return False
    for i, ch in enumerate(name):
        if ch.isalpha() or ch == "_":
            continue
        if i > 0 and ch.isdecimal():
            continue
        return False
    return True


def default_package_name(path: str | Path) -> str:
    """
    Package name to use for a file that has no package line.

    The name of the file's parent directory, or ``"main"`` when that is not
    a valid identifier.
    """
    parent = Path(path).parent.name
    if not is_identifier(parent):
        return FALLBACK_PACKAGE
    return parent


def parse_package(cursor: Cursor) -> PackageSection | None:
    """
    Parse a ``package name`` line.

    Only the leading identifier belongs to the section. Anything after it on
    the line (a comment, a ``;``) is left for the body.

    Returns:
        The section spanning exactly ``package name``, or None with the cursor
        unchanged if the input does not start with the keyword and a name

    Raises:
        ParseError: If nothing follows the keyword on its line
    """
    start = cursor.position()
    if not cursor.match_literal(PACKAGE_KEYWORD):
        return None

    after_keyword = cursor.index()
    line, _ = cursor.match_line()
    if not line.strip():
        raise make_parse_error(
            "package literal not terminated",
            start,
            file=cursor.file,
            snippet=cursor.line_text(start.line),
        )

    match = _PACKAGE_NAME_RE.match(line)
    if match is None or not is_identifier(match.group(1)):
        cursor.seek(start)
        return None

    cursor.seek(after_keyword + match.end())
    return PackageSection(
        expression=Expression(
            text=cursor.text[start.index : cursor.index()],
            start=start,
            end=cursor.position(),
        ),
    )


def synthesize_package(name: str, at: Position) -> PackageSection:
    """Build a zero-width ``package <name>`` section at ``at``."""
    logger.debug("No package line, using package %s", name)
    return PackageSection(expression=Expression(text=f"package {name}", start=at, end=at))
