"""
Comment lexer for the templ file header.

Recognises ``// line`` comments (ending before the line terminator) and
``/* block */`` comments.
"""

from __future__ import annotations

from .cursor import Cursor
from .errors import make_parse_error
from .ir import Comment


def parse_comment(cursor: Cursor) -> Comment | None:
    """
    Parse a single comment at the cursor.

    Returns:
        The comment, or None (with the cursor unchanged) if none starts here

    Raises:
        ParseError: If a block comment is never closed
    """
    start = cursor.position()

    if cursor.match_literal("//"):
        line, terminator = cursor.match_line()
        # Leave the terminator for the whitespace matcher.
        cursor.seek(cursor.index() - len(terminator))
        return Comment(text=line, start=start, end=cursor.position(), multiline=False)

    if cursor.match_literal("/*"):
        contents = cursor.match_until("*/")
        if contents is None:
            raise make_parse_error(
                "unclosed block comment",
                start,
                file=cursor.file,
                snippet=cursor.line_text(start.line),
            )
        cursor.match_literal("*/")
        return Comment(text=contents, start=start, end=cursor.position(), multiline=True)

    return None
