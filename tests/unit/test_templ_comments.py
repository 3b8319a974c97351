"""Tests for the header comment lexer."""

from __future__ import annotations

import pytest

from templfile.core.comments import parse_comment
from templfile.core.cursor import Cursor
from templfile.core.errors import ParseError


def test_line_comment_stops_before_newline() -> None:
    cursor = Cursor("// hello\npackage foo")
    comment = parse_comment(cursor)
    assert comment is not None
    assert comment.text == " hello"
    assert not comment.multiline
    assert comment.start.index == 0
    assert comment.end.index == len("// hello")
    assert cursor.remaining() == "\npackage foo"


def test_line_comment_at_end_of_input() -> None:
    cursor = Cursor("// last")
    comment = parse_comment(cursor)
    assert comment is not None
    assert comment.text == " last"
    assert cursor.at_end()


def test_line_comment_crlf() -> None:
    cursor = Cursor("// windows\r\npackage foo")
    comment = parse_comment(cursor)
    assert comment is not None
    assert comment.text == " windows"
    assert cursor.remaining() == "\r\npackage foo"


def test_block_comment_spans_lines() -> None:
    cursor = Cursor("/* one\ntwo */package foo")
    comment = parse_comment(cursor)
    assert comment is not None
    assert comment.text == " one\ntwo "
    assert comment.multiline
    assert comment.end.line == 1
    assert cursor.remaining() == "package foo"


def test_not_a_comment() -> None:
    cursor = Cursor("/ not a comment")
    assert parse_comment(cursor) is None
    assert cursor.index() == 0


def test_unclosed_block_comment() -> None:
    with pytest.raises(ParseError, match="unclosed block comment") as exc_info:
        parse_comment(Cursor("/* open"))
    assert exc_info.value.context is not None
    assert exc_info.value.context.line == 1
