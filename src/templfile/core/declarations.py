"""
Parsers for the three declaration kinds of a templ file.

    templ Name(params) {        component markup
    css Name() {                class properties, one ``name: value;`` per line
    script Name(params) {       JavaScript function body

Each ``parse_*`` function takes the cursor at the start of a line and returns
a node, or None with the cursor unchanged when the input does not start a
declaration of its kind. A keyword line that does not end with ``{`` is not a
declaration. Once the header line matched, problems in the rest of the
declaration raise ``ParseError``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .cursor import Cursor
from .errors import make_parse_error
from .ir import (
    Expression,
    Position,
    ScriptDeclaration,
    StyleDeclaration,
    StyleProperty,
    TemplateDeclaration,
)

logger = logging.getLogger(__name__)

TEMPLATE_KEYWORD = "templ "
CSS_KEYWORD = "css "
SCRIPT_KEYWORD = "script "
DECLARATION_KEYWORDS = (TEMPLATE_KEYWORD, CSS_KEYWORD, SCRIPT_KEYWORD)

# Templates may be methods: templ (p Page) Title() {
_TEMPLATE_NAME_RE = re.compile(r"^(?:\([^)]*\)\s*)?([^\W\d]\w*)\s*\(")
_FUNC_NAME_RE = re.compile(r"^([^\W\d]\w*)\s*\(")
_CSS_NAME_RE = re.compile(r"^([^\W\d]\w*)\s*\(\s*\)$")
_QUOTES = ("'", '"', "`")


@dataclass(frozen=True)
class _Header:
    """The ``keyword signature {`` line of a declaration."""

    name: str
    signature: Expression
    start: Position


def is_declaration_start(line: str) -> bool:
    """
    Whether a source line opens a declaration.

    Purely textual: the line must start with a keyword followed by a space
    and its last character must be ``{``. Braces inside trailing comments or
    strings count.
    """
    return line.startswith(DECLARATION_KEYWORDS) and line.endswith("{")


def _parse_header(cursor: Cursor, keyword: str, name_re: re.Pattern[str]) -> _Header | None:
    mark = cursor.index()
    start = cursor.position()
    if not cursor.match_literal(keyword):
        return None

    after_keyword = cursor.index()
    line, _ = cursor.match_line()
    stripped = line.rstrip()
    if not stripped.endswith("{"):
        cursor.seek(mark)
        return None

    signature = stripped[:-1].strip()
    sig_offset = after_keyword + len(line) - len(line.lstrip())
    sig_start = cursor.position_at(sig_offset)
    kind = keyword.strip()

    match = name_re.match(signature)
    if match is None or not signature.endswith(")"):
        raise make_parse_error(
            f"{kind}: malformed declaration {signature!r}, expected Name(...)",
            sig_start,
            file=cursor.file,
            snippet=cursor.line_text(start.line),
        )

    # Leave the cursor just past the opening brace.
    cursor.seek(after_keyword + len(stripped))
    return _Header(
        name=match.group(1),
        signature=Expression(
            text=signature,
            start=sig_start,
            end=cursor.position_at(sig_offset + len(signature)),
        ),
        start=start,
    )


def _read_body(cursor: Cursor, header: _Header, kind: str, quote_depth: int) -> str:
    """
    Consume up to and including the brace that closes the declaration.

    String literals are skipped once the brace depth reaches ``quote_depth``,
    so braces inside them do not count.

    Returns:
        The raw text between the braces
    """
    text = cursor.text
    body_start = cursor.index()
    depth = 1
    i = body_start
    while i < len(text):
        ch = text[i]
        if ch in _QUOTES and depth >= quote_depth:
            i = _skip_string(text, i)
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                cursor.seek(i + 1)
                return text[body_start:i]
        i += 1

    raise make_parse_error(
        f"{kind}: missing closing brace for {header.name}",
        header.start,
        file=cursor.file,
        snippet=cursor.line_text(header.start.line),
    )


def _skip_string(text: str, start: int) -> int:
    """Index just past the string literal opening at ``start``."""
    quote = text[start]
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\" and quote != "`":
            i += 2
            continue
        if ch == quote:
            return i + 1
        if ch == "\n" and quote != "`":
            # Unterminated on this line: treat the quote as plain text.
            return start + 1
        i += 1
    return start + 1


def _source(cursor: Cursor, header: _Header) -> Expression:
    return Expression(
        text=cursor.text[header.start.index : cursor.index()],
        start=header.start,
        end=cursor.position(),
    )


def parse_template(cursor: Cursor) -> TemplateDeclaration | None:
    """Parse ``templ Name(params) { markup }``."""
    header = _parse_header(cursor, TEMPLATE_KEYWORD, _TEMPLATE_NAME_RE)
    if header is None:
        return None
    # Quotes are markup text at the top level, Go strings inside { } expressions.
    body = _read_body(cursor, header, "templ", quote_depth=2)
    logger.debug("Parsed templ %s at %s", header.name, header.start)
    return TemplateDeclaration(
        name=header.name,
        expression=header.signature,
        body=body.strip(),
        source=_source(cursor, header),
    )


def parse_css(cursor: Cursor) -> StyleDeclaration | None:
    """Parse ``css Name() { name: value; ... }``."""
    header = _parse_header(cursor, CSS_KEYWORD, _CSS_NAME_RE)
    if header is None:
        return None
    body_start = cursor.position()
    body = _read_body(cursor, header, "css", quote_depth=1)
    properties = _parse_properties(cursor, body, body_start)
    logger.debug("Parsed css %s with %d properties", header.name, len(properties))
    return StyleDeclaration(
        name=header.name,
        expression=header.signature,
        properties=properties,
        source=_source(cursor, header),
    )


def _parse_properties(cursor: Cursor, body: str, body_start: Position) -> list[StyleProperty]:
    properties: list[StyleProperty] = []
    for offset, raw in enumerate(body.split("\n")):
        line = raw.strip()
        if not line or line.startswith("//"):
            continue
        name, sep, value = line.partition(":")
        if not sep or not name.strip():
            line_no = body_start.line + offset
            raise make_parse_error(
                f"css: expected 'name: value;', got {line!r}",
                Position(index=body_start.index, line=line_no, col=0),
                file=cursor.file,
                snippet=cursor.line_text(line_no),
            )
        properties.append(StyleProperty(name=name.strip(), value=value.strip().rstrip(";").strip()))
    return properties


def parse_script(cursor: Cursor) -> ScriptDeclaration | None:
    """Parse ``script Name(params) { javascript }``."""
    header = _parse_header(cursor, SCRIPT_KEYWORD, _FUNC_NAME_RE)
    if header is None:
        return None
    body = _read_body(cursor, header, "script", quote_depth=1)
    logger.debug("Parsed script %s at %s", header.name, header.start)
    return ScriptDeclaration(
        name=header.name,
        expression=header.signature,
        body=body.strip(),
        source=_source(cursor, header),
    )
