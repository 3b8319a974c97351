"""
Top-level parser for templ files.

A templ file is ordinary Go-style source code with ``templ``, ``css`` and
``script`` declarations mixed in::

    // header comments
    package views

    import "strings"

    templ Hello(name string) {
        <p>Hello, { name }</p>
    }

There is no separate tokenization pass. The body is parsed a line at a time:
at each step the declaration parsers are offered the cursor, and when all of
them decline the following lines are collected as code until a line that
looks like the start of a declaration (see
:func:`~templfile.core.declarations.is_declaration_start`). That line is
unread and handed back to the declaration parsers.

Usage:
    from templfile.core.templatefile import parse_file, parse_string

    document = parse_file(Path("views/index.templ"))
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from .comments import parse_comment
from .cursor import Cursor
from .declarations import is_declaration_start, parse_css, parse_script, parse_template
from .errors import (
    ErrorContext,
    LegacyFormatError,
    TemplateNotFoundError,
    make_parse_error,
)
from .ir import (
    BodyNode,
    CodeSpan,
    Declaration,
    Document,
    Expression,
    HeaderItem,
    PackageSection,
    Position,
    Whitespace,
)
from .package import FALLBACK_PACKAGE, default_package_name, parse_package, synthesize_package

if TYPE_CHECKING:
    from .manifest import ProjectManifest

logger = logging.getLogger(__name__)

LEGACY_MARKER = "{% package"

DeclarationParser = Callable[[Cursor], Optional[Declaration]]


class TemplateFileParser:
    """
    Parser for a single templ file.

    The default package name is fixed at construction so that ``parse`` only
    depends on the cursor it is given.

    Attributes:
        default_package: Package used when the file has no package line
        declaration_parsers: Declaration parsers, tried in order
    """

    def __init__(self, default_package: str = FALLBACK_PACKAGE):
        self.default_package = default_package
        self.declaration_parsers: tuple[DeclarationParser, ...] = (
            parse_template,
            parse_css,
            parse_script,
        )

    def parse(self, cursor: Cursor) -> tuple[Document, bool]:
        """
        Parse an entire templ file from the cursor.

        Returns:
            Tuple of (document, matched)

        Raises:
            LegacyFormatError: If the file uses the ``{% %}`` dialect
            ParseError: If a comment or declaration is malformed
        """
        self._check_legacy(cursor)
        header = self._parse_header(cursor)
        package = self._parse_package(cursor)
        body = self._parse_body(cursor)
        return Document(header=header, package=package, body=body), True

    def _check_legacy(self, cursor: Cursor) -> None:
        # Only a marker at the very start counts; leading whitespace is not skipped.
        if cursor.peek(len(LEGACY_MARKER)) == LEGACY_MARKER:
            position = cursor.position()
            raise LegacyFormatError(
                ErrorContext(file=cursor.file, line=position.line + 1, column=position.col + 1)
            )

    def _parse_header(self, cursor: Cursor) -> list[HeaderItem]:
        """Collect the whitespace and comments before the package line."""
        header: list[HeaderItem] = []
        while True:
            ws = cursor.match_whitespace()
            if ws is not None:
                header.append(Whitespace(text=ws))
                continue
            comment = parse_comment(cursor)
            if comment is not None:
                header.append(comment)
                continue
            return header

    def _parse_package(self, cursor: Cursor) -> PackageSection:
        start = cursor.position()
        package = parse_package(cursor)
        if package is None:
            package = synthesize_package(self.default_package, start)
        cursor.match_optional_whitespace()
        return package

    def _parse_body(self, cursor: Cursor) -> list[BodyNode]:
        body: list[BodyNode] = []
        while True:
            node = self._parse_declaration(cursor)
            if node is not None:
                body.append(node)
                cursor.match_optional_whitespace()
                continue
            if self._parse_code(cursor, body):
                return body

    def _parse_declaration(self, cursor: Cursor) -> Declaration | None:
        for parse_declaration in self.declaration_parsers:
            node = parse_declaration(cursor)
            if node is not None:
                return node
        return None

    def _parse_code(self, cursor: Cursor, body: list[BodyNode]) -> bool:
        """
        Collect code lines up to the next declaration or the end of input.

        Returns:
            True when the end of input was reached
        """
        start = cursor.position()
        code: list[str] = []
        while True:
            mark = cursor.index()
            line, terminator = cursor.match_line()

            if is_declaration_start(line):
                # Unread the line for the declaration parsers.
                cursor.seek(mark)
                if mark == start.index:
                    raise make_parse_error(
                        f"unable to parse declaration {line.strip()!r}",
                        start,
                        file=cursor.file,
                        snippet=line,
                    )
                self._flush_code(cursor, body, code, start)
                return False

            code.append(line)
            code.append(terminator)
            if not terminator:
                self._flush_code(cursor, body, code, start)
                return True

    def _flush_code(
        self,
        cursor: Cursor,
        body: list[BodyNode],
        code: list[str],
        start: Position,
    ) -> None:
        # The span covers every line scanned, the text is trimmed.
        text = "".join(code).strip()
        if not text:
            return
        end = cursor.position()
        logger.debug("Code span %s-%s (%d chars)", start, end, len(text))
        body.append(CodeSpan(expression=Expression(text=text, start=start, end=end)))


def new_template_file_parser(default_package: str) -> TemplateFileParser:
    return TemplateFileParser(default_package=default_package)


def _parse_text(text: str, default_package: str, file: Path | None = None) -> Document:
    document, matched = new_template_file_parser(default_package).parse(Cursor(text, file=file))
    if not matched:
        raise TemplateNotFoundError()
    return document


def parse_string(text: str, default_package: str = FALLBACK_PACKAGE) -> Document:
    """
    Parse templ source held in a string.

    Args:
        text: Source text
        default_package: Package used when the text has no package line

    Returns:
        Parsed document

    Raises:
        LegacyFormatError: If the text uses the ``{% %}`` dialect
        ParseError: If a comment or declaration is malformed
        TemplateNotFoundError: If the parser reports no match
    """
    return _parse_text(text, default_package)


def parse_file(path: Path, manifest: ProjectManifest | None = None) -> Document:
    """
    Read and parse a templ file.

    The default package is the manifest's ``default_package`` when set,
    otherwise the name of the file's parent directory (or ``"main"``).
    ``OSError`` from reading the file propagates unchanged.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")

    if manifest is not None and manifest.parser.default_package:
        package = manifest.parser.default_package
    else:
        package = default_package_name(path)

    logger.debug("Parsing %s (default package %s)", path, package)
    return _parse_text(text, package, file=path)
