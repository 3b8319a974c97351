"""
Backtracking text cursor for the templ file parser.

The whole input is held in memory. The only mutable state is an integer
offset; ``index()`` returns a mark and ``seek()`` restores it exactly, which
is all the parser needs for lookahead. Every ``match_*`` method either
consumes what it matched or leaves the offset untouched.
"""

from __future__ import annotations

import bisect
from pathlib import Path

from .ir import Position


class Cursor:
    """
    Position-tracking cursor over a string.

    Attributes:
        text: Full source text
        file: Source file path (for error reporting), if any
        pos: Current character offset
    """

    def __init__(self, text: str, file: Path | None = None):
        self.text = text
        self.file = file
        self.pos = 0
        self._line_starts = [0]
        start = text.find("\n")
        while start != -1:
            self._line_starts.append(start + 1)
            start = text.find("\n", start + 1)

    def __repr__(self) -> str:
        return f"Cursor({self.position()}, remaining={self.remaining()[:20]!r})"

    # -- Positions --

    def index(self) -> int:
        """Current offset, usable as a mark for ``seek``."""
        return self.pos

    def position(self) -> Position:
        return self.position_at(self.pos)

    def position_at(self, index: int) -> Position:
        line = bisect.bisect_right(self._line_starts, index) - 1
        return Position(index=index, line=line, col=index - self._line_starts[line])

    def seek(self, mark: int | Position) -> None:
        """Restore a previously saved mark."""
        index = mark.index if isinstance(mark, Position) else mark
        if index < 0 or index > len(self.text):
            raise ValueError(f"Cannot seek to {index}: input has {len(self.text)} characters")
        self.pos = index

    def line_text(self, line: int) -> str:
        """Source text of a 0-based line, without its terminator."""
        start = self._line_starts[line]
        end = self.text.find("\n", start)
        if end == -1:
            end = len(self.text)
        return self.text[start:end].rstrip("\r")

    # -- Inspection --

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self, count: int = 1) -> str:
        """Next ``count`` characters without consuming them."""
        return self.text[self.pos : self.pos + count]

    def remaining(self) -> str:
        return self.text[self.pos :]

    def startswith(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.pos)

    # -- Matching --

    def match_literal(self, literal: str) -> bool:
        """Consume ``literal`` if the input continues with it."""
        if not self.text.startswith(literal, self.pos):
            return False
        self.pos += len(literal)
        return True

    def match_whitespace(self) -> str | None:
        """Consume one or more whitespace characters, newlines included."""
        end = self.pos
        while end < len(self.text) and self.text[end].isspace():
            end += 1
        if end == self.pos:
            return None
        value = self.text[self.pos : end]
        self.pos = end
        return value

    def match_optional_whitespace(self) -> str:
        return self.match_whitespace() or ""

    def match_line(self) -> tuple[str, str]:
        """
        Consume one line.

        Returns:
            Tuple of (line text, terminator). The terminator is ``"\\n"`` or
            ``"\\r\\n"``, or ``""`` when the line runs to end of input.
        """
        end = self.text.find("\n", self.pos)
        if end == -1:
            line = self.text[self.pos :]
            self.pos = len(self.text)
            return line, ""
        line = self.text[self.pos : end]
        self.pos = end + 1
        if line.endswith("\r"):
            return line[:-1], "\r\n"
        return line, "\n"

    def match_until(self, delimiter: str) -> str | None:
        """Consume text up to (not including) ``delimiter``, if present."""
        end = self.text.find(delimiter, self.pos)
        if end == -1:
            return None
        value = self.text[self.pos : end]
        self.pos = end
        return value
