"""Single-line character stream driven by the tokenizer.

The host creates one LineStream per line of text and calls
``next_token`` until ``eol()``. Positions are 0-indexed into the line;
``pos`` is the index of the next unread character.

"""

from __future__ import annotations

from collections.abc import Sequence

from configneat.lexer.literals import match_literal


class LineStream:
    """Cursor over one line of ConfigNeat text.

    Usage:
            >>> stream = LineStream("key value")
            >>> stream.sol()
            True
            >>> stream.advance()
            'k'
            >>> stream.peek()
            'e'
            >>> stream.pos
            1

    Attributes:
        string: The line, without its newline
        pos: Index of the next unread character
        start: Index where the current token started
        lineno: 1-indexed line number (for error positions)
        source_file: Optional source file path (for error positions)

    """

    __slots__ = ("string", "pos", "start", "lineno", "source_file")

    def __init__(self, string: str, lineno: int = 1, source_file: str | None = None) -> None:
        if "\n" in string:
            raise ValueError("LineStream holds a single line; split the source on newlines")
        self.string = string
        self.pos = 0
        self.start = 0
        self.lineno = lineno
        self.source_file = source_file

    def __repr__(self) -> str:
        return f"LineStream({self.string!r}, pos={self.pos})"

    def sol(self) -> bool:
        """True when nothing has been read from this line yet."""
        return self.pos == 0

    def eol(self) -> bool:
        return self.pos >= len(self.string)

    def peek(self) -> str:
        """Next character without consuming it, or "" at end of line."""
        if self.pos >= len(self.string):
            return ""
        return self.string[self.pos]

    def advance(self) -> str:
        """Consume one character and return it ("" at end of line)."""
        if self.pos >= len(self.string):
            return ""
        char = self.string[self.pos]
        self.pos += 1
        return char

    def back_up(self, n: int = 1) -> None:
        """Un-read ``n`` characters."""
        if n < 0 or n > self.pos:
            raise ValueError(f"cannot back up {n} characters from position {self.pos}")
        self.pos -= n

    def match_boolean(self, literals: Sequence[str], consume: bool = True) -> bool:
        """Check for a boolean literal at the cursor.

        Args:
            literals: Spellings to try, in order
            consume: Advance past the literal on success (never past
                the trailing whitespace or comment)

        Returns:
            True if the rest of the line is one of the literals.
        """
        size = match_literal(self.string, self.pos, literals)
        if size and consume:
            self.pos += size
        return size > 0

    def current(self) -> str:
        """Text consumed since ``start``."""
        return self.string[self.start : self.pos]
