"""Exception classes for ConfigNeat.

Provides standardized exceptions for error handling throughout ConfigNeat.

The lexer itself never raises while tokenizing under the default error
policy; lexical faults are recorded on the LexerState as error values and
reported through the ERROR tag. Raising is opt-in (see ErrorPolicy.RAISE).
"""

from __future__ import annotations


class ConfigNeatError(Exception):
    """Base exception for all ConfigNeat errors.

    Subclass this for specific error categories.
    """

    pass


class LexError(ConfigNeatError):
    """Lexical error at a position in ConfigNeat source.

    Instances double as error values: the lexer appends them to
    ``LexerState.errors`` instead of raising unless asked to.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize lex error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (
            self.message == other.message
            and self.lineno == other.lineno
            and self.col_offset == other.col_offset
            and self.source_file == other.source_file
        )

    def __hash__(self) -> int:
        return hash((type(self), self.message, self.lineno, self.col_offset, self.source_file))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, {self.lineno}:{self.col_offset})"


class UnbalancedBraceError(LexError):
    """A closing ``}`` was found with no open block to close.

    This is the only lexical error ConfigNeat detects.
    """

    def __init__(
        self,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        super().__init__(
            "unbalanced '}': no open block to close",
            lineno=lineno,
            col_offset=col_offset,
            source_file=source_file,
        )


class StackUnderflowError(ConfigNeatError):
    """Attempt to pop the root block context.

    Raised by BlockStack.pop(). The tokenizer checks depth first and
    reports UnbalancedBraceError instead, so this only surfaces when
    the stack is driven directly.
    """

    pass
