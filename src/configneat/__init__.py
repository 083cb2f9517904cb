"""
ConfigNeat — Incremental Lexer for the ConfigNeat Configuration Language

ConfigNeat is a nested-block configuration language: keys and values on
lines, ``{ }`` blocks, ``#`` and ``/* */`` comments, backtick raw strings
and ``%placeholders%``. This package classifies ConfigNeat text for
syntax highlighters, one token per call, resumable from any line.

Quick Start:
    >>> from configneat import tokenize
    >>> [(t.tag.name, t.value) for t in tokenize("debug yes")][-1]
    ('BUILTIN', 'yes')

    >>> # Host-driven, one token at a time
    >>> from configneat import LineStream, initial_state, next_token
    >>> state = initial_state()
    >>> stream = LineStream("{ :label value }")
    >>> next_token(stream, state).name
    'BRACKET'

Incremental:
    >>> from configneat import DocumentLexer
    >>> doc = DocumentLexer("server {\\n  port 80\\n}")
    >>> doc.edit(1, 2, ["  port 8080"])
    range(1, 2)

Installation:
    pip install configneat           # Zero runtime dependencies
"""

from collections.abc import Iterable, Iterator

from configneat.config import (
    ErrorPolicy,
    LexerConfig,
    get_lexer_config,
    lexer_config_context,
    reset_lexer_config,
    set_lexer_config,
)
from configneat.errors import (
    ConfigNeatError,
    LexError,
    StackUnderflowError,
    UnbalancedBraceError,
)
from configneat.incremental import DocumentLexer
from configneat.lexer import (
    BlockContext,
    BlockMode,
    BlockStack,
    Lexer,
    LexerState,
    LineStream,
    initial_state,
    lex_line,
    next_token,
)
from configneat.location import SourceLocation
from configneat.tags import Tag, Token

__version__ = "0.1.0"


def tokenize(
    source: str,
    *,
    state: LexerState | None = None,
    source_file: str | None = None,
    config: LexerConfig | None = None,
) -> Iterator[Token]:
    """Tokenize ConfigNeat source.

    Args:
        source: ConfigNeat source text
        state: State to resume from (a fresh initial state if None);
            mutated as tokens are produced
        source_file: Optional source file path for positions and errors
        config: Explicit config (the active one if None)

    Yields:
        One Token per tokenizer call, in input order.

    Example:
        >>> [t.tag.name for t in tokenize("}")]
        ['ERROR']
    """
    return Lexer(source, state=state, source_file=source_file, config=config).tokenize()


def tokenize_lines(
    lines: Iterable[str],
    *,
    state: LexerState | None = None,
    source_file: str | None = None,
    config: LexerConfig | None = None,
) -> Iterator[list[Token]]:
    """Tokenize pre-split lines, yielding each line's tokens.

    Lines are consumed lazily, so a host can feed them as they arrive.

    Args:
        lines: Lines without newlines
        state: State to resume from (a fresh initial state if None);
            mutated as lines are consumed
        source_file: Optional source file path
        config: Explicit config (the active one if None, captured on the
            first line)

    Yields:
        A list of tokens per line (empty for empty lines).

    Raises:
        ValueError: If a line contains a newline.
    """
    if state is None:
        state = initial_state()
    if config is None:
        config = get_lexer_config()
    offset = 0
    for lineno, line in enumerate(lines, start=1):
        yield lex_line(
            line,
            state,
            lineno=lineno,
            offset=offset,
            source_file=source_file,
            config=config,
        )
        offset += len(line) + 1


__all__ = [  # noqa: RUF022 — grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "initial_state",
    "next_token",
    "tokenize",
    "tokenize_lines",
    "lex_line",
    # Lexer components
    "BlockContext",
    "BlockMode",
    "BlockStack",
    "Lexer",
    "LexerState",
    "LineStream",
    # Incremental
    "DocumentLexer",
    # Tags and tokens
    "Tag",
    "Token",
    # Location
    "SourceLocation",
    # Errors
    "ConfigNeatError",
    "LexError",
    "StackUnderflowError",
    "UnbalancedBraceError",
    # Configuration (ContextVar-based)
    "ErrorPolicy",
    "LexerConfig",
    "get_lexer_config",
    "set_lexer_config",
    "reset_lexer_config",
    "lexer_config_context",
]
