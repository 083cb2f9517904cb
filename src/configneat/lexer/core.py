"""Incremental, character-at-a-time lexer for ConfigNeat.

``next_token`` consumes one character (a few for escaped backticks,
block comment ends and boolean literals) and returns its Tag. All
state lives in the LexerState passed in, so a host can stop after any
line, keep a ``copy()`` of the state, and resume from it later with
byte-identical results.

The rule cascade is ordered: the first rule that fires decides the tag,
and the order is what gives raw strings, placeholders and comments
precedence over structure.

Thread Safety:
One LexerState per document cursor. The functions here keep no
module-level mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from configneat.config import ErrorPolicy, LexerConfig, get_lexer_config
from configneat.errors import UnbalancedBraceError
from configneat.lexer.modes import (
    BACKSLASH,
    BACKTICK,
    CLOSE_BRACE,
    HASH,
    OPEN_BRACE,
    PERCENT,
    SLASH,
    SPACE,
    STAR,
)
from configneat.lexer.state import LexerState, initial_state
from configneat.lexer.stream import LineStream
from configneat.tags import KEY_LEAD_TAGS, Tag, Token
from configneat.utils.logger import get_logger

logger = get_logger(__name__)


def next_token(stream: LineStream, state: LexerState) -> Tag:
    """Advance the stream by one token and classify it.

    Reads the active LexerConfig from the current context.

    Args:
        stream: Cursor over the current line; must not be at end of line
        state: Saved lexer state, mutated in place

    Returns:
        The Tag for the consumed characters.

    Raises:
        UnbalancedBraceError: Only under ErrorPolicy.RAISE.
        ValueError: If the stream is already at end of line.
    """
    return step(stream, state, get_lexer_config())


def step(stream: LineStream, state: LexerState, config: LexerConfig) -> Tag:
    """``next_token`` with an explicit config (used by the drivers)."""
    if stream.eol():
        raise ValueError("next_token called at end of line")

    sol = stream.sol()
    ch = stream.advance()
    b = state.blocks.top

    if sol:
        b.at_line_start = True
        b.in_line_comment = False

    if state.errored:
        return Tag.ERROR

    in_comment = b.in_line_comment or b.in_block_comment

    if ch == BACKSLASH and not in_comment and stream.peek() == BACKTICK:
        stream.advance()
        return Tag.ESCAPED_BACKTICK

    if ch == PERCENT and not in_comment:
        b.in_placeholder = not b.in_placeholder
        return Tag.PLACEHOLDER

    if b.in_placeholder:
        return Tag.PLACEHOLDER

    if ch == BACKTICK and not in_comment:
        b.in_raw_string = not b.in_raw_string
        return Tag.RAW_STRING

    if b.in_raw_string:
        return Tag.RAW_STRING

    if ch == HASH and (b.prev_was_space or b.at_line_start) and not b.in_block_comment:
        b.in_line_comment = True
        return Tag.COMMENT

    if b.in_line_comment:
        return Tag.COMMENT

    if ch == SLASH and stream.peek() == STAR:
        # The star is consumed by the next call, inside the comment
        b.in_block_comment = True
        return Tag.COMMENT

    if ch == STAR and b.in_block_comment and stream.peek() == SLASH:
        stream.advance()
        b.in_block_comment = False
        return Tag.COMMENT

    if b.in_block_comment:
        return Tag.COMMENT

    if ch == OPEN_BRACE:
        state.blocks.push()
        return Tag.BRACKET

    if ch == CLOSE_BRACE:
        if len(state.blocks) == 1:
            _unbalanced_brace(stream, state, config)
            return Tag.ERROR
        state.blocks.pop()
        return Tag.BRACKET

    is_space = ch == SPACE

    if is_space and not b.at_line_start:
        b.key_lead_char = None
        b.scanning_key = False

    b.prev_was_space = is_space

    if is_space:
        return _key_tag(b.key_lead_char) if b.scanning_key else Tag.VARIABLE

    # A line starting at or past the previous value column (minus one, for
    # a non-hanging backtick) continues that value instead of opening a key.
    if b.at_line_start and (b.value_start_pos is None or stream.pos < b.value_start_pos - 1):
        b.scanning_key = True
        b.value_start_pos = None
        b.at_line_start = False
        b.key_lead_char = ch

    if not b.scanning_key and b.value_start_pos is None:
        stream.back_up(1)
        if stream.match_boolean(config.truthy_literals) or stream.match_boolean(
            config.falsy_literals
        ):
            return Tag.BUILTIN
        stream.advance()
        b.value_start_pos = stream.pos

    if b.scanning_key:
        return _key_tag(b.key_lead_char)

    return Tag.VARIABLE


def _key_tag(lead: str | None) -> Tag:
    if lead is None:
        return Tag.KEYWORD
    return KEY_LEAD_TAGS.get(lead, Tag.KEYWORD)


def _unbalanced_brace(stream: LineStream, state: LexerState, config: LexerConfig) -> None:
    """Record a ``}`` with no open block and apply the error policy."""
    error = UnbalancedBraceError(
        lineno=stream.lineno,
        col_offset=stream.pos,
        source_file=stream.source_file,
    )
    state.errors.append(error)
    logger.debug("%s (policy: %s)", error, config.error_policy.value)

    if config.error_policy is ErrorPolicy.STICKY:
        state.errored = True
    elif config.error_policy is ErrorPolicy.RAISE:
        raise error


def lex_line(
    line: str,
    state: LexerState,
    *,
    lineno: int = 1,
    offset: int = 0,
    source_file: str | None = None,
    config: LexerConfig | None = None,
) -> list[Token]:
    """Tokenize one line, mutating ``state``.

    Args:
        line: Line text without its newline
        state: State at the start of the line; left at the end of it
        lineno: 1-indexed line number for token positions
        offset: Absolute offset of the line's first character
        source_file: Optional source file path
        config: Explicit config (defaults to the active one)

    Returns:
        One Token per ``next_token`` call, in input order.
    """
    if config is None:
        config = get_lexer_config()
    stream = LineStream(line, lineno=lineno, source_file=source_file)
    tokens: list[Token] = []
    while not stream.eol():
        stream.start = stream.pos
        tag = step(stream, state, config)
        tokens.append(
            Token(
                tag=tag,
                value=stream.current(),
                _lineno=lineno,
                _col=stream.start + 1,
                _start_offset=offset + stream.start,
                _end_offset=offset + stream.pos,
                _source_file=source_file,
            )
        )
    return tokens


class Lexer:
    """Batch driver: tokenizes a whole source string line by line.

    Empty lines produce no tokens and leave the state untouched, the same
    as an editor that never asks for tokens on a blank line.

    Usage:
            >>> lexer = Lexer("name demo\\nenabled yes")
            >>> [t.tag.name for t in lexer.tokenize()][:5]
            ['KEYWORD', 'KEYWORD', 'KEYWORD', 'KEYWORD', 'VARIABLE']
            >>> lexer.state.errored
            False

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = ("_source", "_source_file", "_state", "_config")

    def __init__(
        self,
        source: str,
        *,
        state: LexerState | None = None,
        source_file: str | None = None,
        config: LexerConfig | None = None,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: ConfigNeat source text
            state: State to resume from (a fresh initial state if None)
            source_file: Optional source file path for positions and errors
            config: Explicit config (the active one if None, captured now)
        """
        self._source = source
        self._source_file = source_file
        self._state = state if state is not None else initial_state()
        self._config = config if config is not None else get_lexer_config()

    @property
    def state(self) -> LexerState:
        """Current state (after the lines tokenized so far)."""
        return self._state

    def tokenize(self) -> Iterator[Token]:
        """Tokenize the source.

        Yields:
            Token objects one at a time, in input order.
        """
        for lineno, offset, line in _split_lines(self._source):
            yield from lex_line(
                line,
                self._state,
                lineno=lineno,
                offset=offset,
                source_file=self._source_file,
                config=self._config,
            )

    def tokenize_lines(self) -> Iterator[list[Token]]:
        """Tokenize the source, yielding each line's tokens as a list."""
        for lineno, offset, line in _split_lines(self._source):
            yield lex_line(
                line,
                self._state,
                lineno=lineno,
                offset=offset,
                source_file=self._source_file,
                config=self._config,
            )


def _split_lines(source: str) -> Iterator[tuple[int, int, str]]:
    """Yield (lineno, offset, line) for every line of source."""
    offset = 0
    for lineno, line in enumerate(source.split("\n"), start=1):
        yield lineno, offset, line
        offset += len(line) + 1
