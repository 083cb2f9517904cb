"""Incremental re-lexing for ConfigNeat documents.

When a user edits a few lines, only those lines and whatever their new
lexer state affects need re-tokenizing. DocumentLexer keeps a snapshot
of the LexerState at the start of every line plus every line's tokens.
An edit:

1. Restores the snapshot at the first edited line.
2. Re-lexes the replacement lines.
3. Keeps going past the edit until the freshly computed start state of a
   line equals the cached snapshot for that line (convergence).
4. Reuses everything after that point, shifting positions.

The result is always identical to a full ``tokenize`` of the new text.

Thread Safety:
    DocumentLexer is mutable and owned by one editor buffer. Snapshots
    returned by ``state_at`` are copies and safe to hand out.

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from configneat.config import LexerConfig, get_lexer_config
from configneat.errors import UnbalancedBraceError
from configneat.lexer.core import lex_line
from configneat.lexer.state import LexerState, initial_state
from configneat.tags import Token
from configneat.utils.logger import get_logger

logger = get_logger(__name__)


class DocumentLexer:
    """Line-cached lexer for a document that is edited over time.

    Usage:
            >>> doc = DocumentLexer("a {\\n  b yes\\n}")
            >>> doc.final_state.depth
            1
            >>> doc.edit(2, 3, [""])
            range(2, 3)
            >>> doc.final_state.depth
            2

    """

    __slots__ = ("_lines", "_offsets", "_states", "_tokens", "_final", "_source_file", "_config")

    def __init__(
        self,
        source: str,
        *,
        source_file: str | None = None,
        config: LexerConfig | None = None,
    ) -> None:
        """Tokenize the whole source once and cache per-line states.

        Args:
            source: ConfigNeat source text
            source_file: Optional source file path for positions and errors
            config: Explicit config (the active one if None, captured now)
        """
        self._source_file = source_file
        self._config = config if config is not None else get_lexer_config()
        self._lines: list[str] = source.split("\n")
        self._offsets: list[int] = _line_offsets(self._lines)
        self._states: list[LexerState] = []
        self._tokens: list[list[Token]] = []

        state = initial_state()
        for index, line in enumerate(self._lines):
            self._states.append(state.copy())
            self._tokens.append(self._lex(index, state))
        self._final = state

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    @property
    def source(self) -> str:
        return "\n".join(self._lines)

    @property
    def tokens(self) -> list[Token]:
        """All tokens of the document, in input order."""
        return [token for line_tokens in self._tokens for token in line_tokens]

    @property
    def final_state(self) -> LexerState:
        """Copy of the state after the last line."""
        return self._final.copy()

    def line_tokens(self, index: int) -> list[Token]:
        """Tokens of one line (0-indexed)."""
        return list(self._tokens[index])

    def state_at(self, index: int) -> LexerState:
        """Copy of the state at the start of a line (0-indexed)."""
        return self._states[index].copy()

    def edit(self, start: int, end: int, new_lines: Sequence[str]) -> range:
        """Replace lines ``[start, end)`` with ``new_lines`` and re-lex.

        Args:
            start: First replaced line (0-indexed)
            end: One past the last replaced line; ``start == end`` inserts
            new_lines: Replacement lines, without newlines

        Returns:
            The range of line indices (in the new document) that were
            re-tokenized.

        Raises:
            ValueError: If the range is invalid, a replacement line
                contains a newline, or the edit would leave no lines.
        """
        if not 0 <= start <= end <= len(self._lines):
            raise ValueError(f"Invalid line range [{start}, {end}) for {len(self._lines)} lines")
        if any("\n" in line for line in new_lines):
            raise ValueError("Replacement lines must not contain newlines")
        if len(self._lines) - (end - start) + len(new_lines) == 0:
            raise ValueError("A document has at least one line")

        old_states = self._states
        old_tokens = self._tokens
        old_final = self._final
        line_delta = len(new_lines) - (end - start)
        char_delta = sum(len(line) + 1 for line in new_lines) - sum(
            len(line) + 1 for line in self._lines[start:end]
        )

        self._lines[start:end] = list(new_lines)
        self._offsets = _line_offsets(self._lines)
        self._states = old_states[:start]
        self._tokens = old_tokens[:start]

        state = old_states[start].copy() if start < len(old_states) else old_final.copy()
        edit_end = start + len(new_lines)
        index = start
        converged = False
        while index < len(self._lines):
            old_index = index - line_delta
            if index >= edit_end and old_states[old_index] == state:
                converged = True
                break
            self._states.append(state.copy())
            self._tokens.append(self._lex(index, state))
            index += 1

        if converged:
            # Old line numbers from old_index onward move by line_delta
            first_moved = old_index + 1
            self._states.extend(
                _shift_state(s, first_moved, line_delta) for s in old_states[old_index:]
            )
            self._tokens.extend(
                [_shift_token(t, line_delta, char_delta) for t in line_tokens]
                for line_tokens in old_tokens[old_index:]
            )
            self._final = _shift_state(old_final, first_moved, line_delta)
        else:
            self._final = state

        logger.debug(
            "Re-lexed lines %d-%d of %d (converged: %s)",
            start,
            index - 1,
            len(self._lines),
            converged,
        )
        return range(start, index)

    def _lex(self, index: int, state: LexerState) -> list[Token]:
        return lex_line(
            self._lines[index],
            state,
            lineno=index + 1,
            offset=self._offsets[index],
            source_file=self._source_file,
            config=self._config,
        )


def _line_offsets(lines: Sequence[str]) -> list[int]:
    """Absolute offset of the first character of every line."""
    offsets = []
    offset = 0
    for line in lines:
        offsets.append(offset)
        offset += len(line) + 1
    return offsets


def _shift_token(token: Token, line_delta: int, char_delta: int) -> Token:
    """Copy of a token moved by whole lines."""
    if line_delta == 0 and char_delta == 0:
        return token
    return replace(
        token,
        _lineno=token.lineno + line_delta,
        _start_offset=token._start_offset + char_delta,
        _end_offset=token._end_offset + char_delta,
        _location_cache=None,
    )


def _shift_state(state: LexerState, first_moved: int, line_delta: int) -> LexerState:
    """Renumber errors recorded on lines that moved.

    Args:
        state: Cached state (not modified)
        first_moved: First old line number (1-indexed) that moved
        line_delta: How far those lines moved
    """
    if line_delta == 0 or not any(
        e.lineno is not None and e.lineno >= first_moved for e in state.errors
    ):
        return state
    shifted = state.copy()
    shifted.errors = [
        UnbalancedBraceError(
            lineno=e.lineno + line_delta,
            col_offset=e.col_offset,
            source_file=e.source_file,
        )
        if e.lineno is not None and e.lineno >= first_moved
        else e
        for e in state.errors
    ]
    return shifted
