"""Lexer state: one BlockContext per open block, stacked.

The tokenizer only ever touches the top context, so the stack needs no
back-references. Snapshots are deep copies; two states compare equal
when every context and the error bookkeeping match, which is what the
incremental driver relies on to detect that re-lexing has converged.

Thread Safety:
LexerState is mutable and owned by one document cursor. Never share an
instance between concurrent callers; hand out ``copy()`` snapshots instead.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, replace

from configneat.errors import StackUnderflowError, UnbalancedBraceError
from configneat.lexer.modes import BlockMode


@dataclass(slots=True)
class BlockContext:
    """Lexical flags for one ``{ }`` nesting level.

    Attributes:
        scanning_key: Characters being consumed belong to a key token
        key_lead_char: First character of the current key (picks its tag)
        at_line_start: No non-space character consumed yet on this line
        value_start_pos: Stream position just past the first character of
            the current value token; None when no value is in progress
        in_raw_string: Between backticks
        in_placeholder: Between percent signs
        in_line_comment: After an unescaped # until end of line
        in_block_comment: Between /* and */
        prev_was_space: The previous character was a plain space

    """

    scanning_key: bool = True
    key_lead_char: str | None = None
    at_line_start: bool = True
    value_start_pos: int | None = None
    in_raw_string: bool = False
    in_placeholder: bool = False
    in_line_comment: bool = False
    in_block_comment: bool = False
    prev_was_space: bool = False

    @property
    def in_comment(self) -> bool:
        return self.in_line_comment or self.in_block_comment

    @property
    def mode(self) -> BlockMode:
        """Derived mode, reported in cascade priority order."""
        if self.in_placeholder:
            return BlockMode.PLACEHOLDER
        if self.in_raw_string:
            return BlockMode.RAW_STRING
        if self.in_line_comment:
            return BlockMode.LINE_COMMENT
        if self.in_block_comment:
            return BlockMode.BLOCK_COMMENT
        if self.scanning_key:
            return BlockMode.KEY
        if self.value_start_pos is not None:
            return BlockMode.VALUE
        return BlockMode.DEFAULT

    def copy(self) -> BlockContext:
        return replace(self)


class BlockStack:
    """Non-empty stack of block contexts; the root is never popped.

    Usage:
            >>> stack = BlockStack()
            >>> len(stack)
            1
            >>> stack.push().scanning_key
            True
            >>> len(stack)
            2

    """

    __slots__ = ("_contexts",)

    def __init__(self, contexts: list[BlockContext] | None = None) -> None:
        if contexts is not None and not contexts:
            raise StackUnderflowError("block stack needs at least the root context")
        self._contexts: list[BlockContext] = contexts if contexts is not None else [BlockContext()]

    def __len__(self) -> int:
        return len(self._contexts)

    def __iter__(self) -> Iterator[BlockContext]:
        """Iterate from the root to the innermost block."""
        return iter(self._contexts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BlockStack):
            return NotImplemented
        return self._contexts == other._contexts

    def __repr__(self) -> str:
        return f"BlockStack(depth={len(self._contexts)})"

    @property
    def top(self) -> BlockContext:
        """Innermost context (mutable)."""
        return self._contexts[-1]

    def peek(self) -> BlockContext:
        return self._contexts[-1]

    def push(self) -> BlockContext:
        """Open a block: append a fresh context and return it."""
        context = BlockContext()
        self._contexts.append(context)
        return context

    def pop(self) -> BlockContext:
        """Close the innermost block.

        Raises:
            StackUnderflowError: If only the root context remains.
        """
        if len(self._contexts) == 1:
            raise StackUnderflowError("cannot pop the root block context")
        return self._contexts.pop()

    def copy(self) -> BlockStack:
        return BlockStack([context.copy() for context in self._contexts])


@dataclass(slots=True)
class LexerState:
    """Everything the tokenizer carries from one call to the next.

    Attributes:
        blocks: Stack of block contexts (depth >= 1)
        errored: Sticky fault flag; once set, every token is ERROR
        errors: Unbalanced-brace errors recorded so far, in input order

    """

    blocks: BlockStack = field(default_factory=BlockStack)
    errored: bool = False
    errors: list[UnbalancedBraceError] = field(default_factory=list)

    @property
    def depth(self) -> int:
        """Number of open blocks, counting the root."""
        return len(self.blocks)

    @property
    def top(self) -> BlockContext:
        return self.blocks.top

    def copy(self) -> LexerState:
        """Deep snapshot; mutating it never affects this state."""
        return LexerState(
            blocks=self.blocks.copy(),
            errored=self.errored,
            errors=list(self.errors),
        )


def initial_state() -> LexerState:
    """Create the state for the start of a document: one root context."""
    return LexerState()
