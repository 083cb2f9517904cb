"""Incremental state-machine lexer for ConfigNeat.

The lexer classifies one token per call and keeps everything it needs
between calls in a LexerState, so tokenizing can resume from a saved
state at any line boundary.

Architecture:
lexer/
├── __init__.py          # Re-exports
├── core.py              # next_token rule cascade, lex_line, Lexer driver
├── modes.py             # BlockMode enum, special characters
├── state.py             # BlockContext, BlockStack, LexerState
├── stream.py            # LineStream (cursor over one line)
└── literals.py          # Boolean literal matcher

Usage:
    >>> from configneat.lexer import LineStream, initial_state, next_token
    >>> state = initial_state()
    >>> stream = LineStream("enabled on")
    >>> tags = []
    >>> while not stream.eol():
    ...     tags.append(next_token(stream, state).name)
    >>> tags[-2:]
    ['VARIABLE', 'BUILTIN']

"""

from configneat.lexer.core import Lexer, lex_line, next_token, step
from configneat.lexer.modes import BlockMode
from configneat.lexer.state import BlockContext, BlockStack, LexerState, initial_state
from configneat.lexer.stream import LineStream

__all__ = [
    "BlockContext",
    "BlockMode",
    "BlockStack",
    "Lexer",
    "LexerState",
    "LineStream",
    "initial_state",
    "lex_line",
    "next_token",
    "step",
]
