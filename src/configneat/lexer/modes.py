"""Block context modes and lexical constants.

This module defines the per-block modes of the state machine and the
character constants the rule cascade dispatches on.
"""

from __future__ import annotations

from enum import Enum, auto


class BlockMode(Enum):
    """What a block context is currently scanning.

    The mode is derived from the context flags in the same priority the
    tokenizer checks them:
    - PLACEHOLDER: Inside a %placeholder% span
    - RAW_STRING: Inside a `raw string`
    - LINE_COMMENT: After # until end of line
    - BLOCK_COMMENT: Between /* and */
    - KEY: Scanning a key token
    - VALUE: A value token has started on this line
    - DEFAULT: Between tokens

    """

    PLACEHOLDER = auto()
    RAW_STRING = auto()
    LINE_COMMENT = auto()
    BLOCK_COMMENT = auto()
    KEY = auto()
    VALUE = auto()
    DEFAULT = auto()


SPACE = " "
BACKSLASH = "\\"
BACKTICK = "`"
PERCENT = "%"
HASH = "#"
SLASH = "/"
STAR = "*"
OPEN_BRACE = "{"
CLOSE_BRACE = "}"
