"""Fixed-grammar matcher for boolean literal values.

A value is a boolean literal when the rest of the line is one of the
literal spellings (case-insensitive), then optional whitespace, then
either end of line or the start of a comment::

    literal  := one of the configured spellings
    trailer  := whitespace* ( EOL | "#" anything | "/*" anything )

No regex: the grammar is two short literal sets, scanned directly.
"""

from __future__ import annotations

from collections.abc import Sequence

_COMMENT_STARTS = ("#", "/*")


def _trailer_ok(text: str, pos: int) -> bool:
    """Whitespace only, then end of text or a comment start."""
    end = len(text)
    while pos < end and text[pos].isspace():
        pos += 1
    return pos == end or text.startswith(_COMMENT_STARTS, pos)


def match_literal(text: str, pos: int, literals: Sequence[str]) -> int:
    """Match a boolean literal anchored at ``text[pos]``.

    Literals are tried in order; the first one that matches and is
    followed by a valid trailer wins.

    Args:
        text: The whole line
        pos: Position where the candidate literal starts
        literals: Upper-case spellings, in priority order

    Returns:
        Length of the matched literal, or 0 when nothing matches.

    Example:
        >>> match_literal("enabled Yes  # on", 8, ("YES", "Y"))
        3
        >>> match_literal("yesno", 0, ("YES", "Y"))
        0
    """
    for literal in literals:
        size = len(literal)
        if not size:
            continue
        if text[pos : pos + size].upper() == literal.upper() and _trailer_ok(text, pos + size):
            return size
    return 0
