"""Tag and Token definitions for the ConfigNeat lexer.

``next_token`` returns a Tag for every call. The batch drivers wrap each
classification in a Token that also carries the consumed text and its
position.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
Tag is an enum (inherently immutable).

Performance Note:
Token stores raw coordinates and lazily creates SourceLocation on demand.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from configneat.location import SourceLocation


class Tag(Enum):
    """Token classifications produced by the lexer.

    Each value is the CodeMirror style name a highlighter host would
    use for the tag (``Tag.KEYWORD.style == "keyword"``).

    """

    # Faults
    ERROR = "error"

    # Opaque spans
    ESCAPED_BACKTICK = "string-2"  # \`
    PLACEHOLDER = "placeholder"  # %name%
    RAW_STRING = "quote"  # `raw`
    COMMENT = "comment"  # # line, /* block */

    # Structure
    BRACKET = "bracket"  # { }

    # Keys, by lead character
    KEY_LABEL = "key-label"  # :name
    KEY_INHERIT = "key-inherit"  # @name
    KEY_MERGE = "key-merge"  # +name
    KEY_DELETE = "key-delete"  # -name
    KEYWORD = "keyword"  # name

    # Values
    BUILTIN = "builtin"  # yes/no/on/off/true/false/y/n/1/0
    VARIABLE = "variable"

    @property
    def style(self) -> str:
        """CodeMirror style name for this tag."""
        return self.value

    @property
    def is_key(self) -> bool:
        """True for the five key classifications."""
        return self in _KEY_TAGS


_KEY_TAGS = frozenset(
    {Tag.KEY_LABEL, Tag.KEY_INHERIT, Tag.KEY_MERGE, Tag.KEY_DELETE, Tag.KEYWORD}
)

# Key lead character -> key tag (anything else is a plain KEYWORD)
KEY_LEAD_TAGS: dict[str, Tag] = {
    ":": Tag.KEY_LABEL,
    "@": Tag.KEY_INHERIT,
    "+": Tag.KEY_MERGE,
    "-": Tag.KEY_DELETE,
}


@dataclass(frozen=True, slots=True)
class Token:
    """One classified span produced by a single ``next_token`` call.

    Attributes:
        tag: The classification
        value: The text consumed by the call
        _lineno: Line number (1-indexed)
        _col: Column of the first consumed character (1-indexed)
        _start_offset: Absolute start position in source
        _end_offset: Absolute end position in source
        _source_file: Optional source file path

    """

    tag: Tag
    value: str
    _lineno: int
    _col: int
    _start_offset: int
    _end_offset: int
    _source_file: str | None = None
    # Cache field - excluded from repr and comparison
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        # Import here to avoid circular import at module load
        from configneat.location import SourceLocation

        loc = SourceLocation(
            lineno=self._lineno,
            col_offset=self._col,
            offset=self._start_offset,
            end_offset=self._end_offset,
            end_lineno=self._lineno,
            end_col_offset=self._col + len(self.value),
            source_file=self._source_file,
        )
        object.__setattr__(self, "_location_cache", loc)
        return loc

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        return f"Token({self.tag.name}, {self.value!r}, {self._lineno}:{self._col})"

    @property
    def lineno(self) -> int:
        """Line number (convenience accessor)."""
        return self._lineno

    @property
    def col(self) -> int:
        """Column offset (convenience accessor)."""
        return self._col
