"""Tests for the public batch API: tokenize, tokenize_lines, Lexer."""

from __future__ import annotations

import pytest

import configneat
from configneat import Lexer, Tag, initial_state, lex_line, tokenize, tokenize_lines


class TestTokenize:
    """tokenize() over whole sources."""

    def test_empty_source(self) -> None:
        assert list(tokenize("")) == []

    def test_empty_lines_produce_nothing(self) -> None:
        assert list(tokenize("\n\n")) == []

    def test_one_token_per_character_for_plain_text(self) -> None:
        tokens = list(tokenize("ab cd"))
        assert [t.value for t in tokens] == ["a", "b", " ", "c", "d"]

    def test_positions(self) -> None:
        tokens = list(tokenize("a\nbc d"))
        last = tokens[-1]
        assert last.value == "d"
        assert last.lineno == 2
        assert last.col == 4
        assert last._start_offset == 5
        assert last._end_offset == 6

    def test_location_is_lazy_and_cached(self) -> None:
        token = list(tokenize("a\nbc d", source_file="app.conf"))[-1]
        assert token.location is token.location
        assert str(token.location) == "app.conf:2:4"
        assert token.location.end_offset == 6
        assert token.location.end_col_offset == 5

    def test_multi_character_token_positions(self) -> None:
        token = list(tokenize("flag off"))[-1]
        assert token.tag is Tag.BUILTIN
        assert token.col == 6
        assert token._end_offset - token._start_offset == 3

    def test_resume_from_given_state(self) -> None:
        state = initial_state()
        list(tokenize("section {", state=state))
        tokens = list(tokenize("}", state=state))
        assert [t.tag for t in tokens] == [Tag.BRACKET]
        assert state.depth == 1

    def test_repr(self) -> None:
        token = list(tokenize("k"))[0]
        assert repr(token) == "Token(KEYWORD, 'k', 1:1)"

    def test_carriage_return_is_line_content(self) -> None:
        tokens = list(tokenize("a\r\nb"))
        assert [t.value for t in tokens] == ["a", "\r", "b"]


class TestTokenizeLines:
    """tokenize_lines() and Lexer.tokenize_lines()."""

    def test_one_list_per_line(self) -> None:
        result = list(tokenize_lines(["a {", "", "}"]))
        assert len(result) == 3
        assert result[1] == []
        assert [t.tag for t in result[2]] == [Tag.BRACKET]

    def test_no_lines(self) -> None:
        assert list(tokenize_lines([])) == []

    def test_lazy_iterable(self) -> None:
        lines = iter(["key yes", "other no"])
        result = list(tokenize_lines(lines))
        assert result[0][-1].tag is Tag.BUILTIN
        assert result[1][-1].lineno == 2
        assert result[1][0]._start_offset == 8

    def test_rejects_embedded_newline(self) -> None:
        with pytest.raises(ValueError):
            list(tokenize_lines(["a\nb"]))

    def test_lexer_tokenize_lines_matches(self) -> None:
        source = "a {\n  b yes\n}"
        flat = [t for line in Lexer(source).tokenize_lines() for t in line]
        assert flat == list(tokenize(source))


class TestLexLine:
    """lex_line() drives one line against a caller-owned state."""

    def test_mutates_state(self) -> None:
        state = initial_state()
        lex_line("a {", state)
        assert state.depth == 2

    def test_offsets_and_lineno(self) -> None:
        tokens = lex_line("xy", initial_state(), lineno=7, offset=100)
        assert [(t.lineno, t.col, t._start_offset) for t in tokens] == [
            (7, 1, 100),
            (7, 2, 101),
        ]


class TestTag:
    """Tag style names and helpers."""

    def test_style_names(self) -> None:
        assert Tag.ERROR.style == "error"
        assert Tag.ESCAPED_BACKTICK.style == "string-2"
        assert Tag.RAW_STRING.style == "quote"
        assert Tag.KEY_INHERIT.style == "key-inherit"
        assert Tag.BUILTIN.style == "builtin"

    def test_thirteen_tags(self) -> None:
        assert len(Tag) == 13

    def test_is_key(self) -> None:
        keys = {tag for tag in Tag if tag.is_key}
        assert keys == {
            Tag.KEY_LABEL,
            Tag.KEY_INHERIT,
            Tag.KEY_MERGE,
            Tag.KEY_DELETE,
            Tag.KEYWORD,
        }


class TestPublicSurface:
    """Everything in __all__ is importable."""

    def test_all_names_resolve(self) -> None:
        for name in configneat.__all__:
            assert hasattr(configneat, name), name
