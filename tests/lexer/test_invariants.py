"""Property-based tests for lexer invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from configneat import (
    Lexer,
    LineStream,
    Tag,
    initial_state,
    next_token,
    tokenize,
    tokenize_lines,
)

# Every character the cascade treats specially, plus filler
SPECIAL = "{}#`%\\/*:@+- yYnN10ab\t"

lines_strategy = st.lists(st.text(alphabet=SPECIAL, max_size=30), min_size=1, max_size=12)

# Balanced nesting with no character that could hide a brace
_leaf = st.text(alphabet="ab :@+-\n", max_size=8)
balanced_strategy = st.recursive(
    _leaf,
    lambda children: st.builds(lambda inner: "{" + inner + "}", children)
    | st.lists(children, max_size=3).map("".join),
    max_leaves=20,
)


class TestProgress:
    """Every call terminates, returns a Tag and advances the stream."""

    @given(st.text(alphabet=SPECIAL, max_size=200))
    @settings(max_examples=200)
    def test_each_call_advances(self, line: str) -> None:
        state = initial_state()
        stream = LineStream(line)
        while not stream.eol():
            before = stream.pos
            tag = next_token(stream, state)
            assert isinstance(tag, Tag)
            assert stream.pos > before

    @given(st.text(max_size=300))
    @settings(max_examples=100)
    def test_tokens_cover_source(self, source: str) -> None:
        """Token values concatenate back to the source, minus newlines."""
        tokens = list(tokenize(source))
        assert "".join(t.value for t in tokens) == source.replace("\n", "")
        for token in tokens:
            assert source[token._start_offset : token._end_offset] == token.value

    @given(st.text(alphabet=SPECIAL + "\n", max_size=200))
    @settings(max_examples=100)
    def test_depth_never_below_root(self, source: str) -> None:
        lexer = Lexer(source)
        list(lexer.tokenize())
        assert lexer.state.depth >= 1


class TestResumability:
    """Resuming from a snapshot reproduces tokenizing from scratch."""

    @given(lines_strategy, st.data())
    @settings(max_examples=150)
    def test_snapshot_at_line_boundary(self, lines: list[str], data: st.DataObject) -> None:
        split = data.draw(st.integers(min_value=0, max_value=len(lines)))
        full = [[(t.tag, t.value) for t in line] for line in tokenize_lines(lines)]

        state = initial_state()
        list(tokenize_lines(lines[:split], state=state))
        snapshot = state.copy()
        resumed = [
            [(t.tag, t.value) for t in line]
            for line in tokenize_lines(lines[split:], state=snapshot)
        ]

        assert resumed == full[split:]

    @given(lines_strategy)
    @settings(max_examples=50)
    def test_snapshot_unaffected_by_later_lexing(self, lines: list[str]) -> None:
        state = initial_state()
        list(tokenize_lines(lines[:1], state=state))
        snapshot = state.copy()
        frozen = snapshot.copy()
        list(tokenize_lines(lines[1:], state=state))
        assert snapshot == frozen


class TestBraces:
    """Balanced braces never error; an extra closer always does."""

    @given(balanced_strategy)
    @settings(max_examples=150)
    def test_balanced_never_errors(self, source: str) -> None:
        lexer = Lexer(source)
        tags = [t.tag for t in lexer.tokenize()]
        assert Tag.ERROR not in tags
        assert lexer.state.errored is False
        assert lexer.state.depth == 1

    @given(balanced_strategy, st.text(alphabet="ab {}\n", max_size=20))
    @settings(max_examples=100)
    def test_extra_closer_is_sticky(self, source: str, tail: str) -> None:
        lexer = Lexer(source + "}" + tail)
        tokens = list(lexer.tokenize())
        assert lexer.state.errored is True
        first_error = next(i for i, t in enumerate(tokens) if t.tag is Tag.ERROR)
        assert tokens[first_error].value == "}"
        assert all(t.tag is Tag.ERROR for t in tokens[first_error:])


class TestBooleans:
    """Boolean recognition is case-insensitive and whole-token."""

    @given(
        st.sampled_from(["yes", "y", "on", "true", "1", "no", "n", "off", "false", "0"]),
        st.lists(st.booleans(), min_size=5, max_size=5),
    )
    def test_any_casing(self, word: str, upper: list[bool]) -> None:
        spelled = "".join(c.upper() if u else c for c, u in zip(word, upper))
        tokens = list(tokenize(f"flag {spelled}"))
        assert (tokens[-1].tag, tokens[-1].value) == (Tag.BUILTIN, spelled)

    @given(
        st.sampled_from(["yes", "on", "true", "no", "off", "false"]),
        st.text(alphabet="abcxz", min_size=1, max_size=5),
    )
    def test_suffix_breaks_literal(self, word: str, suffix: str) -> None:
        tags = [t.tag for t in tokenize(f"flag {word}{suffix}")]
        assert Tag.BUILTIN not in tags


class TestDeterminism:
    """Tokenization is a pure function of (source, initial state)."""

    @given(st.text(alphabet=SPECIAL + "\n", max_size=200))
    @settings(max_examples=50)
    def test_repeated_tokenization_identical(self, source: str) -> None:
        first = [(t.tag, t.value) for t in tokenize(source)]
        second = [(t.tag, t.value) for t in tokenize(source)]
        assert first == second

    def test_initial_state_twice(self) -> None:
        first = initial_state()
        second = initial_state()
        assert first == second
        assert first is not second
        assert first.blocks is not second.blocks
        assert first.top is not second.top
        assert first.errors is not second.errors
