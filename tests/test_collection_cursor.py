import copy
import re

import pytest

from seqcursor.collection.cursor import CollectionCursor
from seqcursor.errors import CursorBoundsError


class Boom(Exception):
    pass


def _raise_on(bad):
    def pred(c):
        if c == bad:
            raise Boom(c)
        return True
    return pred


def test_defaults_to_start_and_reports_end():
    cur = CollectionCursor("abc")
    assert cur.position == 0
    assert not cur.is_at_end
    cur.advance_by(3)
    assert cur.is_at_end
    assert cur.remainder() == ""


def test_initial_position_must_be_in_range():
    assert CollectionCursor("abc", 3).is_at_end
    with pytest.raises(CursorBoundsError):
        CollectionCursor("abc", 4)
    with pytest.raises(CursorBoundsError):
        CollectionCursor([1, 2], -1)


def test_remainder_keeps_subject_type():
    assert CollectionCursor("hello", 2).remainder() == "llo"
    assert CollectionCursor(b"hello", 5).remainder() == b""
    assert CollectionCursor([1, 2, 3], 1).remainder() == [2, 3]
    assert CollectionCursor((1, 2, 3), 3).remainder() == ()


def test_advance_at_end_raises_and_does_not_move():
    cur = CollectionCursor("a")
    cur.advance()
    with pytest.raises(CursorBoundsError):
        cur.advance()
    assert cur.position == 1


def test_advance_by_moves_both_ways_within_bounds():
    cur = CollectionCursor("abcdef")
    cur.advance_by(4)
    assert cur.position == 4
    cur.advance_by(-3)
    assert cur.position == 1
    with pytest.raises(CursorBoundsError):
        cur.advance_by(-2)
    with pytest.raises(CursorBoundsError):
        cur.advance_by(6)
    assert cur.position == 1


def test_advance_while_always_true_matches_stepwise_advance():
    subject = list(range(7))
    a = CollectionCursor(subject)
    a.advance_while(lambda _: True)
    b = CollectionCursor(subject)
    while not b.is_at_end:
        b.advance()
    assert a.is_at_end
    assert a.position == b.position == 7


def test_advance_while_stops_at_first_rejection():
    cur = CollectionCursor("   x  ")
    cur.advance_while(str.isspace)
    assert cur.position == 3
    assert cur.peek() == "x"


def test_advance_while_keeps_progress_when_predicate_raises():
    cur = CollectionCursor("aab")
    with pytest.raises(Boom):
        cur.advance_while(_raise_on("b"))
    assert cur.position == 2


def test_advance_while_inspect_passes_the_cursor():
    # stop at the first repeated character
    cur = CollectionCursor("abccd")
    cur.advance_while(lambda c, p: p.position == 0 or p.subject[p.position - 1] != c, inspect=True)
    assert cur.position == 3


def test_advance_while_inspect_cursor_moves_do_not_affect_the_scan():
    seen = []

    def pred(c, p):
        seen.append(p.position)
        p.advance()
        return c != "d"

    cur = CollectionCursor("abcd")
    cur.advance_while(pred, inspect=True)
    assert cur.position == 3
    assert seen == [0, 1, 2, 3]


def test_advance_matching_is_anchored():
    cur = CollectionCursor("123abc")
    assert cur.advance_matching(r"\d+")
    assert cur.position == 3
    assert not cur.advance_matching(r"\d+")
    assert cur.position == 3
    assert not CollectionCursor("ab12").advance_matching(r"\d+")


def test_patterns_treat_position_as_start_of_text():
    cur = CollectionCursor("ab12")
    cur.advance_by(2)
    m = cur.read_match(r"^\d+$")
    assert m is not None
    assert m.group(0) == "12"
    assert m.span() == (0, 2)
    assert cur.is_at_end

    assert CollectionCursor("ab", 1).has_prefix_match(r"\bb")
    # consumed elements are invisible to lookbehind
    assert not CollectionCursor("xa", 1).has_prefix_match(r"(?<=x)a")

    tail = CollectionCursor(b"key=val", 4)
    assert tail.advance_matching(rb"\Aval")
    assert tail.position == 7


def test_pattern_operations_need_text_subject():
    cur = CollectionCursor([1, 2, 3])
    with pytest.raises(TypeError):
        cur.advance_matching(r"\d")
    with pytest.raises(TypeError):
        cur.has_prefix_match(r"\d")


def test_peek_and_fixed_width_lookahead():
    cur = CollectionCursor("abc")
    assert cur.peek() == "a"
    assert cur.peek2() == ("a", "b")
    assert cur.peek3() == ("a", "b", "c")
    cur.advance()
    assert cur.peek2() == ("b", "c")
    assert cur.peek3() is None
    cur.advance()
    assert cur.peek() == "c"
    assert cur.peek2() is None
    cur.advance()
    assert cur.peek() is None
    assert cur.peek2() is None
    assert cur.peek3() is None
    assert cur.position == 3


def test_has_prefix_agrees_with_peek_and_does_not_move():
    subject = "abc"
    for pos in range(len(subject) + 1):
        cur = CollectionCursor(subject, pos)
        for x in "abcz":
            assert cur.has_prefix(x) == (cur.peek() == x)
            assert cur.position == pos


def test_has_prefix_none_at_end_is_false():
    assert not CollectionCursor([], 0).has_prefix(None)


def test_starts_with_sequences():
    cur = CollectionCursor("hello world")
    assert cur.starts_with("hello")
    assert cur.starts_with("")
    assert not cur.starts_with("help")
    assert not cur.starts_with("hello world!")
    assert cur.position == 0
    assert CollectionCursor(b"\x01\x02\x03").starts_with(b"\x01\x02")
    assert CollectionCursor([1, 2, 3], 1).starts_with((2, 3))


def test_has_prefix_match():
    cur = CollectionCursor("abc123", 3)
    assert cur.has_prefix_match(r"\d")
    assert not cur.has_prefix_match(r"[a-z]")
    assert cur.position == 3


def test_pop_enumerates_the_subject_in_order():
    for subject in ("héllo", [3, 1, 2], b"xyz", ()):
        cur = CollectionCursor(subject)
        popped = []
        while (e := cur.pop()) is not None:
            popped.append(e)
        assert popped == list(subject)
        assert cur.is_at_end


def test_pop_element():
    cur = CollectionCursor(".x")
    assert not cur.pop_element("x")
    assert cur.position == 0
    assert cur.pop_element(".")
    assert cur.position == 1


def test_pop_where():
    cur = CollectionCursor("a1")
    assert cur.pop_where(str.isdigit) is None
    assert cur.position == 0
    assert cur.pop_where(str.isalpha) == "a"
    with pytest.raises(Boom):
        cur.pop_where(_raise_on("1"))
    assert cur.position == 1
    assert cur.pop_where(str.isdigit) == "1"
    assert cur.pop_where(lambda _: True) is None


def test_read_count_boundaries():
    empty = CollectionCursor("")
    assert empty.read(0) == ""

    cur = CollectionCursor("abc")
    assert cur.read(4) is None
    assert cur.position == 0
    assert cur.read(3) == "abc"
    assert cur.is_at_end

    with pytest.raises(ValueError):
        CollectionCursor("abc").read(-1)


def test_read_count_splits_remainder_without_gap_or_overlap():
    subject = "abcdefg"
    for n in range(len(subject)):
        cur = CollectionCursor(subject, 1)
        remaining = len(subject) - 1
        first = cur.read(n)
        second = cur.read(remaining - n)
        assert first == subject[1:1 + n]
        assert first + second == subject[1:]
        assert cur.is_at_end


def test_read_prefix():
    cur = CollectionCursor("let x")
    assert not cur.read_prefix("lex")
    assert cur.position == 0
    assert cur.read_prefix("let")
    assert cur.position == 3
    assert CollectionCursor([1, 2, 3]).read_prefix([1, 2])


def test_read_while_returns_longest_matching_prefix():
    cur = CollectionCursor("123abc")
    digits = cur.read_while(str.isdigit)
    assert digits == "123"
    assert cur.position == len(digits)
    assert cur.read_while(str.isdigit) == ""
    assert cur.position == 3
    assert cur.read_while(str.isalpha) == "abc"
    assert cur.is_at_end


def test_read_while_keeps_prefix_when_predicate_raises():
    cur = CollectionCursor("ab!c")
    with pytest.raises(Boom):
        cur.read_while(_raise_on("!"))
    assert cur.position == 2


def test_read_match():
    cur = CollectionCursor("2025-10-19 rest")
    m = cur.read_match(r"(\d{4})-(\d{2})-(\d{2})")
    assert m is not None
    assert m.group(1) == "2025"
    assert cur.position == 10
    assert cur.read_match(r"\d+") is None
    assert cur.position == 10


def test_read_match_on_bytes_with_compiled_pattern():
    cur = CollectionCursor(b"\x00\x00a")
    m = cur.read_match(re.compile(rb"\x00+"))
    assert m.group(0) == b"\x00\x00"
    assert cur.position == 2


def test_cafe_scenario():
    cur = CollectionCursor("café.")
    assert cur.read_while(str.isalpha) == "café"
    assert cur.peek() == "."
    assert cur.pop_element(".")
    assert cur.is_at_end


def test_copies_evolve_independently():
    cur = CollectionCursor("abc")
    dup = cur.copy()
    dup.advance()
    assert cur.position == 0
    other = copy.copy(cur)
    other.advance_by(2)
    assert cur.position == 0
    assert other.position == 2


def test_consumed_since():
    cur = CollectionCursor("hello world")
    start = cur.position
    cur.advance_while(str.isalpha)
    assert cur.consumed_since(start) == "hello"
