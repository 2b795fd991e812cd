"""Tests for the character cursor."""

from rdcalc.cursor import Cursor


def test_peek_does_not_advance():
    c = Cursor("12")
    assert c.peek() == "1"
    assert c.peek() == "1"
    assert c.position == 0


def test_peek_at_end_is_none():
    c = Cursor("")
    assert c.peek() is None
    assert c.at_end()


def test_skip_whitespace_and_peek():
    c = Cursor("  \t7")
    assert c.skip_whitespace_and_peek() == "7"
    assert c.position == 3


def test_skip_whitespace_to_end():
    c = Cursor("   ")
    assert c.skip_whitespace_and_peek() is None
    assert c.position == 3


# --- try_consume ---

def test_try_consume_match_advances_by_one():
    c = Cursor(" (1)")
    assert c.try_consume("(") is True
    assert c.position == 2
    assert c.peek() == "1"


def test_try_consume_mismatch_leaves_character():
    c = Cursor("+")
    assert c.try_consume("-") is False
    assert c.position == 0
    assert c.peek() == "+"


def test_try_consume_at_end():
    c = Cursor("")
    assert c.try_consume(")") is False


def test_position_never_decreases():
    c = Cursor(" 1 + 2 ")
    seen = [c.position]
    for expected in ("1", "*", "+", "2", ")"):
        c.try_consume(expected)
        seen.append(c.position)
    assert seen == sorted(seen)
    assert c.skip_whitespace_and_peek() is None
