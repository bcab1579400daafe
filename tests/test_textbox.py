import pytest

from kconftools.dialog import MAX_LEN, DisplayTooSmall
from kconftools.textbox import TextPager, dialog_textbox


def test_get_line_reads_in_order_and_flags_end():
    pager = TextPager("one\ntwo\nthree")
    assert pager.get_line() == "one"
    assert not pager.end_reached
    assert pager.get_line() == "two"
    assert pager.get_line() == "three"
    assert pager.end_reached
    assert pager.page == len(pager.text)


def test_get_line_past_end_returns_empty():
    pager = TextPager("only")
    pager.get_line()
    assert pager.get_line() == ""
    assert pager.end_reached


def test_get_line_truncates_long_lines():
    pager = TextPager("x" * (MAX_LEN + 500) + "\nnext")
    assert len(pager.get_line()) == MAX_LEN
    assert pager.get_line() == "next"


def test_page_lines_counts_lines_up_to_end():
    pager = TextPager("one\ntwo\nthree")
    lines = pager.page_lines(5)
    assert lines[:3] == ["one", "two", "three"]
    assert len(lines) == 5
    assert pager.page_length == 3


def test_page_lines_full_page():
    pager = TextPager("one\ntwo\nthree")
    assert pager.page_lines(2) == ["one", "two"]
    assert pager.page_length == 2
    assert not pager.end_reached


def test_page_lines_applies_hscroll():
    pager = TextPager("abcdef\nxy")
    pager.hscroll = 3
    assert pager.page_lines(2) == ["def", ""]


def test_back_lines_moves_to_previous_line():
    pager = TextPager("one\ntwo\nthree")
    pager.get_line()
    pager.get_line()
    pager.back_lines(1)
    assert pager.get_line() == "two"


def test_back_lines_stops_at_beginning():
    pager = TextPager("one\ntwo\nthree")
    pager.page_lines(3)
    pager.back_lines(10)
    assert pager.begin_reached
    assert pager.page == 0
    assert pager.get_line() == "one"


def test_page_back_and_forth_round_trip():
    text = "\n".join(f"line {n}" for n in range(20))
    pager = TextPager(text)
    first = pager.page_lines(4)
    second = pager.page_lines(4)
    pager.back_lines(pager.page_length + 4)
    assert pager.page_lines(4) == first
    assert pager.page_lines(4) == second


def test_percent_bounds():
    pager = TextPager("one\ntwo\nthree")
    assert pager.percent() == 0
    pager.page_lines(3)
    assert pager.percent() == 100


def test_percent_is_monotonic():
    pager = TextPager("\n".join("abc" for _ in range(10)))
    seen = [pager.percent()]
    for _ in range(10):
        pager.get_line()
        seen.append(pager.percent())
    assert seen == sorted(seen)


class _TinyScreen:
    def getmaxyx(self):
        return (5, 5)


def test_dialog_textbox_rejects_small_screen():
    with pytest.raises(DisplayTooSmall):
        dialog_textbox(_TinyScreen(), "Title", "text", 0, 0)