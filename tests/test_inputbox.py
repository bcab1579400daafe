import curses
from unittest import mock

import pytest

from kconftools.dialog import KEY_ESC, MAX_LEN, TAB, DisplayTooSmall
from kconftools.inputbox import InputField, dialog_inputbox


class FakeWindow:
    def __init__(self, keys=(), size=(40, 100)):
        self.keys = list(keys)
        self.size = size

    def getmaxyx(self):
        return self.size

    def getyx(self):
        return (2, 3)

    def getch(self):
        return self.keys.pop(0)

    def subwin(self, *args):
        return self

    def __getattr__(self, name):
        return lambda *args, **kwargs: None


def keys(*parts):
    out = []
    for part in parts:
        if isinstance(part, str):
            out.extend(ord(c) for c in part)
        else:
            out.append(part)
    return out


def run(key_codes, init=None):
    win = FakeWindow(key_codes)
    with mock.patch("curses.newwin", return_value=win), mock.patch(
        "curses.has_colors", return_value=False
    ), mock.patch("curses.flash"):
        return dialog_inputbox(FakeWindow(), "Value", "Enter a value", 10, 50, init)


def consistent(field):
    return field.scroll + field.cursor == len(field.text) and field.cursor < field.box_width


def test_short_init_has_no_scroll():
    field = InputField(10, "abc")
    assert (field.text, field.scroll, field.cursor) == ("abc", 0, 3)


def test_long_init_scrolls_to_end():
    field = InputField(10, "x" * 15)
    assert field.cursor == 9
    assert consistent(field)


def test_insert_and_backspace_round_trip():
    field = InputField(10, "abc")
    assert field.insert("d")
    assert field.text == "abcd"
    assert field.backspace()
    assert field.text == "abc"
    assert consistent(field)


def test_insert_scrolls_at_right_edge():
    field = InputField(4)
    for ch in "abcdef":
        field.insert(ch)
    assert field.text == "abcdef"
    assert field.cursor == field.box_width - 1
    assert consistent(field)


def test_insert_refused_at_limit():
    field = InputField(10, "a" * MAX_LEN)
    assert not field.insert("b")
    assert field.text == "a" * MAX_LEN


def test_backspace_on_empty_does_nothing():
    field = InputField(10)
    assert not field.backspace()
    assert field.text == ""


def test_backspace_at_left_edge_scrolls_back_without_deleting():
    field = InputField(5, "abcdefgh")
    for _ in range(4):
        field.backspace()
    assert field.text == "abcd"
    assert field.cursor == 0
    assert field.backspace()
    assert field.text == "abcd"
    assert field.scroll == 0
    assert consistent(field)


def test_visible_is_window_on_text():
    field = InputField(5, "abcdefgh")
    shown = field.visible()
    assert field.text.endswith(shown)
    assert len(shown) <= field.box_width


def test_typing_then_enter():
    assert run(keys("hi", "\n")) == (0, "hi")


def test_init_and_backspace():
    assert run(keys(curses.KEY_BACKSPACE, "\n"), init="abc") == (0, "ab")


def test_tab_to_ok_then_space():
    assert run(keys("v", TAB, " ")) == (0, "v")


def test_tab_to_help_then_enter():
    assert run(keys(TAB, TAB, "\n"), init="val") == (1, "val")


def test_help_hotkey_in_button_mode():
    assert run(keys(TAB, "h"), init="q") == (1, "q")


def test_letters_in_field_are_typed_not_hotkeys():
    assert run(keys("oh", "\n")) == (0, "oh")


def test_exit_returns_esc_and_text():
    assert run(keys("ab", TAB, "x")) == (KEY_ESC, "ab")


def test_too_small_screen_raises():
    with pytest.raises(DisplayTooSmall):
        dialog_inputbox(FakeWindow(size=(5, 100)), "T", "p", 10, 50, None)