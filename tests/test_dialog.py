import curses

import pytest

from kconftools import dialog
from kconftools.dialog import (
    MAXITEMSTR,
    DialogInfo,
    DisplayTooSmall,
    ItemList,
    attr_clear,
    autowrap_layout,
    draw_box,
    first_alpha,
    init_dialog,
    on_key_esc,
    on_key_resize,
    print_button,
    print_title,
)


class FakeWindow:
    def __init__(self, rows=10, cols=40, keys=()):
        self.rows, self.cols = rows, cols
        self.cells = [[(" ", 0)] * cols for _ in range(rows)]
        self.y = self.x = 0
        self.keys = list(keys)
        self.touched = False
        self.nodelay_state = None
        self.keypad_state = None

    def getmaxyx(self):
        return self.rows, self.cols

    def move(self, y, x):
        self.y, self.x = y, x

    def attrset(self, attr):
        pass

    def _put(self, ch):
        if 0 <= self.y < self.rows and 0 <= self.x < self.cols:
            self.cells[self.y][self.x] = (chr(ch & 0xFF), ch & ~0xFF)
        self.x += 1

    def addch(self, *args):
        if len(args) == 3:
            self.move(args[0], args[1])
        ch = args[-1]
        self._put(ch if isinstance(ch, int) else ord(ch))

    def addstr(self, *args):
        if len(args) == 3:
            self.move(args[0], args[1])
        for c in args[-1]:
            self._put(ord(c))

    def addnstr(self, y, x, s, n):
        self.addstr(y, x, s[:n])

    def touchwin(self):
        self.touched = True

    def noutrefresh(self):
        pass

    def getyx(self):
        return self.y, self.x

    def nodelay(self, flag):
        self.nodelay_state = flag

    def keypad(self, flag):
        self.keypad_state = flag

    def getch(self):
        return self.keys.pop(0) if self.keys else -1

    def row(self, y):
        return "".join(c for c, _ in self.cells[y])


def test_first_alpha_skips_exempt_and_brackets():
    s = "(Yes) Hello world"
    i = first_alpha(s, "YyNnMmHh")
    assert s[i] == "e"
    assert s[i].lower() not in "yynnmmhh"


def test_first_alpha_without_letters_returns_zero():
    assert first_alpha("123 !!", "") == 0


def test_first_alpha_plain():
    assert first_alpha("abc", "") == 0
    assert first_alpha("Hat", "h") == 1


def test_autowrap_short_prompt_is_centred():
    layout = autowrap_layout("Hi\nthere", 40, 1, 3)
    assert len(layout) == 1
    row, col, text = layout[0]
    assert row == 1
    assert text == "Hi there"
    assert 2 * col + len(text) in (40, 39)


def test_autowrap_long_prompt_keeps_words_and_fits():
    prompt = "The quick brown fox jumps over the lazy dog again and again"
    width = 20
    layout = autowrap_layout(prompt, width, 1, 3)
    assert [w for _, _, w in layout] == prompt.split()
    rows = [r for r, _, _ in layout]
    assert rows == sorted(rows)
    assert len(set(rows)) > 1
    for _, col, word in layout:
        assert col + len(word) <= width


def test_item_list_basic_operations():
    items = ItemList()
    first = items.make("alpha")
    items.make("beta")
    assert len(items) == 2
    assert [i.text for i in items] == ["alpha", "beta"]
    assert items.current_index() == 1
    items.add_str(" more")
    assert items.current.text == "beta more"
    items.set_current(0)
    assert items.current is first


def test_item_list_text_is_truncated():
    items = ItemList()
    items.make("x" * 500)
    assert len(items.current.text) == MAXITEMSTR - 1
    items.add_str("y")
    assert len(items.current.text) == MAXITEMSTR - 1


def test_item_list_set_current_out_of_range():
    items = ItemList()
    items.make("a")
    with pytest.raises(IndexError):
        items.set_current(3)


def test_item_list_any_selected_moves_to_selected():
    items = ItemList()
    items.make("a")
    items.make("b").selected = True
    items.make("c")
    assert items.any_selected() is True
    assert items.current_index() == 1
    items.reset()
    assert len(items) == 0
    assert items.any_selected() is False
    assert items.current_index() == 0


def test_themes():
    info = DialogInfo()
    assert info.apply_theme("mono") is False
    assert info.apply_theme(None) is True
    assert info.title.fg == curses.COLOR_BLUE
    assert info.apply_theme("classic") is True
    assert info.title.fg == curses.COLOR_YELLOW
    assert info.apply_theme("blackbg") is True
    assert info.dialog.bg == curses.COLOR_BLACK


def test_set_mono():
    info = DialogInfo()
    info.set_mono()
    assert info.title.atr == curses.A_BOLD
    assert info.item_selected.atr == curses.A_REVERSE
    assert info.button_inactive.atr == curses.A_DIM


def test_attr_clear_fills_blanks():
    win = FakeWindow(3, 5)
    win.cells[1][2] = ("x", 0)
    attr_clear(win, 3, 5, 0)
    assert all(win.row(r) == " " * 5 for r in range(3))
    assert win.touched


def test_draw_box_edges_and_attributes():
    win = FakeWindow(8, 12)
    box_attr, border_attr = curses.A_BOLD, curses.A_REVERSE
    draw_box(win, 1, 2, 5, 8, box_attr, border_attr)
    for r in range(2, 5):
        assert win.row(r)[3:9] == " " * 6
        assert win.cells[r][2][1] == border_attr
        assert win.cells[r][9][1] == box_attr
        assert win.cells[r][2][0] != " "
    assert win.cells[1][5][1] == border_attr
    assert win.cells[5][5][1] == box_attr
    assert win.row(0) == " " * 12


def test_print_button_draws_label_and_positions_cursor():
    win = FakeWindow()
    print_button(win, "  Ok  ", 2, 4, True)
    assert win.row(2)[4:4 + len("<  Ok  >")] == "<  Ok  >"
    assert win.getyx() == (2, 4 + 2 + 1)


def test_print_title_centres():
    win = FakeWindow(3, 20)
    print_title(win, "Hello", 20)
    row = win.row(0)
    start = row.index("Hello")
    assert row[start - 1] == " " and row[start + 5] == " "
    left = start
    right = 20 - (start + 5)
    assert abs(left - right) <= 1


def test_on_key_esc_single_escape():
    win = FakeWindow(keys=[27])
    assert on_key_esc(win) == dialog.KEY_ESC
    assert win.nodelay_state is False
    assert win.keypad_state is True


def test_on_key_esc_sequence_is_discarded():
    win = FakeWindow(keys=[27, 65, 66])
    assert on_key_esc(win) == -1
    assert win.keys == []


def test_on_key_resize_redraws_backtitle(monkeypatch):
    monkeypatch.setattr(dialog.dlg, "backtitle", "Config")
    win = FakeWindow(5, 30)
    assert on_key_resize(win) == curses.KEY_RESIZE
    assert win.row(0)[1:7] == "Config"
    assert win.row(1)[1:29].strip() != ""


def test_init_dialog_rejects_small_screen():
    with pytest.raises(DisplayTooSmall):
        init_dialog(FakeWindow(10, 40), "title")