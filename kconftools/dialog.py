"""Shared pieces of the text-mode dialogs: colour themes, the item list and
drawing helpers for curses windows."""

from __future__ import annotations

import curses
import os
from dataclasses import dataclass, field, fields
from typing import Any, Iterator, List, Optional, Tuple

KEY_ESC = 27
TAB = 9
ERR = -1
MAX_LEN = 2048
MAXITEMSTR = 200

_ACS_FALLBACK = {
    "ACS_ULCORNER": "+",
    "ACS_LLCORNER": "+",
    "ACS_URCORNER": "+",
    "ACS_LRCORNER": "+",
    "ACS_HLINE": "-",
    "ACS_VLINE": "|",
    "ACS_LTEE": "+",
    "ACS_RTEE": "+",
    "ACS_UARROW": "^",
    "ACS_DARROW": "v",
}


def acs(name: str) -> int:
    """A line-drawing character, or its plain ASCII stand-in before curses is set up."""
    value = getattr(curses, name, None)
    if value is None:
        return ord(_ACS_FALLBACK[name])
    return value


class DisplayTooSmall(Exception):
    """The terminal is too small for the requested dialog."""


@dataclass
class DialogColor:
    """Attribute of one screen element and the colours it is built from."""

    atr: int = 0
    fg: int = 0
    bg: int = 0
    hl: bool = False


def _color() -> Any:
    return field(default_factory=DialogColor)


_CLASSIC = {
    "screen": (curses.COLOR_CYAN, curses.COLOR_BLUE, True),
    "shadow": (curses.COLOR_BLACK, curses.COLOR_BLACK, True),
    "dialog": (curses.COLOR_BLACK, curses.COLOR_WHITE, False),
    "title": (curses.COLOR_YELLOW, curses.COLOR_WHITE, True),
    "border": (curses.COLOR_WHITE, curses.COLOR_WHITE, True),
    "button_active": (curses.COLOR_WHITE, curses.COLOR_BLUE, True),
    "button_inactive": (curses.COLOR_BLACK, curses.COLOR_WHITE, False),
    "button_key_active": (curses.COLOR_WHITE, curses.COLOR_BLUE, True),
    "button_key_inactive": (curses.COLOR_RED, curses.COLOR_WHITE, False),
    "button_label_active": (curses.COLOR_YELLOW, curses.COLOR_BLUE, True),
    "button_label_inactive": (curses.COLOR_BLACK, curses.COLOR_WHITE, True),
    "inputbox": (curses.COLOR_BLACK, curses.COLOR_WHITE, False),
    "inputbox_border": (curses.COLOR_BLACK, curses.COLOR_WHITE, False),
    "searchbox": (curses.COLOR_BLACK, curses.COLOR_WHITE, False),
    "searchbox_title": (curses.COLOR_YELLOW, curses.COLOR_WHITE, True),
    "searchbox_border": (curses.COLOR_WHITE, curses.COLOR_WHITE, True),
    "position_indicator": (curses.COLOR_YELLOW, curses.COLOR_WHITE, True),
    "menubox": (curses.COLOR_BLACK, curses.COLOR_WHITE, False),
    "menubox_border": (curses.COLOR_WHITE, curses.COLOR_WHITE, True),
    "item": (curses.COLOR_BLACK, curses.COLOR_WHITE, False),
    "item_selected": (curses.COLOR_WHITE, curses.COLOR_BLUE, True),
    "tag": (curses.COLOR_YELLOW, curses.COLOR_WHITE, True),
    "tag_selected": (curses.COLOR_YELLOW, curses.COLOR_BLUE, True),
    "tag_key": (curses.COLOR_YELLOW, curses.COLOR_WHITE, True),
    "tag_key_selected": (curses.COLOR_YELLOW, curses.COLOR_BLUE, True),
    "check": (curses.COLOR_BLACK, curses.COLOR_WHITE, False),
    "check_selected": (curses.COLOR_WHITE, curses.COLOR_BLUE, True),
    "uarrow": (curses.COLOR_GREEN, curses.COLOR_WHITE, True),
    "darrow": (curses.COLOR_GREEN, curses.COLOR_WHITE, True),
}

_BLACKBG = {
    "screen": (curses.COLOR_RED, curses.COLOR_BLACK, True),
    "shadow": (curses.COLOR_BLACK, curses.COLOR_BLACK, False),
    "dialog": (curses.COLOR_WHITE, curses.COLOR_BLACK, False),
    "title": (curses.COLOR_RED, curses.COLOR_BLACK, False),
    "border": (curses.COLOR_BLACK, curses.COLOR_BLACK, True),
    "button_active": (curses.COLOR_YELLOW, curses.COLOR_RED, False),
    "button_inactive": (curses.COLOR_YELLOW, curses.COLOR_BLACK, False),
    "button_key_active": (curses.COLOR_YELLOW, curses.COLOR_RED, True),
    "button_key_inactive": (curses.COLOR_RED, curses.COLOR_BLACK, False),
    "button_label_active": (curses.COLOR_WHITE, curses.COLOR_RED, False),
    "button_label_inactive": (curses.COLOR_BLACK, curses.COLOR_BLACK, True),
    "inputbox": (curses.COLOR_YELLOW, curses.COLOR_BLACK, False),
    "inputbox_border": (curses.COLOR_YELLOW, curses.COLOR_BLACK, False),
    "searchbox": (curses.COLOR_YELLOW, curses.COLOR_BLACK, False),
    "searchbox_title": (curses.COLOR_YELLOW, curses.COLOR_BLACK, True),
    "searchbox_border": (curses.COLOR_BLACK, curses.COLOR_BLACK, True),
    "position_indicator": (curses.COLOR_RED, curses.COLOR_BLACK, False),
    "menubox": (curses.COLOR_YELLOW, curses.COLOR_BLACK, False),
    "menubox_border": (curses.COLOR_BLACK, curses.COLOR_BLACK, True),
    "item": (curses.COLOR_WHITE, curses.COLOR_BLACK, False),
    "item_selected": (curses.COLOR_WHITE, curses.COLOR_RED, False),
    "tag": (curses.COLOR_RED, curses.COLOR_BLACK, False),
    "tag_selected": (curses.COLOR_YELLOW, curses.COLOR_RED, True),
    "tag_key": (curses.COLOR_RED, curses.COLOR_BLACK, False),
    "tag_key_selected": (curses.COLOR_YELLOW, curses.COLOR_RED, True),
    "check": (curses.COLOR_YELLOW, curses.COLOR_BLACK, False),
    "check_selected": (curses.COLOR_YELLOW, curses.COLOR_RED, True),
    "uarrow": (curses.COLOR_RED, curses.COLOR_BLACK, False),
    "darrow": (curses.COLOR_RED, curses.COLOR_BLACK, False),
}

_BLUETITLE = {
    "title": (curses.COLOR_BLUE, curses.COLOR_WHITE, True),
    "button_key_active": (curses.COLOR_YELLOW, curses.COLOR_BLUE, True),
    "button_label_active": (curses.COLOR_WHITE, curses.COLOR_BLUE, True),
    "searchbox_title": (curses.COLOR_BLUE, curses.COLOR_WHITE, True),
    "position_indicator": (curses.COLOR_BLUE, curses.COLOR_WHITE, True),
    "tag": (curses.COLOR_BLUE, curses.COLOR_WHITE, True),
    "tag_key": (curses.COLOR_BLUE, curses.COLOR_WHITE, True),
}

_MONO = {
    "screen": curses.A_NORMAL,
    "shadow": curses.A_NORMAL,
    "dialog": curses.A_NORMAL,
    "title": curses.A_BOLD,
    "border": curses.A_NORMAL,
    "button_active": curses.A_REVERSE,
    "button_inactive": curses.A_DIM,
    "button_key_active": curses.A_REVERSE,
    "button_key_inactive": curses.A_BOLD,
    "button_label_active": curses.A_REVERSE,
    "button_label_inactive": curses.A_NORMAL,
    "inputbox": curses.A_NORMAL,
    "inputbox_border": curses.A_NORMAL,
    "searchbox": curses.A_NORMAL,
    "searchbox_title": curses.A_BOLD,
    "searchbox_border": curses.A_NORMAL,
    "position_indicator": curses.A_BOLD,
    "menubox": curses.A_NORMAL,
    "menubox_border": curses.A_NORMAL,
    "item": curses.A_NORMAL,
    "item_selected": curses.A_REVERSE,
    "tag": curses.A_BOLD,
    "tag_selected": curses.A_REVERSE,
    "tag_key": curses.A_BOLD,
    "tag_key_selected": curses.A_REVERSE,
    "check": curses.A_BOLD,
    "check_selected": curses.A_REVERSE,
    "uarrow": curses.A_BOLD,
    "darrow": curses.A_BOLD,
}


@dataclass
class DialogInfo:
    """Colour attributes of every screen element, plus the background title."""

    backtitle: Optional[str] = None
    screen: DialogColor = _color()
    shadow: DialogColor = _color()
    dialog: DialogColor = _color()
    title: DialogColor = _color()
    border: DialogColor = _color()
    button_active: DialogColor = _color()
    button_inactive: DialogColor = _color()
    button_key_active: DialogColor = _color()
    button_key_inactive: DialogColor = _color()
    button_label_active: DialogColor = _color()
    button_label_inactive: DialogColor = _color()
    inputbox: DialogColor = _color()
    inputbox_border: DialogColor = _color()
    searchbox: DialogColor = _color()
    searchbox_title: DialogColor = _color()
    searchbox_border: DialogColor = _color()
    position_indicator: DialogColor = _color()
    menubox: DialogColor = _color()
    menubox_border: DialogColor = _color()
    item: DialogColor = _color()
    item_selected: DialogColor = _color()
    tag: DialogColor = _color()
    tag_selected: DialogColor = _color()
    tag_key: DialogColor = _color()
    tag_key_selected: DialogColor = _color()
    check: DialogColor = _color()
    check_selected: DialogColor = _color()
    uarrow: DialogColor = _color()
    darrow: DialogColor = _color()

    def _colors(self) -> Iterator[DialogColor]:
        for f in fields(self):
            if f.name != "backtitle":
                yield getattr(self, f.name)

    def _set_colors(self, table: dict) -> None:
        for name, (fg, bg, hl) in table.items():
            color = getattr(self, name)
            color.fg, color.bg, color.hl = fg, bg, hl

    def apply_theme(self, name: Optional[str]) -> bool:
        """Load a colour theme by name; returns False if colours should not be used."""
        if name is None or name == "bluetitle":
            self._set_colors(_CLASSIC)
            self._set_colors(_BLUETITLE)
        elif name == "classic":
            self._set_colors(_CLASSIC)
        elif name == "blackbg":
            self._set_colors(_BLACKBG)
        elif name == "mono":
            return False
        return True

    def set_mono(self) -> None:
        """Use plain video attributes instead of colours."""
        for name, atr in _MONO.items():
            getattr(self, name).atr = atr

    def _init_colors(self) -> None:
        for pair, color in enumerate(self._colors(), start=1):
            curses.init_pair(pair, color.fg, color.bg)
            color.atr = curses.color_pair(pair)
            if color.hl:
                color.atr |= curses.A_BOLD


dlg = DialogInfo()


@dataclass
class Item:
    """One entry of a menu or checklist."""

    text: str = ""
    tag: str = ""
    data: Any = None
    selected: bool = False


class ItemList:
    """Ordered dialog items with a current position."""

    def __init__(self) -> None:
        self._items: List[Item] = []
        self._cur: Optional[int] = None

    def reset(self) -> None:
        self._items.clear()
        self._cur = None

    def make(self, text: str) -> Item:
        """Append a new item and make it current."""
        item = Item(text[: MAXITEMSTR - 1])
        self._items.append(item)
        self._cur = len(self._items) - 1
        return item

    @property
    def current(self) -> Item:
        if self._cur is None:
            raise IndexError("no current item")
        return self._items[self._cur]

    def add_str(self, text: str) -> None:
        """Append text to the current item, keeping it within the length limit."""
        item = self.current
        item.text = (item.text + text)[: MAXITEMSTR - 1]

    def set_current(self, n: int) -> None:
        if not 0 <= n < len(self._items):
            raise IndexError(f"item {n} out of range")
        self._cur = n

    def current_index(self) -> int:
        return self._cur if self._cur is not None else 0

    def any_selected(self) -> bool:
        """True if an item is selected; the first selected item becomes current."""
        for index, item in enumerate(self._items):
            if item.selected:
                self._cur = index
                return True
        return False

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)


def first_alpha(string: str, exempt: str) -> int:
    """Index of the first letter outside brackets that is not in exempt, else 0."""
    in_paren = 0
    for i, ch in enumerate(string):
        c = ch.lower()
        if c in "<[(":
            in_paren += 1
        if c in ">])" and in_paren > 0:
            in_paren -= 1
        if not in_paren and c.isascii() and c.isalpha() and c not in exempt:
            return i
    return 0


def autowrap_layout(prompt: str, width: int, y: int, x: int) -> List[Tuple[int, int, str]]:
    """Positions (row, column, word) at which a wrapped prompt is drawn.

    Newlines become spaces; a short prompt is centred on one line. A new line
    is started when a word does not fit, or when a short word opening a
    sentence would be left alone before a word that does not fit.
    """
    text = prompt[:MAX_LEN].replace("\n", " ")
    n = len(text)
    if n <= width - x * 2:
        return [(y, (width - n) // 2, text)]

    out: List[Tuple[int, int, str]] = []
    cur_x, cur_y, newl = x, y, True
    pos = 0
    while pos < n:
        space = text.find(" ", pos)
        if space == -1:
            word, rest = text[pos:], None
        else:
            word, rest = text[pos:space], space + 1
        room = width - cur_x
        wlen = len(word)
        wrap = wlen > room
        if not wrap and newl and wlen < 4 and rest is not None:
            if wlen + 1 + (n - rest) > room:
                sp2 = text.find(" ", rest)
                wrap = sp2 == -1 or wlen + 1 + (sp2 - rest) > room
        if wrap:
            cur_y += 1
            cur_x = x
        if word:
            out.append((cur_y, cur_x, word))
        cur_x += wlen + 1
        if rest is None:
            break
        if rest < n and text[rest] == " ":
            cur_x += 1
            while rest < n and text[rest] == " ":
                rest += 1
            newl = True
        else:
            newl = False
        pos = rest
    return out


def _addch(win: Any, ch: int) -> None:
    try:
        win.addch(ch)
    except curses.error:
        # Writing the bottom-right cell moves the cursor off the window.
        pass


def _addstr(win: Any, text: str) -> None:
    try:
        win.addstr(text)
    except curses.error:
        pass


def attr_clear(win: Any, height: int, width: int, attr: int) -> None:
    """Fill a region with blanks in the given attribute."""
    win.attrset(attr)
    for i in range(height):
        win.move(i, 0)
        for _ in range(width):
            _addch(win, ord(" "))
    win.touchwin()


def dialog_clear(stdscr: Any) -> None:
    """Clear the screen and draw the background title, if any."""
    lines, cols = stdscr.getmaxyx()
    attr_clear(stdscr, lines, cols, dlg.screen.atr)
    if dlg.backtitle is not None:
        stdscr.attrset(dlg.screen.atr)
        stdscr.move(0, 1)
        _addstr(stdscr, dlg.backtitle)
        stdscr.move(1, 1)
        for _ in range(1, cols - 1):
            _addch(stdscr, acs("ACS_HLINE"))
    stdscr.noutrefresh()


def _color_setup(theme: Optional[str]) -> None:
    if dlg.apply_theme(theme) and curses.has_colors():
        curses.start_color()
        dlg._init_colors()
    else:
        dlg.set_mono()


def init_dialog(stdscr: Any, backtitle: Optional[str]) -> None:
    """Prepare the screen for dialogs; raises DisplayTooSmall below 19x80."""
    height, width = stdscr.getmaxyx()
    if height < 19 or width < 80:
        raise DisplayTooSmall(f"screen is {height}x{width}, need at least 19x80")
    dlg.backtitle = backtitle
    _color_setup(os.environ.get("MENUCONFIG_COLOR"))
    stdscr.keypad(True)
    curses.cbreak()
    curses.noecho()
    dialog_clear(stdscr)


def end_dialog(stdscr: Any, x: int, y: int) -> None:
    """Put the cursor back and leave curses mode."""
    stdscr.move(y, x)
    stdscr.refresh()
    curses.endwin()


def print_autowrap(win: Any, prompt: str, width: int, y: int, x: int) -> None:
    """Draw a prompt wrapped to the given width."""
    for row, col, word in autowrap_layout(prompt, width, y, x):
        win.move(row, col)
        _addstr(win, word)


def print_button(win: Any, label: str, y: int, x: int, selected: bool) -> None:
    """Draw <label> with its first letter highlighted as the hot key."""
    button = dlg.button_active.atr if selected else dlg.button_inactive.atr
    text_attr = dlg.button_label_active.atr if selected else dlg.button_label_inactive.atr
    key_attr = dlg.button_key_active.atr if selected else dlg.button_key_inactive.atr

    win.move(y, x)
    win.attrset(button)
    _addstr(win, "<")
    stripped = label.lstrip(" ")
    indent = len(label) - len(stripped)
    win.attrset(text_attr)
    _addstr(win, " " * indent)
    if stripped:
        win.attrset(key_attr)
        _addstr(win, stripped[0])
        win.attrset(text_attr)
        _addstr(win, stripped[1:])
    win.attrset(button)
    _addstr(win, ">")
    win.move(y, x + indent + 1)


def print_title(win: Any, title: Optional[str], width: int) -> None:
    """Centre the title on the top border, truncated to width - 2."""
    if not title:
        return
    tlen = min(width - 2, len(title))
    win.attrset(dlg.title.atr)
    win.move(0, (width - tlen) // 2 - 1)
    _addch(win, ord(" "))
    try:
        win.addnstr(0, (width - tlen) // 2, title, tlen)
    except curses.error:
        pass
    _addch(win, ord(" "))


def draw_box(win: Any, y: int, x: int, height: int, width: int, box: int, border: int) -> None:
    """Draw a box: top and left edges in border, bottom, right and inside in box."""
    win.attrset(0)
    last_row, last_col = height - 1, width - 1
    for i in range(height):
        win.move(y + i, x)
        for j in range(width):
            if i == 0 and j == 0:
                ch = border | acs("ACS_ULCORNER")
            elif i == last_row and j == 0:
                ch = border | acs("ACS_LLCORNER")
            elif i == 0 and j == last_col:
                ch = box | acs("ACS_URCORNER")
            elif i == last_row and j == last_col:
                ch = box | acs("ACS_LRCORNER")
            elif i == 0:
                ch = border | acs("ACS_HLINE")
            elif i == last_row:
                ch = box | acs("ACS_HLINE")
            elif j == 0:
                ch = border | acs("ACS_VLINE")
            elif j == last_col:
                ch = box | acs("ACS_VLINE")
            else:
                ch = box | ord(" ")
            _addch(win, ch)


def draw_shadow(win: Any, y: int, x: int, height: int, width: int) -> None:
    """Darken the cells along the right and bottom edges of a box."""
    if not curses.has_colors():
        return
    win.attrset(dlg.shadow.atr)
    win.move(y + height, x + 2)
    for _ in range(width):
        _addch(win, win.inch() & curses.A_CHARTEXT)
    for i in range(y + 1, y + height + 1):
        win.move(i, x + width)
        _addch(win, win.inch() & curses.A_CHARTEXT)
        _addch(win, win.inch() & curses.A_CHARTEXT)
    win.noutrefresh()


def on_key_esc(win: Any) -> int:
    """Handle ESC: returns KEY_ESC for a lone ESC, else -1 after discarding input.

    A single pending ordinary key is pushed back for the next read.
    """
    win.nodelay(True)
    win.keypad(False)
    key = win.getch()
    key2 = win.getch()
    while win.getch() != ERR:
        pass
    win.nodelay(False)
    win.keypad(True)
    if key == KEY_ESC and key2 == ERR:
        return KEY_ESC
    if key != ERR and key != KEY_ESC and key2 == ERR:
        curses.ungetch(key)
    return -1


def on_key_resize(stdscr: Any) -> int:
    """Redraw the background after a terminal resize."""
    dialog_clear(stdscr)
    return curses.KEY_RESIZE