"""A dialog box with Yes and No buttons."""

from __future__ import annotations

import curses
from typing import Any, Tuple

from .dialog import (
    KEY_ESC,
    TAB,
    DisplayTooSmall,
    acs,
    dlg,
    draw_box,
    draw_shadow,
    on_key_esc,
    on_key_resize,
    print_autowrap,
    print_button,
    print_title,
)


def _put(win: Any, ch: int) -> None:
    try:
        win.addch(ch)
    except curses.error:
        pass


def _puts(win: Any, text: str) -> None:
    try:
        win.addstr(text)
    except curses.error:
        pass


def _open_frame(
    stdscr: Any, title: str, prompt: str, height: int, width: int
) -> Tuple[Any, int, int]:
    """Create a centred dialog window with border, button separator, title and prompt.

    Returns the window and its top-left screen position (y, x).
    """
    lines, cols = stdscr.getmaxyx()
    x = (cols - width) // 2
    y = (lines - height) // 2
    draw_shadow(stdscr, y, x, height, width)

    win = curses.newwin(height, width, y, x)
    win.keypad(True)
    draw_box(win, 0, 0, height, width, dlg.dialog.atr, dlg.border.atr)
    win.attrset(dlg.border.atr)
    win.move(height - 3, 0)
    _put(win, acs("ACS_LTEE"))
    for _ in range(width - 2):
        _put(win, acs("ACS_HLINE"))
    win.attrset(dlg.dialog.atr)
    _put(win, acs("ACS_RTEE"))

    print_title(win, title, width)
    win.attrset(dlg.dialog.atr)
    print_autowrap(win, prompt, width - 2, 1, 3)
    return win, y, x


def next_button(button: int, key: int, count: int) -> int:
    """The button selected after moving left (KEY_LEFT) or right (any other key),
    wrapping around among count buttons."""
    button = button - 1 if key == curses.KEY_LEFT else button + 1
    if button < 0:
        return count - 1
    return 0 if button > count - 1 else button


def _print_buttons(win: Any, height: int, width: int, selected: int) -> None:
    x = width // 2 - 10
    y = height - 2
    print_button(win, " Yes ", y, x, selected == 0)
    print_button(win, "  No  ", y, x + 13, selected == 1)
    win.move(y, x + 1 + 13 * selected)
    win.refresh()


def dialog_yesno(stdscr: Any, title: str, prompt: str, height: int, width: int) -> int:
    """Ask a yes/no question.

    Returns 0 for Yes, 1 for No, or KEY_ESC if the dialog was left with ESC.
    Raises DisplayTooSmall if the screen cannot hold the box.
    """
    key = 0
    button = 0
    while True:
        lines, cols = stdscr.getmaxyx()
        if lines < height + 4 or cols < width + 4:
            raise DisplayTooSmall(f"screen is {lines}x{cols}, dialog needs {height + 4}x{width + 4}")

        win, _, _ = _open_frame(stdscr, title, prompt, height, width)
        _print_buttons(win, height, width, 0)

        while key != KEY_ESC:
            key = win.getch()
            if key in (ord("Y"), ord("y")):
                return 0
            if key in (ord("N"), ord("n")):
                return 1
            if key in (TAB, curses.KEY_LEFT, curses.KEY_RIGHT):
                button = next_button(button, key, 2)
                _print_buttons(win, height, width, button)
                win.refresh()
            elif key in (ord(" "), ord("\n")):
                return button
            elif key == KEY_ESC:
                key = on_key_esc(win)
            elif key == curses.KEY_RESIZE:
                on_key_resize(stdscr)
                break
        else:
            return key