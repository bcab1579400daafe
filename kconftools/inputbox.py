"""A dialog box for entering a line of text."""

from __future__ import annotations

import curses
from typing import Any, Optional, Tuple

from .dialog import (
    KEY_ESC,
    MAX_LEN,
    TAB,
    DisplayTooSmall,
    dlg,
    draw_box,
    on_key_esc,
    on_key_resize,
    print_button,
)
from .yesno import _open_frame, _puts


class InputField:
    """Text being edited in a fixed-width box, with the cursor at the end.

    `scroll` is how many characters are hidden off the left edge and `cursor`
    the column of the cursor inside the box.
    """

    def __init__(self, box_width: int, init: Optional[str] = None) -> None:
        self.box_width = box_width
        self.text = init or ""
        self.scroll = 0
        self.cursor = len(self.text)
        if self.cursor >= box_width:
            self.scroll = self.cursor - box_width + 1
            self.cursor = box_width - 1

    def insert(self, ch: str) -> bool:
        """Append a character; returns False if the text is already at its limit."""
        pos = self.scroll + self.cursor
        if pos >= MAX_LEN:
            return False
        self.text = self.text[:pos] + ch
        if self.cursor == self.box_width - 1:
            self.scroll += 1
        else:
            self.cursor += 1
        return True

    def backspace(self) -> bool:
        """Delete the character before the cursor.

        At the left edge of a scrolled field the view moves back by a box width
        instead. Returns False if there was nothing to do.
        """
        if not (self.cursor or self.scroll):
            return False
        if not self.cursor:
            step = self.box_width - 1
            self.scroll = 0 if self.scroll < step else self.scroll - step
            self.cursor = len(self.text) - self.scroll
        else:
            self.cursor -= 1
        self.text = self.text[: self.scroll + self.cursor]
        return True

    def visible(self) -> str:
        """The part of the text shown in the box."""
        return self.text[self.scroll : self.scroll + self.box_width]


def _print_buttons(win: Any, height: int, width: int, selected: int) -> None:
    x = width // 2 - 11
    y = height - 2
    print_button(win, "  Ok  ", y, x, selected == 0)
    print_button(win, " Help ", y, x + 14, selected == 1)
    win.move(y, x + 1 + 14 * selected)
    win.refresh()


def _draw_field(win: Any, field: InputField, box_y: int, box_x: int) -> None:
    win.attrset(dlg.inputbox.atr)
    win.move(box_y, box_x)
    _puts(win, field.visible().ljust(field.box_width)[: field.box_width])
    win.move(box_y, box_x + field.cursor)
    win.refresh()


def dialog_inputbox(
    stdscr: Any, title: str, prompt: str, height: int, width: int, init: Optional[str]
) -> Tuple[int, str]:
    """Ask for a line of text.

    Returns (result, text): result is 0 for Ok, 1 for Help, or KEY_ESC if
    the dialog was left. Raises DisplayTooSmall if the screen is too small.
    """
    text = init or ""
    key = 0
    button = -1
    while True:
        lines, cols = stdscr.getmaxyx()
        if lines <= height - 2 or cols <= width - 2:
            raise DisplayTooSmall(f"screen is {lines}x{cols}, too small for {height}x{width}")

        dialog, _, _ = _open_frame(stdscr, title, prompt, height, width)

        box_width = width - 6
        y, _ = dialog.getyx()
        box_y = y + 2
        box_x = (width - box_width) // 2
        draw_box(dialog, y + 1, box_x - 1, 3, box_width + 2, dlg.dialog.atr, dlg.border.atr)
        _print_buttons(dialog, height, width, 0)

        field = InputField(box_width, text)
        _draw_field(dialog, field, box_y, box_x)

        while key != KEY_ESC:
            key = dialog.getch()

            if button == -1:
                if key in (curses.KEY_LEFT, curses.KEY_RIGHT):
                    continue
                if key in (curses.KEY_BACKSPACE, 127):
                    if field.backspace():
                        text = field.text
                        _draw_field(dialog, field, box_y, box_x)
                    continue
                if 32 <= key < 127:
                    if field.insert(chr(key)):
                        text = field.text
                        _draw_field(dialog, field, box_y, box_x)
                    else:
                        curses.flash()
                    continue

            if key in (ord("O"), ord("o")):
                return 0, text
            if key in (ord("H"), ord("h")):
                return 1, text
            if key in (curses.KEY_UP, curses.KEY_LEFT):
                if button == -1:
                    button = 1
                    _print_buttons(dialog, height, width, 1)
                elif button == 0:
                    button = -1
                    _print_buttons(dialog, height, width, 0)
                    _draw_field(dialog, field, box_y, box_x)
                else:
                    button = 0
                    _print_buttons(dialog, height, width, 0)
            elif key in (TAB, curses.KEY_DOWN, curses.KEY_RIGHT):
                if button == -1:
                    button = 0
                    _print_buttons(dialog, height, width, 0)
                elif button == 0:
                    button = 1
                    _print_buttons(dialog, height, width, 1)
                else:
                    button = -1
                    _print_buttons(dialog, height, width, 0)
                    _draw_field(dialog, field, box_y, box_x)
            elif key in (ord(" "), ord("\n")):
                return (0 if button == -1 else button), text
            elif key in (ord("X"), ord("x")):
                key = KEY_ESC
            elif key == KEY_ESC:
                key = on_key_esc(dialog)
            elif key == curses.KEY_RESIZE:
                on_key_resize(stdscr)
                break
        else:
            return KEY_ESC, text