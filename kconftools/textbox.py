"""A scrolling viewer for a block of text."""

from __future__ import annotations

import curses
from typing import Any, List

from .dialog import (
    KEY_ESC,
    MAX_LEN,
    DisplayTooSmall,
    acs,
    attr_clear,
    dlg,
    draw_box,
    draw_shadow,
    on_key_esc,
    on_key_resize,
    print_button,
    print_title,
)
from .yesno import _put


class TextPager:
    """Position within a text being paged through line by line.

    `page` is the index of the start of the next line to read, `hscroll`
    the number of columns scrolled off the left.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.page = 0
        self.begin_reached = True
        self.end_reached = False
        self.page_length = 0
        self.hscroll = 0

    def get_line(self) -> str:
        """Read the line at the current position and move past it.

        Lines longer than MAX_LEN are truncated; end_reached is set when the
        text ran out before a newline.
        """
        self.end_reached = False
        newline = self.text.find("\n", self.page)
        if newline == -1:
            line = self.text[self.page:]
            self.page = len(self.text)
            self.end_reached = True
        else:
            line = self.text[self.page:newline]
            self.page = newline + 1
        return line[:MAX_LEN]

    def back_lines(self, n: int) -> None:
        """Move the position back n line starts, stopping at the beginning."""
        self.begin_reached = False
        for _ in range(n):
            if self.page >= len(self.text) and self.end_reached:
                self.end_reached = False
                continue
            if self.page == 0:
                self.begin_reached = True
                return
            self.page -= 1
            while True:
                if self.page == 0:
                    self.begin_reached = True
                    return
                self.page -= 1
                if self.text[self.page] == "\n":
                    break
            self.page += 1

    def page_lines(self, height: int) -> List[str]:
        """Read a page of height lines, horizontally scrolled.

        Sets page_length to the number of lines up to and including the
        last one of the text.
        """
        lines = []
        passed_end = False
        self.page_length = 0
        for _ in range(height):
            line = self.get_line()
            lines.append(line[min(len(line), self.hscroll):])
            if not passed_end:
                self.page_length += 1
            if self.end_reached and not passed_end:
                passed_end = True
        return lines

    def percent(self) -> int:
        """How far through the text the current position is, in percent."""
        if not self.text:
            return 0
        return self.page * 100 // len(self.text)


def _print_line(win: Any, row: int, line: str, width: int) -> None:
    win.move(row, 0)
    _put(win, ord(" "))
    count = min(len(line), width - 2)
    if count > 0:
        try:
            win.addnstr(line, count)
        except curses.error:
            pass
    win.clrtoeol()


def _print_position(win: Any, pager: TextPager) -> None:
    win.attrset(dlg.position_indicator.atr)
    win.bkgdset(" ", dlg.position_indicator.atr & curses.A_COLOR)
    maxy, maxx = win.getmaxyx()
    win.move(maxy - 3, maxx - 9)
    try:
        win.addstr(f"({pager.percent():3d}%)")
    except curses.error:
        pass


def dialog_textbox(
    stdscr: Any, title: str, text: str, initial_height: int, initial_width: int
) -> int:
    """Show text in a scrollable box.

    A height or width of 0 means the screen size less a margin. Returns 0
    when closed with E or X, otherwise the key that ended it (KEY_ESC or
    Enter). Raises DisplayTooSmall below 8x8.
    """
    pager = TextPager(text)
    key = 0

    while True:
        height, width = stdscr.getmaxyx()
        if height < 8 or width < 8:
            raise DisplayTooSmall(f"screen is {height}x{width}, need at least 8x8")
        if initial_height:
            height = initial_height
        else:
            height = height - 4 if height > 4 else 0
        if initial_width:
            width = initial_width
        else:
            width = width - 5 if width > 5 else 0

        lines, cols = stdscr.getmaxyx()
        x = (cols - width) // 2
        y = (lines - height) // 2
        draw_shadow(stdscr, y, x, height, width)

        dialog = curses.newwin(height, width, y, x)
        dialog.keypad(True)

        boxh, boxw = height - 4, width - 2
        box = dialog.subwin(boxh, boxw, y + 1, x + 1)
        box.attrset(dlg.dialog.atr)
        box.bkgdset(" ", dlg.dialog.atr & curses.A_COLOR)
        box.keypad(True)

        draw_box(dialog, 0, 0, height, width, dlg.dialog.atr, dlg.border.atr)
        dialog.attrset(dlg.border.atr)
        dialog.move(height - 3, 0)
        _put(dialog, acs("ACS_LTEE"))
        for _ in range(width - 2):
            _put(dialog, acs("ACS_HLINE"))
        dialog.attrset(dlg.dialog.atr)
        dialog.bkgdset(" ", dlg.dialog.atr & curses.A_COLOR)
        _put(dialog, acs("ACS_RTEE"))

        print_title(dialog, title, width)
        print_button(dialog, " Exit ", height - 2, width // 2 - 4, True)
        dialog.noutrefresh()
        cur_y, cur_x = dialog.getyx()

        def restore_cursor() -> None:
            _print_position(dialog, pager)
            dialog.move(cur_y, cur_x)
            dialog.refresh()

        def refresh_box() -> None:
            for row, line in enumerate(pager.page_lines(boxh)):
                _print_line(box, row, line, boxw)
            box.noutrefresh()
            restore_cursor()

        attr_clear(box, boxh, boxw, dlg.dialog.atr)
        refresh_box()

        while key not in (KEY_ESC, ord("\n")):
            key = dialog.getch()
            if key in (ord("E"), ord("e"), ord("X"), ord("x")):
                return 0
            if key in (ord("g"), curses.KEY_HOME):
                if not pager.begin_reached:
                    pager.begin_reached = True
                    pager.page = 0
                    refresh_box()
            elif key in (ord("G"), curses.KEY_END):
                pager.end_reached = True
                pager.page = len(pager.text)
                pager.back_lines(boxh)
                refresh_box()
            elif key in (ord("K"), ord("k"), curses.KEY_UP):
                if not pager.begin_reached:
                    pager.back_lines(pager.page_length + 1)
                    box.scrollok(True)
                    box.scroll(-1)
                    box.scrollok(False)
                    page = pager.page_lines(boxh)
                    if page:
                        _print_line(box, 0, page[0], boxw)
                    box.noutrefresh()
                    restore_cursor()
            elif key in (ord("B"), ord("b"), curses.KEY_PPAGE):
                if not pager.begin_reached:
                    pager.back_lines(pager.page_length + boxh)
                    refresh_box()
            elif key in (ord("J"), ord("j"), curses.KEY_DOWN):
                if not pager.end_reached:
                    pager.begin_reached = False
                    box.scrollok(True)
                    box.scroll(1)
                    box.scrollok(False)
                    line = pager.get_line()
                    _print_line(box, boxh - 1, line[min(len(line), pager.hscroll):], boxw)
                    box.noutrefresh()
                    restore_cursor()
            elif key in (curses.KEY_NPAGE, ord(" ")):
                if not pager.end_reached:
                    pager.begin_reached = False
                    refresh_box()
            elif key in (ord("0"), ord("H"), ord("h"), curses.KEY_LEFT):
                if pager.hscroll > 0:
                    pager.hscroll = 0 if key == ord("0") else pager.hscroll - 1
                    pager.back_lines(pager.page_length)
                    refresh_box()
            elif key in (ord("L"), ord("l"), curses.KEY_RIGHT):
                if pager.hscroll < MAX_LEN:
                    pager.hscroll += 1
                    pager.back_lines(pager.page_length)
                    refresh_box()
            elif key == KEY_ESC:
                key = on_key_esc(dialog)
            elif key == curses.KEY_RESIZE:
                pager.back_lines(height)
                on_key_resize(stdscr)
                break
        else:
            return key