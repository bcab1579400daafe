"""A radio-style list dialog: exactly one item ends up selected."""

from __future__ import annotations

import curses
from dataclasses import dataclass
from typing import Any, Iterable, List

from .dialog import (
    KEY_ESC,
    TAB,
    DisplayTooSmall,
    Item,
    acs,
    dlg,
    draw_box,
    on_key_esc,
    on_key_resize,
    print_button,
)
from .yesno import _open_frame, _put, _puts, next_button


def initial_choice(items: Iterable[Item]) -> int:
    """Index of the item to highlight first.

    The first selected item wins; otherwise the last item tagged 'X'; otherwise 0.
    """
    choice = 0
    for index, item in enumerate(items):
        if item.tag == "X":
            choice = index
        if item.selected:
            return index
    return choice


def _upper(code: int) -> int:
    return code - 32 if ord("a") <= code <= ord("z") else code


def _first_code(text: str) -> int:
    return _upper(ord(text[0])) if text else 0


@dataclass
class _ListView:
    win: Any
    list_width: int
    check_x: int
    item_x: int

    def draw(self, row: int, item: Item, selected: bool) -> None:
        win = self.win
        text = item.text[: max(self.list_width - self.item_x, 0)]
        win.attrset(dlg.menubox.atr)
        win.move(row, 0)
        for _ in range(self.list_width):
            _put(win, ord(" "))
        win.move(row, self.check_x)
        win.attrset(dlg.check_selected.atr if selected else dlg.check.atr)
        if item.tag != ":":
            _puts(win, "(X)" if item.tag == "X" else "( )")
        win.attrset(dlg.tag_selected.atr if selected else dlg.tag.atr)
        win.move(row, self.item_x)
        if text:
            _put(win, ord(text[0]))
        win.attrset(dlg.item_selected.atr if selected else dlg.item.atr)
        _puts(win, text[1:])
        if selected:
            win.move(row, self.check_x + 1)
            win.refresh()


def _print_arrows(
    win: Any, choice: int, item_no: int, scroll: int, y: int, x: int, height: int
) -> None:
    win.move(y, x)
    if scroll > 0:
        win.attrset(dlg.uarrow.atr)
        _put(win, acs("ACS_UARROW"))
        _puts(win, "(-)")
    else:
        win.attrset(dlg.menubox.atr)
        for _ in range(4):
            _put(win, acs("ACS_HLINE"))

    win.move(y + height + 1, x)
    if height < item_no and scroll + choice < item_no - 1:
        win.attrset(dlg.darrow.atr)
        _put(win, acs("ACS_DARROW"))
        _puts(win, "(+)")
    else:
        win.attrset(dlg.menubox_border.atr)
        for _ in range(4):
            _put(win, acs("ACS_HLINE"))


def _print_buttons(win: Any, height: int, width: int, selected: int) -> None:
    x = width // 2 - 11
    y = height - 2
    print_button(win, "Select", y, x, selected == 0)
    print_button(win, " Help ", y, x + 14, selected == 1)
    win.move(y, x + 1 + 14 * selected)
    win.refresh()


def dialog_checklist(
    stdscr: Any,
    items: Iterable[Item],
    title: str,
    prompt: str,
    height: int,
    width: int,
    list_height: int,
) -> int:
    """Let the user pick one item from a list.

    On confirmation the chosen item alone is marked selected and 0 (Select)
    or 1 (Help) is returned; KEY_ESC is returned if the dialog was left.
    Raises DisplayTooSmall if the screen cannot hold the box.
    """
    entries: List[Item] = list(items)
    count = len(entries)
    choice = initial_choice(entries)
    scroll = 0
    button = 0
    key = 0
    up_keys = (curses.KEY_UP, ord("-"))
    down_keys = (curses.KEY_DOWN, ord("+"))

    while True:
        lines, cols = stdscr.getmaxyx()
        if lines < height + 6 or cols < width + 6:
            raise DisplayTooSmall(f"screen is {lines}x{cols}, dialog needs {height + 6}x{width + 6}")

        max_choice = min(list_height, count)
        dialog, y, x = _open_frame(stdscr, title, prompt, height, width)

        list_width = width - 6
        box_y = height - list_height - 5
        box_x = (width - list_width) // 2 - 1
        lst = dialog.subwin(list_height, list_width, y + box_y + 1, x + box_x + 1)
        lst.keypad(True)
        draw_box(dialog, box_y, box_x, list_height + 2, list_width + 2,
                 dlg.menubox_border.atr, dlg.menubox.atr)

        check_x = min(max((len(e.text) + 4 for e in entries), default=0), list_width)
        check_x = (list_width - check_x) // 2
        view = _ListView(lst, list_width, check_x, check_x + 4)
        arrow_x = box_x + check_x + 5

        if choice >= list_height:
            scroll = choice - list_height + 1
            choice -= scroll

        for row in range(max_choice):
            view.draw(row, entries[scroll + row], row == choice)
        _print_arrows(dialog, choice, count, scroll, box_y, arrow_x, list_height)
        _print_buttons(dialog, height, width, 0)
        dialog.noutrefresh()
        lst.noutrefresh()
        curses.doupdate()

        while key != KEY_ESC:
            key = dialog.getch()
            wanted = _upper(key)
            i = next(
                (n for n in range(max_choice) if wanted == _first_code(entries[scroll + n].text)),
                max_choice,
            )

            if i < max_choice or key in up_keys or key in down_keys:
                if key in up_keys:
                    if choice == 0:
                        if scroll == 0:
                            continue
                        if list_height > 1:
                            view.draw(0, entries[scroll], False)
                            lst.scrollok(True)
                            lst.scroll(-1)
                            lst.scrollok(False)
                        scroll -= 1
                        view.draw(0, entries[scroll], True)
                        _print_arrows(dialog, choice, count, scroll, box_y, arrow_x, list_height)
                        dialog.noutrefresh()
                        lst.refresh()
                        continue
                    i = choice - 1
                elif key in down_keys:
                    if choice == max_choice - 1:
                        if scroll + choice >= count - 1:
                            continue
                        if list_height > 1:
                            view.draw(max_choice - 1, entries[scroll + max_choice - 1], False)
                            lst.scrollok(True)
                            lst.scroll(1)
                            lst.scrollok(False)
                        scroll += 1
                        view.draw(max_choice - 1, entries[scroll + max_choice - 1], True)
                        _print_arrows(dialog, choice, count, scroll, box_y, arrow_x, list_height)
                        dialog.noutrefresh()
                        lst.refresh()
                        continue
                    i = choice + 1
                if i != choice:
                    view.draw(choice, entries[scroll + choice], False)
                    choice = i
                    view.draw(choice, entries[scroll + choice], True)
                    dialog.noutrefresh()
                    lst.refresh()
                continue

            if key in (ord("H"), ord("h"), ord("?"), ord("S"), ord("s"), ord(" "), ord("\n")):
                if key in (ord("H"), ord("h"), ord("?")):
                    button = 1
                for entry in entries:
                    entry.selected = False
                entries[scroll + choice].selected = True
                return button
            if key in (TAB, curses.KEY_LEFT, curses.KEY_RIGHT):
                button = next_button(button, key, 2)
                _print_buttons(dialog, height, width, button)
                dialog.refresh()
            elif key in (ord("X"), ord("x")):
                key = KEY_ESC
            elif key == KEY_ESC:
                key = on_key_esc(dialog)
            elif key == curses.KEY_RESIZE:
                on_key_resize(stdscr)
                break
            curses.doupdate()
        else:
            # Left with ESC rather than a resize.
            return key