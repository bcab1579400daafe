"""A menu dialog for choosing one entry from a scrolling list."""

from __future__ import annotations

import curses
from dataclasses import dataclass
from itertools import chain
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from .dialog import (
    KEY_ESC,
    TAB,
    DisplayTooSmall,
    Item,
    acs,
    dlg,
    draw_box,
    first_alpha,
    on_key_esc,
    on_key_resize,
    print_button,
)
from .yesno import _open_frame, _put, _puts, next_button

_EXEMPT = "YyNnMmHh"

# Keys that close the menu, with the result each one gives.
_ACTION_KEYS = {
    ord("h"): 2,
    ord("?"): 2,
    ord("s"): 3,
    ord("y"): 3,
    ord("n"): 4,
    ord("m"): 5,
    ord(" "): 6,
    ord("/"): 7,
    ord("z"): 8,
}


def _lower(key: int) -> int:
    return key + 32 if ord("A") <= key <= ord("Z") else key


def _hotkey_code(text: str) -> int:
    if not text:
        return 0
    return ord(text[first_alpha(text, _EXEMPT)].lower())


def initial_view(
    choice: int, saved_scroll: int, max_choice: int, item_count: int
) -> Tuple[int, int]:
    """The first visible item and the highlighted row for an item index.

    A saved scroll position is kept if it still shows the chosen item;
    otherwise the item is brought into view, centred where possible.
    Returns (scroll, row).
    """
    scroll = saved_scroll
    if (
        scroll <= choice
        and scroll + max_choice > choice
        and scroll >= 0
        and scroll + max_choice <= item_count
    ):
        choice -= scroll
    else:
        scroll = 0
    if choice >= max_choice:
        if choice >= item_count - max_choice // 2:
            scroll = item_count - max_choice
        else:
            scroll = choice - max_choice // 2
        choice -= scroll
    return scroll, choice


def hotkey_match(
    items: Sequence[Item], key: int, choice: int, scroll: int, max_choice: int
) -> int:
    """The visible row whose hot key is key, searching after the current row first.

    Returns max_choice if nothing matches or if key is one of the action
    letters y, n, m and h.
    """
    key = _lower(key)
    if 0 < key < 256 and chr(key) in "ynmh":
        return max_choice
    for row in chain(range(choice + 1, max_choice), range(max_choice)):
        if key == _hotkey_code(items[scroll + row].text):
            return row
    return max_choice


@dataclass
class _MenuView:
    win: Any
    menu_width: int
    item_x: int

    def draw(self, row: int, item: Item, selected: bool) -> None:
        win = self.win
        text = item.text[: max(self.menu_width - self.item_x, 0)]
        j = first_alpha(text, _EXEMPT)
        win.attrset(dlg.menubox.atr)
        win.move(row, 0)
        win.clrtoeol()
        win.attrset(dlg.item_selected.atr if selected else dlg.item.atr)
        win.move(row, self.item_x)
        _puts(win, text)
        if item.tag != ":" and text:
            win.attrset(dlg.tag_key_selected.atr if selected else dlg.tag_key.atr)
            win.move(row, self.item_x + j)
            _put(win, ord(text[j]))
        if selected:
            win.move(row, self.item_x + 1)
        win.refresh()


def _print_arrows(win: Any, item_no: int, scroll: int, y: int, x: int, height: int) -> None:
    cur_y, cur_x = win.getyx()
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
    win.refresh()
    if height < item_no and scroll + height < item_no:
        win.attrset(dlg.darrow.atr)
        _put(win, acs("ACS_DARROW"))
        _puts(win, "(+)")
    else:
        win.attrset(dlg.menubox_border.atr)
        for _ in range(4):
            _put(win, acs("ACS_HLINE"))
    win.move(cur_y, cur_x)
    win.refresh()


def _print_buttons(win: Any, height: int, width: int, selected: int) -> None:
    x = width // 2 - 16
    y = height - 2
    print_button(win, "Select", y, x, selected == 0)
    print_button(win, " Exit ", y, x + 12, selected == 1)
    print_button(win, " Help ", y, x + 24, selected == 2)
    win.move(y, x + 1 + 12 * selected)
    win.refresh()


def _do_scroll(win: Any, scroll: int, n: int) -> int:
    win.scrollok(True)
    win.scroll(n)
    win.scrollok(False)
    win.refresh()
    return scroll + n


def dialog_menu(
    stdscr: Any,
    items: Iterable[Item],
    title: str,
    prompt: str,
    selected: Any,
    saved_scroll: int,
) -> Tuple[int, int]:
    """Show a menu and wait for the user to act on an entry.

    The entry whose data equals `selected` is highlighted first. Returns
    (result, scroll): result is the button (0 Select, 1 Exit, 2 Help) for
    Enter, 2 for h/?, 3 for s/y, 4 for n, 5 for m, 6 for space, 7 for /,
    8 for z, or KEY_ESC when the menu was left. The acted-on entry is
    marked selected. Raises DisplayTooSmall below 15x65.
    """
    entries: List[Item] = list(items)
    count = len(entries)
    key = 0
    button = 0
    choice = 0
    up_keys = (curses.KEY_UP, ord("-"))
    down_keys = (curses.KEY_DOWN, ord("+"))
    move_keys = up_keys + down_keys + (curses.KEY_PPAGE, curses.KEY_NPAGE)

    while True:
        lines, cols = stdscr.getmaxyx()
        if lines < 15 or cols < 65:
            raise DisplayTooSmall(f"screen is {lines}x{cols}, need at least 15x65")
        height, width = lines - 4, cols - 5
        menu_height = height - 10
        max_choice = min(menu_height, count)

        dialog, y, x = _open_frame(stdscr, title, prompt, height, width)
        dialog.bkgdset(" ", dlg.dialog.atr & curses.A_COLOR)

        menu_width = width - 6
        box_y = height - menu_height - 5
        box_x = (width - menu_width) // 2 - 1
        menu = dialog.subwin(menu_height, menu_width, y + box_y + 1, x + box_x + 1)
        menu.keypad(True)
        draw_box(dialog, box_y, box_x, menu_height + 2, menu_width + 2,
                 dlg.menubox_border.atr, dlg.menubox.atr)

        item_x = (menu_width - 70) // 2 if menu_width >= 80 else 4
        view = _MenuView(menu, menu_width, item_x)
        arrow_x = box_x + item_x + 1

        def show(index: int, row: int, highlight: bool) -> None:
            if 0 <= index < count:
                view.draw(row, entries[index], highlight)

        for index, entry in enumerate(entries):
            if selected is not None and entry.data == selected:
                choice = index
        scroll, choice = initial_view(choice, saved_scroll, max_choice, count)

        for row in range(max_choice):
            show(scroll + row, row, row == choice)
        menu.noutrefresh()
        _print_arrows(dialog, count, scroll, box_y, arrow_x, menu_height)
        _print_buttons(dialog, height, width, 0)
        menu.move(choice, item_x + 1)
        menu.refresh()

        while key != KEY_ESC:
            key = _lower(menu.getch())
            i = hotkey_match(entries, key, choice, scroll, max_choice)

            if i < max_choice or key in move_keys:
                show(scroll + choice, choice, False)
                if key in up_keys:
                    if choice < 2 and scroll:
                        scroll = _do_scroll(menu, scroll, -1)
                        show(scroll, 0, False)
                    else:
                        choice = max(choice - 1, 0)
                elif key in down_keys:
                    show(scroll + choice, choice, False)
                    if choice > max_choice - 3 and scroll + max_choice < count:
                        scroll = _do_scroll(menu, scroll, 1)
                        show(scroll + max_choice - 1, max_choice - 1, False)
                    else:
                        choice = min(choice + 1, max_choice - 1)
                elif key == curses.KEY_PPAGE:
                    menu.scrollok(True)
                    for _ in range(max_choice):
                        if scroll > 0:
                            scroll = _do_scroll(menu, scroll, -1)
                            show(scroll, 0, False)
                        elif choice > 0:
                            choice -= 1
                elif key == curses.KEY_NPAGE:
                    for _ in range(max_choice):
                        if scroll + max_choice < count:
                            scroll = _do_scroll(menu, scroll, 1)
                            show(scroll + max_choice - 1, max_choice - 1, False)
                        elif choice + 1 < max_choice:
                            choice += 1
                else:
                    choice = i
                show(scroll + choice, choice, True)
                _print_arrows(dialog, count, scroll, box_y, arrow_x, menu_height)
                dialog.noutrefresh()
                menu.refresh()
                continue

            if key in (curses.KEY_LEFT, TAB, curses.KEY_RIGHT):
                button = next_button(button, key, 3)
                _print_buttons(dialog, height, width, button)
                menu.refresh()
            elif key in _ACTION_KEYS or key == ord("\n"):
                if 0 <= scroll + choice < count:
                    entries[scroll + choice].selected = True
                if key == ord("\n"):
                    return button, scroll
                return _ACTION_KEYS[key], scroll
            elif key in (ord("e"), ord("x")):
                key = KEY_ESC
            elif key == KEY_ESC:
                key = on_key_esc(menu)
            elif key == curses.KEY_RESIZE:
                on_key_resize(stdscr)
                break
        else:
            return key, saved_scroll