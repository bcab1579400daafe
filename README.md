# kconftools

Building blocks for Kconfig-style configuration tools: an algebra for
dependency expressions, a gettext template writer for menu prompts and
help texts, and curses dialog boxes in the style of a classic text-mode
configuration front end.

## Modules

- **`kconftools.expr`** – the expression model. `Tristate` (`NO`, `MOD`,
  `YES`, with `and_`, `or_` and `invert`), `Symbol` with `SymbolType` and
  `SymbolFlag`, and expression trees `Expr` of kind `ExprType`. The
  constant symbols are `SYMBOL_YES`, `SYMBOL_MOD` and `SYMBOL_NO`.
  Build expressions with `symbol_expr`, `unary`, `binary`, `comparison`,
  `and_expr` and `or_expr`, and copy them with `copy_expr`. Rewrite them
  with `eliminate_yn`, `eliminate_eq`, `trans_bool` and `transform`
  (these change the tree in place and return the result). Query them with
  `expr_eq`, `contains_symbol`, `depends_symbol`, `is_yes` and `is_no`.
  Print them with `format_expr` (or `str(expr)`), or walk the printed form
  piece by piece with `iter_tokens`; `compare_type` decides where
  parentheses go.
- **`kconftools.simplify`** – heavier rewrites: `eliminate_dups` merges
  redundant and complementary terms, `extract_eq`, `extract_eq_and` and
  `extract_eq_or` pull out terms two expressions share and return
  `(common, rest1, rest2)`, `trans_compare` turns `(e = sym)` or
  `(e != sym)` into a plain expression, and `simplify_unmet_dep` picks the
  leftmost symbol of the part of one expression not implied by another.
- **`kconftools.potfile`** – `escape` quotes text as a gettext string,
  and `MessageCatalog` collects `Message` entries and renders them as
  `.pot` text.
- **`kconftools.dialog`** – shared dialog support: colour themes
  (`DialogInfo`, `DialogColor`), the entry list (`Item`, `ItemList`),
  screen setup (`init_dialog`, `end_dialog`, `dialog_clear`), drawing
  helpers (`draw_box`, `draw_shadow`, `print_title`, `print_button`,
  `print_autowrap`, `attr_clear`), key handling (`on_key_esc`,
  `on_key_resize`), the layout helpers `first_alpha` and
  `autowrap_layout`, and the `DisplayTooSmall` exception.
- **`kconftools.yesno`** – `dialog_yesno`: returns 0 for Yes, 1 for No,
  or 27 (ESC) when left.
- **`kconftools.checklist`** – `dialog_checklist`: one item of a list is
  chosen and marked selected; returns 0 (Select), 1 (Help) or ESC.
- **`kconftools.inputbox`** – `dialog_inputbox`: returns
  `(result, text)` with result 0 (Ok), 1 (Help) or ESC; the editing logic
  is available on its own as `InputField`.
- **`kconftools.menubox`** – `dialog_menu`: returns `(result, scroll)`,
  the result being the button for Enter (0 Select, 1 Exit, 2 Help), 2 for
  `h`/`?`, 3 for `s`/`y`, 4 for `n`, 5 for `m`, 6 for space, 7 for `/`,
  8 for `z`, or ESC. `initial_view` and `hotkey_match` hold its
  positioning and hot-key rules.
- **`kconftools.textbox`** – `dialog_textbox`, a scrolling text viewer;
  its paging logic is `TextPager`.

Every dialog raises `DisplayTooSmall` when the terminal cannot hold it.

## Installation

```
pip install kconftools
```

Only the standard library is needed at run time. For the tests:

```
pip install "kconftools[test]"
pytest
```

## Working with expressions

```python
from kconftools.expr import (
    Symbol, SymbolType, ExprType, symbol_expr, unary, binary, transform, format_expr,
)

foo = Symbol("FOO", SymbolType.BOOLEAN)
bar = Symbol("BAR", SymbolType.BOOLEAN)
e = unary(ExprType.NOT, binary(ExprType.OR, symbol_expr(foo), symbol_expr(bar)))
print(format_expr(transform(e)))   # !FOO && !BAR
```

## Writing a message template

```python
from kconftools.potfile import MessageCatalog

catalog = MessageCatalog()
catalog.add("Enable networking", None, "Kconfig", 12)
catalog.add("Enable networking", None, "net/Kconfig", 3)
catalog.add("Say Y here to build\nthe network stack.\n", "NET", "Kconfig", 12)
print(catalog.render())
```

Identical messages are merged and list every place they were found, most
recent first; messages are listed newest first. Empty and one-character
messages are left out of the output.

## Dialog boxes

The widgets draw onto a curses screen, so they are run inside
`curses.wrapper`:

```python
import curses
from kconftools.dialog import init_dialog, end_dialog, DisplayTooSmall
from kconftools.yesno import dialog_yesno

def run(stdscr):
    init_dialog(stdscr, "Configuration")
    try:
        return dialog_yesno(stdscr, "Save", "Save the new configuration?", 6, 40)
    finally:
        end_dialog(stdscr, 0, 0)

try:
    answer = curses.wrapper(run)
except DisplayTooSmall:
    print("Terminal is too small for the dialog.")
```

`init_dialog` needs a screen of at least 19 rows by 80 columns. The colour
theme is taken from the `MENUCONFIG_COLOR` environment variable
(`classic`, `bluetitle`, `blackbg` or `mono`); `bluetitle` is the default.

## What it does not do

The package has no command-line program. It does not read Kconfig files,
calculate symbol values, or load and save configuration files, and it has
no complete menu-driven configuration screen: the dialogs are separate
widgets for an application to put together.