"""Configuration dependency expressions: construction, comparison and rewriting."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

log = logging.getLogger(__name__)


class Tristate(enum.IntEnum):
    """Three-valued logic used for configuration symbols."""

    NO = 0
    MOD = 1
    YES = 2

    def and_(self, other: "Tristate") -> "Tristate":
        """Logical and: the smaller of the two values."""
        return self if self < other else Tristate(other)

    def or_(self, other: "Tristate") -> "Tristate":
        """Logical or: the larger of the two values."""
        return self if self > other else Tristate(other)

    def invert(self) -> "Tristate":
        """Logical not: 'y' and 'n' swap, 'm' stays 'm'."""
        return Tristate(2 - self)


class ExprType(enum.IntEnum):
    NONE = 0
    OR = 1
    AND = 2
    NOT = 3
    EQUAL = 4
    UNEQUAL = 5
    LIST = 6
    SYMBOL = 7
    RANGE = 8


class SymbolType(enum.IntEnum):
    UNKNOWN = 0
    BOOLEAN = 1
    TRISTATE = 2
    INT = 3
    HEX = 4
    STRING = 5
    OTHER = 6


class SymbolFlag(enum.IntFlag):
    NONE = 0
    CONST = 0x0001
    CHECK = 0x0008
    CHOICE = 0x0010
    CHOICEVAL = 0x0020
    VALID = 0x0080
    OPTIONAL = 0x0100
    WRITE = 0x0200
    CHANGED = 0x0400
    AUTO = 0x1000
    CHECKED = 0x2000
    WARNED = 0x8000
    DEF_USER = 0x10000
    DEF_AUTO = 0x20000
    DEF3 = 0x40000
    DEF4 = 0x80000


@dataclass(eq=False)
class Symbol:
    """A configuration symbol. Symbols compare by identity."""

    name: Optional[str] = None
    type: SymbolType = SymbolType.UNKNOWN
    flags: SymbolFlag = SymbolFlag.NONE


SYMBOL_YES = Symbol("y", SymbolType.UNKNOWN, SymbolFlag.CONST | SymbolFlag.VALID)
SYMBOL_MOD = Symbol("m", SymbolType.UNKNOWN, SymbolFlag.CONST | SymbolFlag.VALID)
SYMBOL_NO = Symbol("n", SymbolType.UNKNOWN, SymbolFlag.CONST | SymbolFlag.VALID)

Operand = Union["Expr", Symbol, None]


@dataclass(eq=False)
class Expr:
    """An expression node; operands are sub-expressions or symbols depending on type."""

    type: ExprType
    left: Operand = None
    right: Operand = None

    def __str__(self) -> str:
        return format_expr(self)


_LOGIC = (ExprType.AND, ExprType.OR)


def symbol_expr(sym: Symbol) -> Expr:
    return Expr(ExprType.SYMBOL, sym)


def unary(type: ExprType, operand: Optional[Expr]) -> Expr:
    return Expr(type, operand)


def binary(type: ExprType, left: Optional[Expr], right: Optional[Expr]) -> Expr:
    return Expr(type, left, right)


def comparison(type: ExprType, left: Symbol, right: Symbol) -> Expr:
    return Expr(type, left, right)


def and_expr(left: Optional[Expr], right: Optional[Expr]) -> Optional[Expr]:
    """Join with && where both sides are present; a missing side is dropped."""
    if left is None:
        return right
    return binary(ExprType.AND, left, right) if right is not None else left


def or_expr(left: Optional[Expr], right: Optional[Expr]) -> Optional[Expr]:
    """Join with || where both sides are present; a missing side is dropped."""
    if left is None:
        return right
    return binary(ExprType.OR, left, right) if right is not None else left


def copy_expr(e: Optional[Expr]) -> Optional[Expr]:
    """Deep copy of the expression tree; symbols are shared."""
    if e is None:
        return None
    if e.type is ExprType.SYMBOL:
        return Expr(e.type, e.left)
    if e.type is ExprType.NOT:
        return Expr(e.type, copy_expr(e.left))
    if e.type in (ExprType.EQUAL, ExprType.UNEQUAL):
        return Expr(e.type, e.left, e.right)
    if e.type in _LOGIC:
        return Expr(e.type, copy_expr(e.left), copy_expr(e.right))
    if e.type is ExprType.LIST:
        return Expr(e.type, copy_expr(e.left), e.right)
    raise ValueError(f"can't copy type {int(e.type)}")


def _eliminate_eq(type: ExprType, e1: Expr, e2: Expr) -> Tuple[Expr, Expr]:
    if e1.type == type:
        e1.left, e2 = _eliminate_eq(type, e1.left, e2)
        e1.right, e2 = _eliminate_eq(type, e1.right, e2)
        return e1, e2
    if e2.type == type:
        e1, e2.left = _eliminate_eq(type, e1, e2.left)
        e1, e2.right = _eliminate_eq(type, e1, e2.right)
        return e1, e2
    if (
        e1.type is ExprType.SYMBOL
        and e2.type is ExprType.SYMBOL
        and e1.left is e2.left
        and (e1.left is SYMBOL_YES or e1.left is SYMBOL_NO)
    ):
        return e1, e2
    if not expr_eq(e1, e2):
        return e1, e2
    if type is ExprType.OR:
        return symbol_expr(SYMBOL_NO), symbol_expr(SYMBOL_NO)
    if type is ExprType.AND:
        return symbol_expr(SYMBOL_YES), symbol_expr(SYMBOL_YES)
    return e1, e2


def eliminate_eq(
    e1: Optional[Expr], e2: Optional[Expr]
) -> Tuple[Optional[Expr], Optional[Expr]]:
    """Remove terms common to both expressions and return the reduced pair."""
    if e1 is None or e2 is None:
        return e1, e2
    if e1.type in _LOGIC:
        e1, e2 = _eliminate_eq(e1.type, e1, e2)
    if e1.type != e2.type and e2.type in _LOGIC:
        e1, e2 = _eliminate_eq(e2.type, e1, e2)
    return eliminate_yn(e1), eliminate_yn(e2)


def expr_eq(e1: Expr, e2: Expr) -> bool:
    """Structural equality; && and || are compared regardless of operand order."""
    if e1.type != e2.type:
        return False
    if e1.type in (ExprType.EQUAL, ExprType.UNEQUAL):
        return e1.left is e2.left and e1.right is e2.right
    if e1.type is ExprType.SYMBOL:
        return e1.left is e2.left
    if e1.type is ExprType.NOT:
        return expr_eq(e1.left, e2.left)
    if e1.type in _LOGIC:
        c1, c2 = eliminate_eq(copy_expr(e1), copy_expr(e2))
        return (
            c1.type is ExprType.SYMBOL
            and c2.type is ExprType.SYMBOL
            and c1.left is c2.left
        )
    return False


def _become(e: Expr, other: Expr) -> Expr:
    e.type, e.left, e.right = other.type, other.left, other.right
    return e


def _become_symbol(e: Expr, sym: Symbol) -> Expr:
    e.type, e.left, e.right = ExprType.SYMBOL, sym, None
    return e


def _is_sym(e: Expr, sym: Symbol) -> bool:
    return e.type is ExprType.SYMBOL and e.left is sym


def eliminate_yn(e: Optional[Expr]) -> Optional[Expr]:
    """Fold constant 'y' and 'n' operands of && and || (in place)."""
    if e is None or e.type not in _LOGIC:
        return e
    e.left = eliminate_yn(e.left)
    e.right = eliminate_yn(e.right)
    # For &&, 'n' absorbs and 'y' is neutral; for || the roles swap.
    absorbing, neutral = (
        (SYMBOL_NO, SYMBOL_YES) if e.type is ExprType.AND else (SYMBOL_YES, SYMBOL_NO)
    )
    for this, other in ((e.left, e.right), (e.right, e.left)):
        if _is_sym(this, absorbing):
            return _become_symbol(e, absorbing)
        if _is_sym(this, neutral):
            return _become(e, other)
    return e


def trans_bool(e: Optional[Expr]) -> Optional[Expr]:
    """Rewrite tristate FOO!=n as FOO (in place)."""
    if e is None:
        return None
    if e.type in (ExprType.AND, ExprType.OR, ExprType.NOT):
        e.left = trans_bool(e.left)
        e.right = trans_bool(e.right)
    elif e.type is ExprType.UNEQUAL:
        if e.left.type is SymbolType.TRISTATE and e.right is SYMBOL_NO:
            e.type = ExprType.SYMBOL
            e.right = None
    return e


def transform(e: Optional[Expr]) -> Optional[Expr]:
    """Normalise comparisons of boolean symbols and push negations inward."""
    if e is None:
        return None
    if e.type in (ExprType.AND, ExprType.OR, ExprType.NOT):
        e.left = transform(e.left)
        e.right = transform(e.right)

    if e.type in (ExprType.EQUAL, ExprType.UNEQUAL):
        sym = e.left
        if sym.type is not SymbolType.BOOLEAN:
            return e
        equal = e.type is ExprType.EQUAL
        if e.right is SYMBOL_MOD:
            forced = SYMBOL_NO if equal else SYMBOL_YES
            log.warning(
                "boolean symbol %s tested for 'm'? test forced to '%s'",
                sym.name,
                forced.name,
            )
            return _become_symbol(e, forced)
        if e.right is (SYMBOL_NO if equal else SYMBOL_YES):
            e.type, e.left, e.right = ExprType.NOT, symbol_expr(sym), None
        elif e.right is (SYMBOL_YES if equal else SYMBOL_NO):
            e.type, e.right = ExprType.SYMBOL, None
        return e

    if e.type is ExprType.NOT:
        child = e.left
        if child.type is ExprType.NOT:
            return transform(child.left)
        if child.type in (ExprType.EQUAL, ExprType.UNEQUAL):
            child.type = (
                ExprType.UNEQUAL if child.type is ExprType.EQUAL else ExprType.EQUAL
            )
            return child
        if child.type in _LOGIC:
            # De Morgan: !(a || b) -> !a && !b, !(a && b) -> !a || !b
            e.type = ExprType.AND if child.type is ExprType.OR else ExprType.OR
            e.right = unary(ExprType.NOT, child.right)
            child.type = ExprType.NOT
            child.right = None
            return transform(e)
        if child.type is ExprType.SYMBOL:
            flipped = {SYMBOL_YES: SYMBOL_NO, SYMBOL_MOD: SYMBOL_MOD, SYMBOL_NO: SYMBOL_YES}
            for const, result in flipped.items():
                if child.left is const:
                    child.left = result
                    return child
    return e


def contains_symbol(e: Optional[Expr], sym: Symbol) -> bool:
    """True if the symbol appears anywhere in the expression."""
    if e is None:
        return False
    if e.type in _LOGIC:
        return contains_symbol(e.left, sym) or contains_symbol(e.right, sym)
    if e.type is ExprType.SYMBOL:
        return e.left is sym
    if e.type in (ExprType.EQUAL, ExprType.UNEQUAL):
        return e.left is sym or e.right is sym
    if e.type is ExprType.NOT:
        return contains_symbol(e.left, sym)
    return False


def depends_symbol(e: Optional[Expr], sym: Symbol) -> bool:
    """True if the expression can only hold when the symbol is not 'n'."""
    if e is None:
        return False
    if e.type is ExprType.AND:
        return depends_symbol(e.left, sym) or depends_symbol(e.right, sym)
    if e.type is ExprType.SYMBOL:
        return e.left is sym
    if e.type is ExprType.EQUAL:
        return e.left is sym and (e.right is SYMBOL_YES or e.right is SYMBOL_MOD)
    if e.type is ExprType.UNEQUAL:
        return e.left is sym and e.right is SYMBOL_NO
    return False


_PRECEDENCE_CHAIN = (
    ExprType.NOT,
    ExprType.AND,
    ExprType.OR,
    ExprType.LIST,
    ExprType.NONE,
)
_CHAIN_START = {
    ExprType.EQUAL: 0,
    ExprType.UNEQUAL: 0,
    ExprType.NOT: 1,
    ExprType.AND: 2,
    ExprType.OR: 3,
    ExprType.LIST: 4,
}


def compare_type(t1: ExprType, t2: ExprType) -> int:
    """1 if t1 binds tighter than t2 (so t2 needs parentheses), 0 if equal, else -1."""
    if t1 == t2:
        return 0
    start = _CHAIN_START.get(ExprType(t1))
    if start is None:
        return -1
    return 1 if t2 in _PRECEDENCE_CHAIN[start:] else -1


def is_yes(e: Optional[Expr]) -> bool:
    return e is None or _is_sym(e, SYMBOL_YES)


def is_no(e: Optional[Expr]) -> bool:
    return e is not None and _is_sym(e, SYMBOL_NO)


def _name_token(sym: Symbol) -> Tuple[Optional[Symbol], str]:
    if sym.name:
        return sym, sym.name
    return None, "<choice>"


def iter_tokens(
    e: Optional[Expr], prevtoken: ExprType = ExprType.NONE
) -> Iterator[Tuple[Optional[Symbol], str]]:
    """Yield (symbol or None, text) pieces that spell out the expression."""
    if e is None:
        yield None, "y"
        return
    paren = compare_type(prevtoken, e.type) > 0
    if paren:
        yield None, "("
    t = e.type
    if t is ExprType.SYMBOL:
        yield _name_token(e.left)
    elif t is ExprType.NOT:
        yield None, "!"
        yield from iter_tokens(e.left, ExprType.NOT)
    elif t in (ExprType.EQUAL, ExprType.UNEQUAL):
        yield _name_token(e.left)
        yield None, "=" if t is ExprType.EQUAL else "!="
        yield e.right, e.right.name
    elif t in _LOGIC:
        yield from iter_tokens(e.left, t)
        yield None, " || " if t is ExprType.OR else " && "
        yield from iter_tokens(e.right, t)
    elif t is ExprType.LIST:
        yield e.right, e.right.name
        if e.left is not None:
            yield None, " ^ "
            yield from iter_tokens(e.left, ExprType.LIST)
    elif t is ExprType.RANGE:
        yield None, "["
        yield e.left, e.left.name
        yield None, " "
        yield e.right, e.right.name
        yield None, "]"
    else:
        yield None, f"<unknown type {int(t)}>"
    if paren:
        yield None, ")"


def format_expr(e: Optional[Expr]) -> str:
    """Render the expression as text."""
    return "".join(text for _, text in iter_tokens(e))