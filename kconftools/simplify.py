"""Simplification of dependency expressions: duplicate removal, common-term
extraction and comparison rewriting."""

from __future__ import annotations

from typing import Optional, Tuple

from .expr import (
    SYMBOL_MOD,
    SYMBOL_NO,
    SYMBOL_YES,
    Expr,
    ExprType,
    Symbol,
    SymbolFlag,
    SymbolType,
    and_expr,
    binary,
    comparison,
    copy_expr,
    eliminate_yn,
    expr_eq,
    is_no,
    is_yes,
    symbol_expr,
    transform,
    unary,
)

_LOGIC = (ExprType.AND, ExprType.OR)
_LEAF = (ExprType.EQUAL, ExprType.UNEQUAL, ExprType.SYMBOL, ExprType.NOT)
_COMPARE = (ExprType.EQUAL, ExprType.UNEQUAL)


def _pair(a: object, b: object, x: Symbol, y: Symbol) -> bool:
    """True if (a, b) is (x, y) in either order, by identity."""
    return (a is x and b is y) or (a is y and b is x)


def _join_symbols(e1: Expr, e2: Expr) -> Optional[Symbol]:
    """The symbol both leaf expressions test, or None if they cannot be joined."""
    if e1.type not in _LEAF or e2.type not in _LEAF:
        return None
    if e1.type is ExprType.NOT:
        inner = e1.left
        if inner.type not in (ExprType.EQUAL, ExprType.UNEQUAL, ExprType.SYMBOL):
            return None
        sym1 = inner.left
    else:
        sym1 = e1.left
    if e2.type is ExprType.NOT:
        if e2.left.type is not ExprType.SYMBOL:
            return None
        sym2 = e2.left.left
    else:
        sym2 = e2.left
    if sym1 is not sym2:
        return None
    if sym1.type not in (SymbolType.BOOLEAN, SymbolType.TRISTATE):
        return None
    return sym1


def _join_or(e1: Expr, e2: Expr) -> Optional[Expr]:
    """A single expression equivalent to e1 || e2, or None."""
    if expr_eq(e1, e2):
        return copy_expr(e1)
    sym = _join_symbols(e1, e2)
    if sym is None:
        return None
    both_equal = e1.type is ExprType.EQUAL and e2.type is ExprType.EQUAL
    if sym.type is SymbolType.TRISTATE and both_equal:
        r1, r2 = e1.right, e2.right
        if _pair(r1, r2, SYMBOL_YES, SYMBOL_MOD):
            return comparison(ExprType.UNEQUAL, sym, SYMBOL_NO)
        if _pair(r1, r2, SYMBOL_YES, SYMBOL_NO):
            return comparison(ExprType.UNEQUAL, sym, SYMBOL_MOD)
        if _pair(r1, r2, SYMBOL_MOD, SYMBOL_NO):
            return comparison(ExprType.UNEQUAL, sym, SYMBOL_YES)
    if sym.type is SymbolType.BOOLEAN:
        if (
            e1.type is ExprType.NOT
            and e1.left.type is ExprType.SYMBOL
            and e2.type is ExprType.SYMBOL
        ) or (
            e2.type is ExprType.NOT
            and e2.left.type is ExprType.SYMBOL
            and e1.type is ExprType.SYMBOL
        ):
            return symbol_expr(SYMBOL_YES)
    return None


def _symbol_with(e1: Expr, e2: Expr, type: ExprType, value: Symbol) -> bool:
    """One side is a bare symbol and the other a comparison of the given kind."""
    return (
        e1.type is ExprType.SYMBOL and e2.type is type and e2.right is value
    ) or (e2.type is ExprType.SYMBOL and e1.type is type and e1.right is value)


def _is_const(sym: Symbol) -> bool:
    return bool(sym.flags & SymbolFlag.CONST)


def _join_and(e1: Expr, e2: Expr) -> Optional[Expr]:
    """A single expression equivalent to e1 && e2, or None."""
    if expr_eq(e1, e2):
        return copy_expr(e1)
    sym = _join_symbols(e1, e2)
    if sym is None:
        return None

    if _symbol_with(e1, e2, ExprType.EQUAL, SYMBOL_YES):
        return comparison(ExprType.EQUAL, sym, SYMBOL_YES)
    if _symbol_with(e1, e2, ExprType.UNEQUAL, SYMBOL_NO):
        return symbol_expr(sym)
    if _symbol_with(e1, e2, ExprType.UNEQUAL, SYMBOL_MOD):
        return comparison(ExprType.EQUAL, sym, SYMBOL_YES)

    if sym.type is SymbolType.TRISTATE:
        for eq, ne in ((e1, e2), (e2, e1)):
            if eq.type is ExprType.EQUAL and ne.type is ExprType.UNEQUAL:
                value = eq.right
                if _is_const(ne.right) and _is_const(value):
                    if value is not ne.right:
                        return comparison(ExprType.EQUAL, sym, value)
                    return symbol_expr(SYMBOL_NO)
        if e1.type is ExprType.UNEQUAL and e2.type is ExprType.UNEQUAL:
            r1, r2 = e1.right, e2.right
            if _pair(r1, r2, SYMBOL_YES, SYMBOL_NO):
                return comparison(ExprType.EQUAL, sym, SYMBOL_MOD)
            if _pair(r1, r2, SYMBOL_YES, SYMBOL_MOD):
                return comparison(ExprType.EQUAL, sym, SYMBOL_NO)
            if _pair(r1, r2, SYMBOL_MOD, SYMBOL_NO):
                return comparison(ExprType.EQUAL, sym, SYMBOL_YES)
    return None


class _DupEliminator:
    """One pass of duplicate elimination, counting the rewrites it makes."""

    def __init__(self) -> None:
        self.count = 0

    def join_pass(self, type: ExprType, e1: Expr, e2: Expr) -> Tuple[Expr, Expr]:
        if e1.type == type:
            e1.left, e2 = self.join_pass(type, e1.left, e2)
            e1.right, e2 = self.join_pass(type, e1.right, e2)
            return e1, e2
        if e2.type == type:
            e1, e2.left = self.join_pass(type, e1, e2.left)
            e1, e2.right = self.join_pass(type, e1, e2.right)
            return e1, e2
        if e1 is e2:
            return e1, e2

        if e1.type in _LOGIC:
            e1, _ = self.join_pass(e1.type, e1, e1)

        if type is ExprType.OR:
            joined = _join_or(e1, e2)
            if joined is not None:
                self.count += 1
                return symbol_expr(SYMBOL_NO), joined
        elif type is ExprType.AND:
            joined = _join_and(e1, e2)
            if joined is not None:
                self.count += 1
                return symbol_expr(SYMBOL_YES), joined
        return e1, e2

    def complement_pass(
        self, type: ExprType, e1: Expr, e2: Expr
    ) -> Tuple[Expr, Expr]:
        if e1.type == type:
            e1.left, e2 = self.complement_pass(type, e1.left, e2)
            e1.right, e2 = self.complement_pass(type, e1.right, e2)
            return e1, e2
        if e2.type == type:
            e1, e2.left = self.complement_pass(type, e1, e2.left)
            e1, e2.right = self.complement_pass(type, e1, e2.right)
        if e1 is e2:
            return e1, e2

        if e1.type is ExprType.OR:
            e1, _ = self.complement_pass(e1.type, e1, e1)
            # (FOO || BAR) && (!FOO && !BAR) -> n
            negated = transform(unary(ExprType.NOT, copy_expr(e1)))
            _, negated, _ = extract_eq_and(negated, copy_expr(e2))
            if is_yes(negated):
                e1 = symbol_expr(SYMBOL_NO)
                self.count += 1
        elif e1.type is ExprType.AND:
            e1, _ = self.complement_pass(e1.type, e1, e1)
            # (FOO && BAR) || (!FOO || !BAR) -> y
            negated = transform(unary(ExprType.NOT, copy_expr(e1)))
            _, negated, _ = extract_eq_or(negated, copy_expr(e2))
            if is_no(negated):
                e1 = symbol_expr(SYMBOL_YES)
                self.count += 1
        return e1, e2


def eliminate_dups(e: Optional[Expr]) -> Optional[Expr]:
    """Merge redundant and complementary terms until nothing changes."""
    if e is None:
        return None
    while True:
        rewriter = _DupEliminator()
        if e.type in _LOGIC:
            e, _ = rewriter.join_pass(e.type, e, e)
            e, _ = rewriter.complement_pass(e.type, e, e)
        if not rewriter.count:
            break
        e = eliminate_yn(e)
    return e


def _extract_eq(
    type: ExprType, common: Optional[Expr], e1: Expr, e2: Expr
) -> Tuple[Optional[Expr], Expr, Expr]:
    if e1.type == type:
        common, e1.left, e2 = _extract_eq(type, common, e1.left, e2)
        common, e1.right, e2 = _extract_eq(type, common, e1.right, e2)
        return common, e1, e2
    if e2.type == type:
        common, e1, e2.left = _extract_eq(type, common, e1, e2.left)
        common, e1, e2.right = _extract_eq(type, common, e1, e2.right)
        return common, e1, e2
    if expr_eq(e1, e2):
        common = binary(type, common, e1) if common is not None else e1
        if type is ExprType.AND:
            return common, symbol_expr(SYMBOL_YES), symbol_expr(SYMBOL_YES)
        if type is ExprType.OR:
            return common, symbol_expr(SYMBOL_NO), symbol_expr(SYMBOL_NO)
    return common, e1, e2


def extract_eq(
    type: ExprType, e1: Expr, e2: Expr
) -> Tuple[Optional[Expr], Expr, Expr]:
    """Pull terms shared by e1 and e2 out of both.

    Returns (common, e1, e2); the shared terms are replaced by the neutral
    constant of the operator in the returned operands.
    """
    return _extract_eq(type, None, e1, e2)


def _extract_eq_reduced(
    type: ExprType, e1: Expr, e2: Expr
) -> Tuple[Optional[Expr], Expr, Expr]:
    common, e1, e2 = extract_eq(type, e1, e2)
    if common is not None:
        e1 = eliminate_yn(e1)
        e2 = eliminate_yn(e2)
    return common, e1, e2


def extract_eq_and(e1: Expr, e2: Expr) -> Tuple[Optional[Expr], Expr, Expr]:
    """Factor common && terms; returns (common, rest of e1, rest of e2)."""
    return _extract_eq_reduced(ExprType.AND, e1, e2)


def extract_eq_or(e1: Expr, e2: Expr) -> Tuple[Optional[Expr], Expr, Expr]:
    """Factor common || terms; returns (common, rest of e1, rest of e2)."""
    return _extract_eq_reduced(ExprType.OR, e1, e2)


def trans_compare(
    e: Optional[Expr], type: ExprType, sym: Symbol
) -> Optional[Expr]:
    """Rewrite the comparison (e = sym) or (e != sym) into an expression."""
    if e is None:
        result = symbol_expr(sym)
        if type is ExprType.UNEQUAL:
            result = unary(ExprType.NOT, result)
        return result

    if e.type in _LOGIC:
        left = trans_compare(e.left, ExprType.EQUAL, sym)
        right = trans_compare(e.right, ExprType.EQUAL, sym)
        same, swapped = (
            (ExprType.AND, ExprType.OR)
            if e.type is ExprType.AND
            else (ExprType.OR, ExprType.AND)
        )
        result = e
        if sym is SYMBOL_YES:
            result = binary(same, left, right)
        if sym is SYMBOL_NO:
            result = binary(swapped, left, right)
        if type is ExprType.UNEQUAL:
            result = unary(ExprType.NOT, result)
        return result

    if e.type is ExprType.NOT:
        flipped = ExprType.UNEQUAL if type is ExprType.EQUAL else ExprType.EQUAL
        return trans_compare(e.left, flipped, sym)

    if e.type in _COMPARE:
        if type is ExprType.EQUAL:
            if sym is SYMBOL_YES:
                return copy_expr(e)
            if sym is SYMBOL_MOD:
                return symbol_expr(SYMBOL_NO)
            if sym is SYMBOL_NO:
                return unary(ExprType.NOT, copy_expr(e))
        else:
            if sym is SYMBOL_YES:
                return unary(ExprType.NOT, copy_expr(e))
            if sym is SYMBOL_MOD:
                return symbol_expr(SYMBOL_YES)
            if sym is SYMBOL_NO:
                return copy_expr(e)
        return None

    if e.type is ExprType.SYMBOL:
        return comparison(type, e.left, sym)
    return None


def _leftmost_symbol(e: Optional[Expr]) -> Optional[Expr]:
    if e is None:
        return None
    while e.type is not ExprType.SYMBOL:
        if e.type in _COMPARE or not isinstance(e.left, Expr):
            raise ValueError(
                f"expression of type {e.type.name} has no leftmost symbol node"
            )
        e = e.left
    return copy_expr(e)


def simplify_unmet_dep(e1: Expr, e2: Optional[Expr]) -> Optional[Expr]:
    """The leftmost symbol of the largest part of e1 not implied by e2."""
    if e1.type is ExprType.OR:
        return and_expr(
            simplify_unmet_dep(e1.left, e2), simplify_unmet_dep(e1.right, e2)
        )
    if e1.type is ExprType.AND:
        merged = eliminate_dups(and_expr(copy_expr(e1), copy_expr(e2)))
        result = None if expr_eq(merged, e1) else e1
    else:
        result = e1
    return _leftmost_symbol(result)