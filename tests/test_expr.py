import pytest

from kconftools.expr import (
    SYMBOL_MOD,
    SYMBOL_NO,
    SYMBOL_YES,
    Expr,
    ExprType,
    Symbol,
    SymbolType,
    Tristate,
    and_expr,
    binary,
    compare_type,
    comparison,
    contains_symbol,
    copy_expr,
    depends_symbol,
    eliminate_eq,
    eliminate_yn,
    expr_eq,
    format_expr,
    is_no,
    is_yes,
    iter_tokens,
    or_expr,
    symbol_expr,
    trans_bool,
    transform,
    unary,
)


@pytest.fixture
def syms():
    return (
        Symbol("A", SymbolType.BOOLEAN),
        Symbol("B", SymbolType.BOOLEAN),
        Symbol("C", SymbolType.TRISTATE),
    )


def test_tristate_ops():
    assert Tristate.YES.and_(Tristate.MOD) is Tristate.MOD
    assert Tristate.NO.or_(Tristate.MOD) is Tristate.MOD
    assert Tristate.NO.invert() is Tristate.YES
    assert Tristate.MOD.invert() is Tristate.MOD
    for a in Tristate:
        assert a.invert().invert() is a
        for b in Tristate:
            assert a.and_(b) == b.and_(a)
            assert a.or_(b) == b.or_(a)


def test_and_or_with_missing_side(syms):
    a, b, _ = syms
    ea, eb = symbol_expr(a), symbol_expr(b)
    assert and_expr(None, eb) is eb
    assert and_expr(ea, None) is ea
    assert or_expr(None, None) is None
    joined = or_expr(ea, eb)
    assert joined.type is ExprType.OR
    assert joined.left is ea and joined.right is eb


def test_copy_is_deep(syms):
    a, b, _ = syms
    e = binary(ExprType.AND, symbol_expr(a), unary(ExprType.NOT, symbol_expr(b)))
    c = copy_expr(e)
    assert c is not e and c.left is not e.left
    assert c.left.left is a
    assert expr_eq(c, e)


def test_copy_range_raises(syms):
    a, b, _ = syms
    with pytest.raises(ValueError):
        copy_expr(Expr(ExprType.RANGE, a, b))


def test_expr_eq_ignores_order(syms):
    a, b, c = syms
    ab = binary(ExprType.AND, symbol_expr(a), symbol_expr(b))
    ba = binary(ExprType.AND, symbol_expr(b), symbol_expr(a))
    ac = binary(ExprType.AND, symbol_expr(a), symbol_expr(c))
    assert expr_eq(ab, ba)
    assert not expr_eq(ab, ac)
    assert format_expr(ab) == format_expr(copy_expr(ab))


def test_eliminate_yn(syms):
    a, _, _ = syms
    e = binary(ExprType.AND, symbol_expr(a), symbol_expr(SYMBOL_NO))
    assert is_no(eliminate_yn(e))
    e = binary(ExprType.AND, symbol_expr(a), symbol_expr(SYMBOL_YES))
    r = eliminate_yn(e)
    assert r is e and r.type is ExprType.SYMBOL and r.left is a
    e = binary(ExprType.OR, symbol_expr(SYMBOL_YES), symbol_expr(a))
    assert is_yes(eliminate_yn(e))
    e = binary(ExprType.OR, symbol_expr(SYMBOL_NO), symbol_expr(a))
    assert eliminate_yn(e).left is a


def test_eliminate_eq_removes_common_terms(syms):
    a, b, c = syms
    e1 = binary(ExprType.AND, symbol_expr(a), symbol_expr(b))
    e2 = binary(ExprType.AND, symbol_expr(a), symbol_expr(c))
    r1, r2 = eliminate_eq(e1, e2)
    assert r1.type is ExprType.SYMBOL and r1.left is b
    assert r2.type is ExprType.SYMBOL and r2.left is c


def test_trans_bool(syms):
    a, _, c = syms
    e = trans_bool(comparison(ExprType.UNEQUAL, c, SYMBOL_NO))
    assert e.type is ExprType.SYMBOL and e.left is c and e.right is None
    e = trans_bool(comparison(ExprType.UNEQUAL, a, SYMBOL_NO))
    assert e.type is ExprType.UNEQUAL


def test_transform_boolean_comparisons(syms):
    a, _, _ = syms
    e = transform(comparison(ExprType.EQUAL, a, SYMBOL_NO))
    assert e.type is ExprType.NOT and e.left.left is a
    e = transform(comparison(ExprType.EQUAL, a, SYMBOL_YES))
    assert e.type is ExprType.SYMBOL and e.left is a
    e = transform(comparison(ExprType.UNEQUAL, a, SYMBOL_YES))
    assert e.type is ExprType.NOT
    assert is_no(transform(comparison(ExprType.EQUAL, a, SYMBOL_MOD)))
    assert is_yes(transform(comparison(ExprType.UNEQUAL, a, SYMBOL_MOD)))


def test_transform_negations(syms):
    a, b, c = syms
    e = transform(unary(ExprType.NOT, unary(ExprType.NOT, symbol_expr(a))))
    assert e.type is ExprType.SYMBOL and e.left is a
    e = transform(unary(ExprType.NOT, comparison(ExprType.EQUAL, c, SYMBOL_MOD)))
    assert e.type is ExprType.UNEQUAL and e.left is c
    e = transform(unary(ExprType.NOT, binary(ExprType.OR, symbol_expr(a), symbol_expr(b))))
    assert e.type is ExprType.AND
    assert e.left.type is ExprType.NOT and e.left.left.left is a
    assert e.right.type is ExprType.NOT and e.right.left.left is b
    assert is_no(transform(unary(ExprType.NOT, symbol_expr(SYMBOL_YES))))
    assert transform(unary(ExprType.NOT, symbol_expr(SYMBOL_MOD))).left is SYMBOL_MOD


def test_contains_and_depends(syms):
    a, b, c = syms
    e = binary(ExprType.OR, symbol_expr(a), comparison(ExprType.EQUAL, c, SYMBOL_MOD))
    assert contains_symbol(e, c)
    assert not contains_symbol(e, b)
    assert not depends_symbol(e, a)
    e = binary(ExprType.AND, symbol_expr(b), comparison(ExprType.EQUAL, c, SYMBOL_MOD))
    assert depends_symbol(e, b) and depends_symbol(e, c)
    assert not depends_symbol(comparison(ExprType.EQUAL, c, SYMBOL_NO), c)
    assert depends_symbol(comparison(ExprType.UNEQUAL, c, SYMBOL_NO), c)


def test_compare_type():
    assert compare_type(ExprType.AND, ExprType.AND) == 0
    assert compare_type(ExprType.AND, ExprType.OR) == 1
    assert compare_type(ExprType.OR, ExprType.AND) == -1
    assert compare_type(ExprType.EQUAL, ExprType.NONE) == 1
    assert compare_type(ExprType.SYMBOL, ExprType.AND) == -1


def test_is_yes_is_no():
    assert is_yes(None)
    assert not is_no(None)
    assert is_yes(symbol_expr(SYMBOL_YES))
    assert is_no(symbol_expr(SYMBOL_NO))


def test_tokens_parenthesise_inner_or(syms):
    a, b, _ = syms
    e = unary(ExprType.NOT, binary(ExprType.OR, symbol_expr(a), symbol_expr(b)))
    tokens = list(iter_tokens(e))
    assert tokens == [
        (None, "!"),
        (None, "("),
        (a, "A"),
        (None, " || "),
        (b, "B"),
        (None, ")"),
    ]
    assert format_expr(e) == "".join(t for _, t in tokens)


def test_tokens_special_cases(syms):
    _, _, c = syms
    assert list(iter_tokens(None)) == [(None, "y")]
    assert list(iter_tokens(symbol_expr(Symbol()))) == [(None, "<choice>")]
    tokens = list(iter_tokens(comparison(ExprType.UNEQUAL, c, SYMBOL_MOD)))
    assert tokens == [(c, "C"), (None, "!="), (SYMBOL_MOD, "m")]
    assert str(symbol_expr(c)) == "C"