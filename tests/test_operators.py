import pytest
import z3

from semhorn.config import EngineEnum
from semhorn.encoder import EncodingException, UnsupportedSortException
from semhorn.encoder import operators, sorts
from semhorn.parsers.representation import *
from semhorn.z3api import check, solver_context


def valid(ctx, formula):
    return check(ctx, [z3.Not(formula)], engine = EngineEnum.Smt) == 'unsat'


def test_sorts() -> None:
    with solver_context() as ctx:
        assert sorts.to_z3_sort(ctx, Identifier('Int')) == z3.IntSort(ctx)
        assert sorts.to_z3_sort(ctx, Identifier('Bool')) == z3.BoolSort(ctx)
        assert sorts.to_z3_sort(ctx, Identifier('BitVec', [16])) == z3.BitVecSort(16, ctx)
        with pytest.raises(UnsupportedSortException):
            sorts.to_z3_sort(ctx, Identifier('Seq'))
        with pytest.raises(UnsupportedSortException):
            sorts.to_z3_sort(ctx, Identifier('BitVec'))


def test_literals() -> None:
    with solver_context() as ctx:
        assert sorts.literal(ctx, NumberLiteral(3)).as_long() == 3
        assert sorts.literal(ctx, NumberLiteral(3), z3.BitVecSort(4, ctx)).size() == 4
        assert sorts.literal(ctx, BitVectorLiteral(8, 7)).size() == 8
        assert z3.is_true(sorts.literal(ctx, Application(Identifier('true'), Identifier('Bool'), ())))
        assert sorts.literal(ctx, Variable('x', Identifier('Int'))) is None
        with pytest.raises(EncodingException):
            sorts.expect_literal(ctx, Variable('x', Identifier('Int')))


def test_variadic_operators_collapse() -> None:
    with solver_context() as ctx:
        x = z3.Int('x', ctx)
        p = z3.Bool('p', ctx)
        for name, arg in [('+', x), ('*', x), ('and', p), ('or', p)]:
            assert operators.apply_operator(ctx, Identifier(name), [arg]).eq(arg)


def test_unary_minus_negates() -> None:
    with solver_context() as ctx:
        x = z3.Int('x', ctx)
        assert valid(ctx, operators.apply_operator(ctx, Identifier('-'), [x]) == 0 - x)
        assert valid(ctx, operators.apply_operator(ctx, Identifier('-'), [x, x, x]) == 0 - x)


def test_chainable_and_right_associative_operators() -> None:
    with solver_context() as ctx:
        a, b, c = z3.Ints('a b c', ctx)
        chain = operators.apply_operator(ctx, Identifier('<'), [a, b, c])
        assert valid(ctx, chain == z3.And(a < b, b < c))
        p, q, r = z3.Bools('p q r', ctx)
        implication = operators.apply_operator(ctx, Identifier('=>'), [p, q, r])
        assert valid(ctx, implication == z3.Implies(p, z3.Implies(q, r)))


def test_bitvector_operators() -> None:
    with solver_context() as ctx:
        x = z3.BitVecVal(0xf0, 8, ctx)
        low = operators.apply_operator(ctx, Identifier('extract', [3, 0]), [x])
        assert low.size() == 4
        assert z3.simplify(low).as_long() == 0
        wide = operators.apply_operator(ctx, Identifier('zero_extend', [8]), [x])
        assert wide.size() == 16
        shifted = operators.apply_operator(ctx, Identifier('bvlshr'), [x, z3.BitVecVal(4, 8, ctx)])
        assert z3.simplify(shifted).as_long() == 0x0f


def test_ite_and_true() -> None:
    with solver_context() as ctx:
        t = operators.apply_operator(ctx, Identifier('true'), [])
        one, two = z3.IntVal(1, ctx), z3.IntVal(2, ctx)
        ite = operators.apply_operator(ctx, Identifier('ite'), [t, one, two])
        assert z3.simplify(ite).as_long() == 1


def test_arity_errors() -> None:
    with solver_context() as ctx:
        x = z3.Int('x', ctx)
        with pytest.raises(EncodingException, match = 'expects 1 argument'):
            operators.apply_operator(ctx, Identifier('not'), [x, x])
        with pytest.raises(EncodingException, match = 'at least two arguments'):
            operators.apply_operator(ctx, Identifier('='), [x])
        with pytest.raises(EncodingException, match = 'index/indices'):
            operators.apply_operator(ctx, Identifier('extract', [3]), [x])


def test_conjoin_in_context() -> None:
    with solver_context() as ctx:
        assert z3.is_true(operators.conjoin(ctx, []))
        assert z3.is_false(operators.disjoin(ctx, []))
        assert operators.conjoin(ctx, []).ctx is ctx


def test_operator_lookup() -> None:
    assert operators.is_operator(Identifier('bvadd'))
    assert operators.is_operator(Identifier('extract', [7, 0]))
    assert not operators.is_operator(Identifier('E.Sem'))
    assert not operators.is_operator(Identifier('bvadd', [1]))


def test_division_of_integers_is_real() -> None:
    with solver_context() as ctx:
        three, two = z3.IntVal(3, ctx), z3.IntVal(2, ctx)
        quotient = operators.apply_operator(ctx, Identifier('/'), [three, two])
        assert quotient.sort() == z3.RealSort(ctx)
        assert valid(ctx, quotient == z3.RealVal('3/2', ctx))
        assert valid(ctx, operators.apply_operator(ctx, Identifier('div'), [three, two]) == 1)
        with pytest.raises(EncodingException, match = 'at least two arguments'):
            operators.apply_operator(ctx, Identifier('/'), [three])
