"""Translation of sort identifiers into z3 sorts and literals."""

import z3

from .. import consts
from ..parsers.representation import *
from .exceptions import EncodingException, UnsupportedSortException

def _indexed_sort(ident, arity):
    if len(ident.indices) != arity:
        fmt = 'Sort {} expects {} index/indices, got {}'
        raise UnsupportedSortException(fmt.format(ident.name, arity, len(ident.indices)))

def to_z3_sort(ctx, ident):
    """Return the z3 sort for the given :class:`Identifier`.

    Supports `Int`, `Bool`, `Real`, `String` and `(_ BitVec n)`."""
    assert isinstance(ident, Identifier), 'Expected Identifier, got {}'.format(ident)
    name = ident.name
    if name == consts.BITVEC_SORT:
        _indexed_sort(ident, 1)
        width = ident.indices[0]
        if not isinstance(width, int) or width <= 0:
            raise UnsupportedSortException('Invalid bit-vector width {}'.format(width))
        return z3.BitVecSort(width, ctx)
    _indexed_sort(ident, 0)
    if name == consts.INT_SORT:
        return z3.IntSort(ctx)
    elif name == consts.BOOL_SORT:
        return z3.BoolSort(ctx)
    elif name == consts.REAL_SORT:
        return z3.RealSort(ctx)
    elif name == consts.STRING_SORT:
        return z3.StringSort(ctx)
    raise UnsupportedSortException('Unsupported sort {}'.format(ident))

def literal(ctx, term, sort = None):
    """Materialize a literal term as a z3 value.

    Number literals take the given sort if it is a real or bit-vector sort,
    and are integers otherwise. Returns None if `term` is no literal."""
    if isinstance(term, NumberLiteral):
        if sort is not None and z3.is_bv_sort(sort):
            return z3.BitVecVal(term.value, sort.size(), ctx)
        if sort is not None and sort == z3.RealSort(ctx):
            return z3.RealVal(term.value, ctx)
        return z3.IntVal(term.value, ctx)
    elif isinstance(term, DecimalLiteral):
        return z3.RealVal(term.value, ctx)
    elif isinstance(term, BitVectorLiteral):
        return z3.BitVecVal(term.value, term.size, ctx)
    elif isinstance(term, StringLiteral):
        return z3.StringVal(term.value, ctx)
    elif isinstance(term, Application) and not term.arguments:
        name = app_name(term)
        if name == 'true':
            return z3.BoolVal(True, ctx)
        elif name == 'false':
            return z3.BoolVal(False, ctx)
    elif isinstance(term, Application) and app_name(term) == '-' and len(term.arguments) == 1:
        inner = term.arguments[0].term
        if isinstance(inner, (NumberLiteral, DecimalLiteral)) and not (sort is not None and z3.is_bv_sort(sort)):
            return literal(ctx, inner._replace(value = -inner.value), sort)
    return None

def expect_literal(ctx, term, sort = None):
    res = literal(ctx, term, sort)
    if res is None:
        raise EncodingException('Expected a literal, got {}'.format(term))
    return res
