"""Theory symbols and their translation into z3 expressions.

Each entry of :data:`OPERATORS` maps an SMT-LIB operator name to a
function from the context and the already translated arguments to a z3
expression. Indexed operators such as `(_ extract 7 0)` are listed in
:data:`INDEXED_OPERATORS` and additionally receive the indices.
"""

import functools
import operator

import z3

from .exceptions import EncodingException

def conjoin(ctx, exprs):
    """Smart conjunction over a sequence of expressions in the context `ctx`.

    Only introduces an `And` for sequences of at least two expressions.

    >>> ctx = z3.Context()
    >>> x, y = z3.Ints("x y", ctx)
    >>> conjoin(ctx, [x == y])
    x == y
    >>> conjoin(ctx, [x == y, x > y])
    And(x == y, x > y)
    >>> conjoin(ctx, [])
    True

    """
    exprs = list(exprs)
    if not exprs:
        return z3.BoolVal(True, ctx)
    elif len(exprs) == 1:
        return exprs[0]
    else:
        return z3.And(exprs)

def disjoin(ctx, exprs):
    exprs = list(exprs)
    if not exprs:
        return z3.BoolVal(False, ctx)
    elif len(exprs) == 1:
        return exprs[0]
    else:
        return z3.Or(exprs)

def _arity(name, args, n):
    if len(args) != n:
        fmt = 'Operator {} expects {} argument(s), got {}'
        raise EncodingException(fmt.format(name, n, len(args)))

def _unary(name, fn):
    def apply(ctx, args):
        _arity(name, args, 1)
        return fn(args[0])
    return apply

def _binary(name, fn):
    def apply(ctx, args):
        _arity(name, args, 2)
        return fn(args[0], args[1])
    return apply

def _left_assoc(name, fn):
    """Variadic operator folded from the left; collapses to the operand for one argument."""
    def apply(ctx, args):
        if not args:
            raise EncodingException('Operator {} expects at least one argument'.format(name))
        return functools.reduce(fn, args)
    return apply

def _chainable(name, fn):
    """`(op a b c)` means `(and (op a b) (op b c))`."""
    def apply(ctx, args):
        if len(args) < 2:
            raise EncodingException('Operator {} expects at least two arguments'.format(name))
        return conjoin(ctx, [fn(x, y) for x, y in zip(args, args[1:])])
    return apply

def _implies(ctx, args):
    if len(args) < 2:
        raise EncodingException('Operator => expects at least two arguments')
    # Right associative
    return functools.reduce(lambda acc, x: z3.Implies(x, acc), reversed(args[:-1]), args[-1])

def _minus(ctx, args):
    if len(args) == 1:
        return -args[0]
    return _left_assoc('-', operator.sub)(ctx, args)

def _to_real(x):
    return z3.ToReal(x) if z3.is_int(x) else x

def _real_div(ctx, args):
    """Real division; integer operands are converted to reals first."""
    if len(args) < 2:
        raise EncodingException('Operator / expects at least two arguments')
    return functools.reduce(operator.truediv, [_to_real(x) for x in args])

def _ite(ctx, args):
    _arity('ite', args, 3)
    return z3.If(args[0], args[1], args[2], ctx)

OPERATORS = {
    # Constants
    'true': lambda ctx, args: z3.BoolVal(True, ctx),
    'false': lambda ctx, args: z3.BoolVal(False, ctx),

    # Core
    'not': _unary('not', z3.Not),
    'and': lambda ctx, args: conjoin(ctx, args),
    'or': lambda ctx, args: disjoin(ctx, args),
    'xor': _left_assoc('xor', z3.Xor),
    '=>': _implies,
    '=': _chainable('=', operator.eq),
    'distinct': lambda ctx, args: z3.Distinct(*args),
    'ite': _ite,

    # Arithmetic
    '+': _left_assoc('+', operator.add),
    '-': _minus,
    '*': _left_assoc('*', operator.mul),
    'div': _left_assoc('div', operator.truediv),
    '/': _real_div,
    'mod': _binary('mod', operator.mod),
    'abs': _unary('abs', z3.Abs),
    '<': _chainable('<', operator.lt),
    '<=': _chainable('<=', operator.le),
    '>': _chainable('>', operator.gt),
    '>=': _chainable('>=', operator.ge),

    # Bit-vectors
    'bvnot': _unary('bvnot', operator.invert),
    'bvneg': _unary('bvneg', operator.neg),
    'bvand': _left_assoc('bvand', operator.and_),
    'bvor': _left_assoc('bvor', operator.or_),
    'bvxor': _left_assoc('bvxor', operator.xor),
    'bvadd': _left_assoc('bvadd', operator.add),
    'bvsub': _binary('bvsub', operator.sub),
    'bvmul': _left_assoc('bvmul', operator.mul),
    'bvudiv': _binary('bvudiv', z3.UDiv),
    'bvurem': _binary('bvurem', z3.URem),
    'bvsdiv': _binary('bvsdiv', operator.truediv),
    'bvsrem': _binary('bvsrem', z3.SRem),
    'bvshl': _binary('bvshl', operator.lshift),
    'bvlshr': _binary('bvlshr', z3.LShR),
    'bvashr': _binary('bvashr', operator.rshift),
    'bvult': _binary('bvult', z3.ULT),
    'bvule': _binary('bvule', z3.ULE),
    'bvugt': _binary('bvugt', z3.UGT),
    'bvuge': _binary('bvuge', z3.UGE),
    'bvslt': _binary('bvslt', operator.lt),
    'bvsle': _binary('bvsle', operator.le),
    'bvsgt': _binary('bvsgt', operator.gt),
    'bvsge': _binary('bvsge', operator.ge),
    'concat': lambda ctx, args: z3.Concat(*args),
}

def _extract(ctx, indices, args):
    _arity('extract', args, 1)
    hi, lo = indices
    return z3.Extract(hi, lo, args[0])

INDEXED_OPERATORS = {
    'extract': (2, _extract),
    'zero_extend': (1, lambda ctx, ixs, args: z3.ZeroExt(ixs[0], args[0])),
    'sign_extend': (1, lambda ctx, ixs, args: z3.SignExt(ixs[0], args[0])),
}

def is_operator(ident):
    if ident.indices:
        return ident.name in INDEXED_OPERATORS
    return ident.name in OPERATORS

def apply_operator(ctx, ident, args):
    """Apply the theory symbol named by the :class:`Identifier` `ident` to `args`."""
    if ident.indices:
        num_indices, fn = INDEXED_OPERATORS[ident.name]
        if len(ident.indices) != num_indices:
            fmt = 'Indexed operator {} expects {} index/indices, got {}'
            raise EncodingException(fmt.format(ident.name, num_indices, len(ident.indices)))
        return fn(ctx, ident.indices, args)
    return OPERATORS[ident.name](ctx, args)
