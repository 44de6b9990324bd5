"""Serialization of encodings as SMT-LIB2 scripts.

The scripts can be handed to any Horn clause solver that reads SMT-LIB2,
e.g. `z3 encoding.smt2`.
"""

import re

import z3

from .utils import logger

_SIMPLE_SYMBOL = re.compile(r'^[a-zA-Z~!@$%^&*_+=<>.?/-][a-zA-Z0-9~!@$%^&*_+=<>.?/-]*$')

###############################################################################
# Serialize Declarations
###############################################################################

def smt_symbol(name):
    """Quote `name` unless it is a simple SMT-LIB symbol.

    >>> smt_symbol('E.Sem'), smt_symbol('0_r')
    ('E.Sem', '|0_r|')

    """
    if _SIMPLE_SYMBOL.match(name):
        return name
    return '|{}|'.format(name)

def smt_sort_str(sort):
    assert isinstance(sort, z3.SortRef), \
        "Received {} of type {} != SortRef".format(sort, type(sort).__name__)
    return sort.sexpr()

def smt_list(ls):
    return '({})'.format(' '.join(ls))

def smt_fun_decl(f):
    assert isinstance(f, z3.FuncDeclRef), \
        "Received {} of type {} != FuncDeclRef".format(f, type(f).__name__)
    dom = smt_list([smt_sort_str(f.domain(i)) for i in range(0, f.arity())])
    rng = smt_sort_str(f.range())
    return '(declare-fun {} {} {})'.format(smt_symbol(f.name()), dom, rng)

###############################################################################
# Serialize Complete Encoding
###############################################################################

def serialize_encoding(encoding, logic = 'HORN'):
    """Return an SMT-LIB2 script asserting all formulas of `encoding`."""
    lines = []
    if logic:
        lines.append('(set-logic {})'.format(logic))
    lines.extend(smt_fun_decl(f) for f in encoding.indicators.values())
    for name, clauses in encoding.axioms.items():
        lines.append('; {}'.format(name))
        lines.extend('(assert {})'.format(clause.sexpr()) for clause in clauses)
    lines.append('; query for {}'.format(encoding.target))
    lines.append('(assert {})'.format(encoding.query.sexpr()))
    lines.append('(check-sat)')
    return '\n'.join(lines) + '\n'

def write_encoding_to_file(file, encoding, logic = 'HORN'):
    logger.info('Writing SMTLIB2 encoding to file {}'.format(file))
    with open(file, 'w') as f:
        f.write(serialize_encoding(encoding, logic))
