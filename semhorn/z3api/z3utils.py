"""Utility functions for interacting with z3 and :class:`z3.ExprRef`.

There is no global solver: every function that creates z3 objects takes
the :class:`z3.Context` they belong to, which callers obtain from
:func:`solver_context`.

.. testsetup::

   import z3
   from semhorn.z3api.z3utils import *

>>> with solver_context() as ctx:
...     check(ctx, [z3.Int('x', ctx) > 2], engine = config.EngineEnum.Smt)
'sat'

"""

import contextlib

import z3

from .. import config
from .. import consts
from ..utils import logger

###############################################################################
# Context & solver management
###############################################################################

@contextlib.contextmanager
def solver_context():
    """Create a fresh z3 context for the duration of the `with` block.

    Formulas built in the context must not be used after the block has
    been left; the native context is freed once the last reference to it
    is gone."""
    ctx = z3.Context()
    logger.debug('Acquired z3 context')
    try:
        yield ctx
    finally:
        logger.debug('Released z3 context')
        del ctx

def make_solver(ctx, engine = config.EngineEnum.Horn, timeout = None):
    """Create a solver in `ctx` for the given engine, optionally with a timeout (ms)."""
    if engine == config.EngineEnum.Horn:
        s = z3.SolverFor('HORN', ctx = ctx)
    else:
        s = z3.Solver(ctx = ctx)
    if timeout is not None:
        s.set('timeout', timeout)
    return s

def check(ctx, formulas, engine = config.EngineEnum.Horn, timeout = None):
    """Check the conjunction of `formulas`.

    Returns one of :data:`consts.SAT`, :data:`consts.UNSAT` and :data:`consts.UNKNOWN`."""
    s = make_solver(ctx, engine, timeout)
    for f in formulas:
        s.add(f)
    res = repr(s.check())
    if res == consts.UNKNOWN:
        logger.info('Solver returned unknown: {}'.format(s.reason_unknown()))
    return res

