"""The top-level API for checking the realizability of SemGuS problems.

.. testsetup::

  from semhorn.api import *

Problems are given as JSON arrays of specification events, either as
strings or as files. They are first parsed into events and then collected
into a :class:`SemgusProblem`:

>>> events = parse_events('[{"$event": "declare-term-type", "name": "E"}]')
>>> events
[DeclareTermTypeEvent(name='E')]
>>> build_problem(events)
Traceback (most recent call last):
...
semhorn.problem.generator.ProblemException: No synthesis function has been set

Encoding and solving happen inside a z3 context:

>>> with solver_context() as ctx:                      # doctest: +SKIP
...     encoding = encode(ctx, load_problem('max2.sem.json'))
...     check(ctx, encoding)
'unsat'

or, in one go, :func:`is_realizable` returns True if the target can be
matched on the examples, False if it cannot and None if the solver gives
up.

"""

import io
import os

from . import config, consts
from . import encoder as encoder_module
from . import parsers
from . import problem as problem_module
from . import z3api
from .problem import grammar
from .utils import logger, utils
from .z3api import solver_context

class ApiException(utils.SemhornException):
    """Raised when the API is used in an unintended way."""

###############################################################################
# Parsing & problem construction
###############################################################################

def _read_file(path):
    with open(path, 'r') as f:
        return f.read()

def _read(input):
    """The JSON text of `input`: an open text file, a path, or a string holding
    either the name of an existing file or a JSON array."""
    if isinstance(input, io.TextIOBase):
        return input.read()
    elif isinstance(input, os.PathLike):
        return _read_file(input)
    elif isinstance(input, str):
        # Existing files take precedence, their names may start with '[' as well
        if os.path.isfile(input) or not input.lstrip().startswith('['):
            return _read_file(input)
        return input
    raise ApiException(utils.wrong_type(input))

def parse_events(input):
    """Parse the given JSON string or file into a list of specification events."""
    return parsers.parse(_read(input))

def parse_examples(input):
    """Parse the given JSON string or file into a list of example rows."""
    return parsers.parse_terms(_read(input))

def build_problem(events):
    """Collect `events` into a :class:`SemgusProblem`."""
    return problem_module.from_events(events)

def load_problem(input):
    """Parse and collect the problem in the given JSON string, file or path.

    :rtype: :class:`SemgusProblem`"""
    if isinstance(input, problem_module.SemgusProblem):
        return input
    return build_problem(parse_events(input))

def grammar_graph(input):
    """The dependency graph of the grammar of the given problem (see :mod:`semhorn.problem.grammar`)."""
    return grammar.problem_graph(load_problem(input))

###############################################################################
# Encoding & solving
###############################################################################

def encode(ctx, input, examples = None):
    """Encode the problem `input` in the z3 context `ctx`.

    :param: input: Filename, path, JSON string or :class:`SemgusProblem`
    :param: examples: Example rows; the constraints of the problem by default

    :rtype: :class:`semhorn.encoder.Encoding`"""
    if isinstance(examples, (str, os.PathLike)):
        examples = parse_examples(examples)
    return encoder_module.encode(ctx, load_problem(input), examples)

def check(ctx, encoding, engine = config.EngineEnum.Horn, timeout = config.DEFAULT_TIMEOUT_MS):
    """Check the formulas of `encoding`, returning 'sat', 'unsat' or 'unknown'."""
    if not isinstance(encoding, encoder_module.Encoding):
        raise ApiException(utils.wrong_type(encoding))
    return z3api.check(ctx, encoding.formulas, engine, timeout)

def is_realizable(input, examples = None, engine = config.EngineEnum.Horn, timeout = config.DEFAULT_TIMEOUT_MS):
    """Return True iff some term of the grammar matches all examples.

    Returns None if the solver could not decide the query."""
    with solver_context() as ctx:
        res = check(ctx, encode(ctx, input, examples), engine, timeout)
    if res == consts.UNSAT:
        return True
    elif res == consts.SAT:
        return False
    return None

###############################################################################
# Logging
###############################################################################

def verbose():
    logger.set_level(logger.INFO)

def vverbose():
    logger.set_level(logger.DEBUG)

def quiet():
    logger.set_level(logger.WARN)
