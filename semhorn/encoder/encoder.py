"""Vectorized encoding of a SemGuS problem into Horn clauses.

Every function of the problem (typically one semantics function per
nonterminal, e.g. `E.Sem`) gets an *indicator*: a boolean predicate with
one argument per example. An indicator holds for a vector of values iff
some term of the grammar evaluates to these values on all examples
simultaneously. Each match case of a function body yields one Horn clause
defining the function's indicator; a final query states that the target
indicator never holds for the observed outputs.

Satisfiability of the resulting formulas therefore means that no term of
the grammar matches the examples (the problem is unrealizable), while
unsatisfiability means that the outputs are reachable.
"""

import z3

from .. import consts
from ..parsers.representation import *
from ..utils import logger, utils
from . import operators
from . import sorts
from .evaluation import TermEvaluator, VectorEnv, close_universally, fresh_vector
from .examples import ExampleTable
from .exceptions import EncodingException

class Encoding:
    """The formulas of an encoded problem along with their indicators.

    :param: indicators: mapping from function names to indicator declarations
    :param: axioms: mapping from function names to the Horn clauses of their match cases
    :param: query: the closing formula for the target function
    :param: examples: the :class:`ExampleTable` the encoding is based on
    :param: target: the name of the function under synthesis
    """

    def __init__(self, ctx, indicators, axioms, query, examples, target):
        self.ctx = ctx
        self.indicators = indicators
        self.axioms = axioms
        self.query = query
        self.examples = examples
        self.target = target

    @property
    def clauses(self):
        return [clause for clauses in self.axioms.values() for clause in clauses]

    @property
    def formulas(self):
        return self.clauses + [self.query]

    def to_z3_expr(self):
        return operators.conjoin(self.ctx, self.formulas)

    def __str__(self):
        lines = ['Encoding of {} on {} example(s)'.format(self.target, self.examples.num_examples)]
        for name, clauses in self.axioms.items():
            lines.append('  {}:'.format(name))
            for clause in clauses:
                lines.append(utils.indented(str(clause), 4))
        lines.append('  query:')
        lines.append(utils.indented(str(self.query), 4))
        return '\n'.join(lines)

class VectorEncoder:
    """Encodes the functions of a :class:`SemgusProblem` against an :class:`ExampleTable`."""

    def __init__(self, ctx, problem, examples):
        self.ctx = ctx
        self.problem = problem
        self.examples = examples
        self.n = examples.num_examples
        self.indicators = self.declare_indicators()
        self.evaluator = TermEvaluator(ctx, self.indicators, self.n)

    def functions(self):
        return self.problem.smt_context.functions.values()

    def result_sort(self, function):
        arg = function.result_arg()
        if arg is None:
            raise EncodingException('Function {} has no arguments'.format(function.name))
        return sorts.to_z3_sort(self.ctx, arg.sort)

    def declare_indicators(self):
        """One boolean predicate of arity N per function."""
        indicators = {}
        for f in self.functions():
            sort = self.result_sort(f)
            indicators[f.name] = z3.Function(f.name, *([sort] * self.n + [z3.BoolSort(self.ctx)]))
            logger.debug('Declared indicator {} over {}'.format(f.name, sort))
        return indicators

    def argument_vectors(self, function):
        """Bind every argument but the first to a vector.

        Returns the environment of the vectors and the list of fresh
        variables among them. Inputs that the examples fix are bound to the
        example columns, all other arguments to fresh variables."""
        args = function.arguments
        vectors = {}
        fresh = []
        for pos, arg in enumerate(args[1:], start = 1):
            column = None
            if pos < len(args) - 1:
                column = self.examples.input_column(pos - 1)
            if column is None:
                column = fresh_vector(arg.name, sorts.to_z3_sort(self.ctx, arg.sort), self.n)
                fresh.extend(column)
            vectors[arg.name] = column
        return VectorEnv(vectors), fresh

    def encode_function(self, function):
        """The Horn clauses defining the indicator of `function`, one per match case.

        Each clause has the shape `forall args, witnesses. premise => I(result)`."""
        if len(function.arguments) < 2:
            raise EncodingException('Function {} needs a term argument and a result argument'.format(function.name))
        if not isinstance(function.body, Match):
            raise EncodingException('Body of function {} is no match term'.format(function.name))
        env, fresh = self.argument_vectors(function)
        result = env[function.result_arg().name]
        try:
            head = self.indicators[function.name](*result)
        except z3.Z3Exception as e:
            raise EncodingException('Examples do not fit the result of {}: {}'.format(function.name, e)) from e

        clauses = []
        for case in function.body.cases:
            logger.debug('Encoding case {} of {}'.format(case.operator, function.name))
            witnesses, premise = self.evaluator.vectorize(case.result, env)
            clauses.append(close_universally(fresh + witnesses, z3.Implies(premise, head)))
        return clauses

    def target_function(self):
        """The function under synthesis.

        This is the function the examples apply or, without examples, the
        first function over terms of the target nonterminal's term type."""
        name = self.examples.operator
        if name is None:
            term_type = self.problem.target_nonterminal.term_type
            target = utils.find_first(lambda f: f.arguments and f.arguments[0].sort.name == term_type,
                                      self.functions())
            if target is None:
                raise EncodingException('No function over terms of type {}'.format(term_type))
            return target
        try:
            return self.problem.function(name)
        except KeyError:
            raise EncodingException('Examples apply unknown function {}'.format(name)) from None

    def closing_formula(self, function):
        """The query stating that `function` cannot produce the example outputs."""
        res = fresh_vector(consts.RESULT_VAR_PREFIX, self.result_sort(function), self.n)
        try:
            equalities = [r == out for r, out in zip(res, self.examples.results)]
            matched = operators.conjoin(self.ctx, equalities)
            return close_universally(res, z3.Implies(self.indicators[function.name](*res), z3.Not(matched)))
        except z3.Z3Exception as e:
            raise EncodingException('Example outputs do not fit the result of {}: {}'.format(function.name, e)) from e

    def encode(self):
        target = self.target_function()
        axioms = {}
        for f in self.functions():
            axioms[f.name] = self.encode_function(f)
        query = self.closing_formula(target)
        logger.info('Encoded {} function(s) on {} example(s), target {}'.format(
            len(axioms), self.n, target.name))
        return Encoding(self.ctx, self.indicators, axioms, query, self.examples, target.name)

def encode(ctx, problem, examples = None):
    """Encode `problem` in the z3 context `ctx`.

    :param: examples: the example rows (application terms); defaults to the constraints of the problem
    """
    if examples is None:
        examples = problem.constraints
    table = ExampleTable.from_rows(ctx, examples)
    return VectorEncoder(ctx, problem, table).encode()
