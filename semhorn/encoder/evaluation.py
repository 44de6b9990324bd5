"""Translation of SMT terms into z3 expressions over vectorized variables.

Every variable in scope is bound to a *vector*: one z3 expression per
example. A term is evaluated for one example index at a time, except for
applications of functions with an indicator, which always receive the
vector of their final argument across all examples.

Translated terms end up in the premise of a Horn clause. Existential
quantifiers in conjunctive positions are therefore lifted into the clause's
universal prefix; quantifiers anywhere else are rejected.
"""

import collections

import z3

from .. import consts
from ..parsers.representation import *
from . import operators
from . import sorts
from .exceptions import EncodingException, UnboundVariableException, UnknownOperatorException, UnsupportedSortException

class VectorEnv(collections.ChainMap):
    """Scoped mapping from variable names to per-example vectors of z3 expressions."""

    def bind(self, bindings):
        return self.new_child(dict(bindings))

    def lookup(self, name, index):
        try:
            return self[name][index]
        except KeyError:
            raise UnboundVariableException('Unbound variable {}'.format(name)) from None

def fresh_vector(name, sort, num_examples):
    """One z3 constant per example for the variable `name`."""
    return [z3.Const(consts.vector_var_name(i, name), sort)
            for i in range(num_examples)]

def witness_vector(name, sort, num_examples):
    """Like :func:`fresh_vector`, but the constants are distinct from all others in the context."""
    return [z3.FreshConst(sort, consts.vector_var_name(i, name))
            for i in range(num_examples)]

def close_universally(bound, body):
    """Universally quantify `body` over the constants in `bound`; no quantifier is introduced if `bound` is empty."""
    if not bound:
        return body
    return z3.ForAll(bound, body)

class TermEvaluator:
    """Evaluates terms against a fixed set of indicators and examples.

    :param: ctx: the :class:`z3.Context` all expressions are created in
    :param: indicators: mapping from function names to indicator declarations
    :param: num_examples: the number of examples, i.e. the length of every vector
    """

    def __init__(self, ctx, indicators, num_examples):
        self.ctx = ctx
        self.indicators = indicators
        self.n = num_examples

    ###########################################################################
    # Whole-vector evaluation
    ###########################################################################

    def vectorize(self, term, env):
        """Translate the boolean `term` into a premise that holds iff `term` holds for every example.

        Returns the pair of the witness constants of all existential
        quantifiers in conjunctive positions and the quantifier-free premise
        over them. Since `(exists w. B) => H` is `forall w. (B => H)`, the
        caller adds the witnesses to the universal prefix of its clause.
        Sharing one witness vector over all examples lets nested indicator
        calls receive it as a whole.

        :raises: EncodingException if `term` contains a universal quantifier
          in a conjunctive position
        """
        if isinstance(term, Quantifier):
            if term.kind != EXISTS:
                raise EncodingException('Universal quantifier in the premise of a Horn clause: {}'.format(term))
            witnesses, env = self._replicate(term.bindings, env)
            inner, premise = self.vectorize(term.child, env)
            return witnesses + inner, premise
        if isinstance(term, Application) and not term.name.indices:
            name = app_name(term)
            if name == 'and' and term.arguments:
                witnesses = []
                conjuncts = []
                for arg in term.arguments:
                    inner, premise = self.vectorize(arg.term, env)
                    witnesses.extend(inner)
                    conjuncts.append(premise)
                return witnesses, operators.conjoin(self.ctx, conjuncts)
            if name in self.indicators and name not in operators.OPERATORS:
                return [], self.call_indicator(term, env)
        return [], operators.conjoin(self.ctx, [self.evaluate(term, i, env)
                                                for i in range(self.n)])

    ###########################################################################
    # Per-example evaluation
    ###########################################################################

    def evaluate(self, term, index, env, sort_hint = None):
        """Translate `term` for the example with the given index."""
        if isinstance(term, Application):
            return self._application(term, index, env)
        elif isinstance(term, Variable):
            return env.lookup(term.name, index)
        elif isinstance(term, LITERAL_TYPES):
            return sorts.expect_literal(self.ctx, term, sort_hint)
        elif isinstance(term, Quantifier):
            # Only conjunctive positions can be lifted into the clause prefix
            raise EncodingException('Quantifier below a non-conjunctive operator: {}'.format(term))
        elif isinstance(term, (Match, Lambda)):
            raise EncodingException('No support for nested {} terms'.format(type(term).__name__.lower()))
        else:
            raise EncodingException('Unexpected term {}'.format(term))

    def _sort_hint(self, typed_term):
        if not isinstance(typed_term.term, LITERAL_TYPES):
            return None
        try:
            return sorts.to_z3_sort(self.ctx, typed_term.sort)
        except UnsupportedSortException:
            return None

    def _application(self, term, index, env):
        ident = term.name
        if operators.is_operator(ident):
            args = [self.evaluate(arg.term, index, env, self._sort_hint(arg))
                    for arg in term.arguments]
            try:
                return operators.apply_operator(self.ctx, ident, args)
            except z3.Z3Exception as e:
                raise EncodingException('Could not apply {}: {}'.format(ident, e)) from e
        if not ident.indices and ident.name in self.indicators:
            return self.call_indicator(term, env)
        raise UnknownOperatorException('Unknown operator {}'.format(ident))

    def call_indicator(self, term, env):
        """Apply the indicator of the called function to the vector of the call's final argument."""
        name = app_name(term)
        if not term.arguments:
            raise EncodingException('Call of {} without arguments'.format(name))
        result = term.arguments[-1]
        hint = self._sort_hint(result)
        vector = [self.evaluate(result.term, i, env, hint) for i in range(self.n)]
        try:
            return self.indicators[name](*vector)
        except z3.Z3Exception as e:
            raise EncodingException('Could not apply indicator of {}: {}'.format(name, e)) from e

    ###########################################################################
    # Quantifiers
    ###########################################################################

    def _replicate(self, bindings, env):
        """Replicate each bound variable once per example and extend `env` accordingly."""
        vectors = {}
        bound = []
        for var in bindings:
            vec = witness_vector(var.name, sorts.to_z3_sort(self.ctx, var.sort), self.n)
            vectors[var.name] = vec
            bound.extend(vec)
        return bound, env.bind(vectors)

