"""Collects a stream of specification events into a :class:`SemgusProblem`.

.. testsetup::

   from semhorn.problem.generator import *

The generator is fed one event at a time and finalized once:

>>> gen = ProblemGenerator()
>>> gen.consume(DeclareTermTypeEvent('E'))
>>> gen.consume(DeclareTermTypeEvent('E'))
Traceback (most recent call last):
...
semhorn.problem.generator.ProblemException: Duplicate term type declaration: E

"""

from types import MappingProxyType

from ..parsers import eventparser
from ..parsers.representation import *
from ..utils import logger, utils
from . import grammar
from .model import *

class ProblemException(utils.SemhornException):
    """Raised when the events do not describe a consistent SemGuS problem."""

def from_events(events):
    """Fold all events into a fresh generator and return the finished problem."""
    gen = ProblemGenerator()
    for event in events:
        gen.consume(event)
    return gen.finish()

def parse(json_text):
    """Parse a JSON array of events and collect it into a problem."""
    return from_events(eventparser.parse(json_text))

def parse_file(fp):
    return from_events(eventparser.parse_file(fp))

class _TermType:
    """A collected term type, owning its constructors."""

    def __init__(self, name):
        self.name = name
        self.constructors = {}

class _TermConstructor:
    """A collected term constructor and the semantic rules attached to it so far."""

    def __init__(self, name, child_term_types):
        self.name = name
        self.child_term_types = child_term_types
        self.semantic_rules = []

class ProblemGenerator:
    """Single-pass builder for :class:`SemgusProblem`.

    All state is private to the generator; :meth:`finish` hands out an
    immutable snapshot, after which the generator can no longer be used."""

    def __init__(self):
        self._metadata = {}
        self._datatypes = {}
        self._functions = {}
        self._term_types = {}
        self._constraints = []
        self._synth_fun = None
        self._finished = False
        self._consumers = {
            SetInfoEvent: self._consume_set_info,
            DefineFunctionEvent: self._consume_define_function,
            DefineDatatypeEvent: self._consume_define_datatype,
            DeclareTermTypeEvent: self._consume_declare_term_type,
            DefineTermTypeEvent: self._consume_define_term_type,
            HornClauseEvent: self._consume_horn_clause,
            ConstraintEvent: self._consume_constraint,
            SynthFunEvent: self._consume_synth_fun,
            # No model data in these
            StreamEndEvent: self._ignore,
            DeclareFunctionEvent: self._ignore,
            DeclareDatatypeEvent: self._ignore,
            CheckSynthEvent: self._ignore,
        }

    def _ensure_active(self):
        if self._finished:
            raise utils.IllegalBuilderState('Problem generator has already been finished')

    def consume(self, event):
        """Collect the data carried by `event` into the generator's state."""
        self._ensure_active()
        try:
            consumer = self._consumers[type(event)]
        except KeyError:
            raise ProblemException(utils.wrong_type(event)) from None
        consumer(event)

    def _ignore(self, event):
        logger.debug('Skipping {}'.format(type(event).__name__))

    def _consume_set_info(self, event):
        self._metadata[event.keyword] = event.value

    def _consume_define_function(self, event):
        if event.name in self._functions:
            logger.warn('Redefinition of function {}'.format(event.name))
        self._functions[event.name] = Function(event.name, event.arguments, event.body)

    def _consume_define_datatype(self, event):
        if event.name in self._datatypes:
            logger.warn('Redefinition of datatype {}'.format(event.name))
        constructors = MappingProxyType({
            c.name: DatatypeConstructor(c.name, c.argument_sorts)
            for c in event.constructors
        })
        self._datatypes[event.name] = Datatype(event.name, constructors)

    def _consume_declare_term_type(self, event):
        if event.name in self._term_types:
            raise ProblemException('Duplicate term type declaration: {}'.format(event.name))
        self._term_types[event.name] = _TermType(event.name)

    def _consume_define_term_type(self, event):
        term_type = self._term_types.get(event.name)
        if term_type is None:
            raise ProblemException('Undeclared term type for definition: {}'.format(event.name))
        for constructor in event.constructors:
            if constructor.name in term_type.constructors:
                fmt = 'Duplicate term constructor {} in term type {}'
                raise ProblemException(fmt.format(constructor.name, event.name))
            for child in constructor.children:
                if child not in self._term_types:
                    raise ProblemException('Undeclared term type for constructor child: {}'.format(child))
            term_type.constructors[constructor.name] = _TermConstructor(
                constructor.name, tuple(constructor.children))

    def _consume_horn_clause(self, event):
        ctor = event.constructor
        term_type = self._term_types.get(ctor.return_sort)
        if term_type is None:
            raise ProblemException('Unknown term type: {}'.format(ctor.return_sort))
        term_ctor = term_type.constructors.get(ctor.name)
        if term_ctor is None:
            fmt = 'Unknown term constructor {} in term type {}'
            raise ProblemException(fmt.format(ctor.name, ctor.return_sort))
        term_ctor.semantic_rules.append(SemanticRule(
            ctor.arguments,
            event.head,
            event.body_relations,
            event.constraint,
            event.variables))

    def _consume_constraint(self, event):
        self._constraints.append(event.constraint)

    def _consume_synth_fun(self, event):
        if self._synth_fun is not None:
            raise ProblemException('Synthesis function already set: {}'.format(self._synth_fun.name))
        self._synth_fun = event

    ###########################################################################
    # Finalization
    ###########################################################################

    def _constructor_for(self, nonterminal, operator):
        term_type = self._term_types[nonterminal.term_type]
        try:
            return term_type.constructors[operator]
        except KeyError:
            fmt = 'Production {} of nonterminal {} has no constructor in term type {}'
            raise ProblemException(fmt.format(operator, nonterminal.name, term_type.name)) from None

    def _materialize_grammar(self):
        synth_fun = self._synth_fun

        # All nonterminals first, so that productions can refer to any of them
        nonterminals = {}
        production_maps = {}
        for name, entry in synth_fun.grammar.items():
            if entry.term_type not in self._term_types:
                fmt = 'Undeclared term type {} for nonterminal {}'
                raise ProblemException(fmt.format(entry.term_type, name))
            production_maps[name] = {}
            nonterminals[name] = SemgusNonTerminal(name, entry.term_type, production_maps[name])

        for name, entry in synth_fun.grammar.items():
            for operator, production in entry.productions.items():
                term_ctor = self._constructor_for(entry, operator)
                children = []
                for child in production.occurrences:
                    if child not in nonterminals:
                        raise ProblemException('Unknown nonterminal {} referenced in production {}'.format(child, operator))
                    children.append(nonterminals[child])
                child_types = tuple(c.term_type for c in children)
                if child_types != term_ctor.child_term_types:
                    fmt = 'Children {} of production {} do not match constructor signature {}'
                    raise ProblemException(fmt.format(list(production.occurrences), operator,
                                                      list(term_ctor.child_term_types)))
                production_maps[name][operator] = SemgusProduction(
                    operator, tuple(children), tuple(term_ctor.semantic_rules))
        return nonterminals

    def _target(self, nonterminals):
        term_type = self._synth_fun.term_type
        target = utils.find_first(lambda n: n.term_type == term_type, nonterminals.values())
        if target is None:
            fmt = 'No nonterminal of term type {} for synthesis function {}'
            raise ProblemException(fmt.format(term_type, self._synth_fun.name))
        return target

    def _check_grammar(self, nonterminals, target):
        g = grammar.grammar_graph(nonterminals)
        unreachable = grammar.unreachable_nonterminals(g, target.name)
        if unreachable:
            logger.warn('Nonterminals unreachable from {}: {}'.format(target.name, ', '.join(unreachable)))
        unproductive = grammar.unproductive_nonterminals(nonterminals)
        if unproductive:
            logger.warn('Nonterminals without finite terms: {}'.format(', '.join(unproductive)))
        if logger.debug_logging_enabled():
            logger.debug('Recursive nonterminals: {}'.format(grammar.recursive_nonterminals(g)))

    def finish(self):
        """Wrap all collected data into an immutable :class:`SemgusProblem`."""
        self._ensure_active()
        if self._synth_fun is None:
            raise ProblemException('No synthesis function has been set')

        nonterminals = self._materialize_grammar()
        target = self._target(nonterminals)
        self._check_grammar(nonterminals, target)

        problem = SemgusProblem(
            self._synth_fun.name,
            target,
            MappingProxyType(nonterminals),
            tuple(self._constraints),
            MappingProxyType(dict(self._metadata)),
            SmtContext(MappingProxyType(dict(self._datatypes)),
                       MappingProxyType(dict(self._functions))))
        logger.info('Collected problem for {} with {} nonterminal(s) and {} constraint(s)'.format(
            problem.target_name, len(nonterminals), len(problem.constraints)))

        self._finished = True
        self._metadata = self._datatypes = self._functions = None
        self._term_types = self._constraints = self._synth_fun = None
        return problem
