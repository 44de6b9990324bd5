"""Finalized, read-only representation of a SemGuS problem.

Instances of the classes in this module are only created by
:class:`semhorn.problem.generator.ProblemGenerator`. Mappings are exposed
as read-only views and sequences as tuples.

Grammars can be recursive, so nonterminals compare by identity and print
as their name only:

>>> e = SemgusNonTerminal('E', 'E', {})
>>> SemgusProduction('$+', (e, e), ())
SemgusProduction(operator='$+', children=(<E>, <E>), semantic_rules=())

"""

from collections import namedtuple as nt
from types import MappingProxyType

###############################################################################
# SMT context
###############################################################################

DatatypeConstructor = nt('DatatypeConstructor', 'name argument_sorts')
Datatype = nt('Datatype', 'name constructors')

class Function(nt('Function', 'name arguments body')):
    """A defined function. The sort of its value is not recorded."""

    __slots__ = ()

    def result_arg(self):
        """The last declared argument, which by convention carries the function's value."""
        return self.arguments[-1] if self.arguments else None

SmtContext = nt('SmtContext', 'datatypes functions')

###############################################################################
# Grammar
###############################################################################

SemanticRule = nt('SemanticRule', 'child_term_vars head body_relations constraint variables')

SemgusProduction = nt('SemgusProduction', 'operator children semantic_rules')

class SemgusNonTerminal:
    """A grammar nonterminal and its productions, keyed by operator."""

    __slots__ = ('_name', '_term_type', '_productions')

    def __init__(self, name, term_type, productions):
        self._name = name
        self._term_type = term_type
        # Filled in by the generator before the problem is handed out
        self._productions = productions

    @property
    def name(self):
        return self._name

    @property
    def term_type(self):
        return self._term_type

    @property
    def productions(self):
        return MappingProxyType(self._productions)

    def __repr__(self):
        return '<{}>'.format(self._name)

    def __str__(self):
        return '{} : {} ::= {}'.format(self._name, self._term_type,
                                       ' | '.join(self._productions))

###############################################################################
# Problem
###############################################################################

class SemgusProblem(nt('SemgusProblem', 'target_name target_nonterminal nonterminals constraints metadata smt_context')):

    __slots__ = ()

    def nonterminal(self, name):
        return self.nonterminals[name]

    def function(self, name):
        return self.smt_context.functions[name]

    def productions(self):
        """Yield (nonterminal, production) pairs in grammar order."""
        for nonterminal in self.nonterminals.values():
            for production in nonterminal.productions.values():
                yield nonterminal, production

    def __str__(self):
        lines = ['SemgusProblem({})'.format(self.target_name),
                 '  target: {}'.format(self.target_nonterminal.name)]
        lines.extend('  ' + str(n) for n in self.nonterminals.values())
        lines.append('  {} constraint(s), {} function(s), {} datatype(s)'.format(
            len(self.constraints), len(self.smt_context.functions),
            len(self.smt_context.datatypes)))
        return '\n'.join(lines)
