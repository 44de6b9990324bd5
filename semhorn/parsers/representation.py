"""Immutable representation of SemGuS specification events and SMT terms.

All variants are namedtuples, so they compare by value and cannot be
modified after construction.

>>> Identifier('BitVec', (32,))
BitVec[32]
>>> Identifier('Int')
Int

"""

from collections import namedtuple as nt

###############################################################################
# Identifiers, variables, relations
###############################################################################

class Identifier(nt('Identifier', 'name indices')):
    """A sort reference (or indexed operator name) with optional indices."""

    __slots__ = ()

    def __new__(cls, name, indices = ()):
        return super().__new__(cls, name, tuple(indices))

    def __repr__(self):
        if self.indices:
            return '{}[{}]'.format(self.name, ', '.join(str(i) for i in self.indices))
        return self.name

TypedVar = nt('TypedVar', 'name sort')
AnnotatedVar = nt('AnnotatedVar', 'name attributes')

class RelationApp(nt('RelationApp', 'name arguments')):

    __slots__ = ()

    def __str__(self):
        return '{}({})'.format(self.name, ', '.join(v.name for v in self.arguments))

###############################################################################
# Attribute values (set-info)
###############################################################################

UnitValue = nt('UnitValue', '')
StringValue = nt('StringValue', 'value')
NumberValue = nt('NumberValue', 'value')
KeywordValue = nt('KeywordValue', 'keyword')
ListValue = nt('ListValue', 'values')

###############################################################################
# SMT terms
###############################################################################

Application = nt('Application', 'name return_sort arguments')
TypedTerm = nt('TypedTerm', 'sort term')
Variable = nt('Variable', 'name sort')
NumberLiteral = nt('NumberLiteral', 'value')
DecimalLiteral = nt('DecimalLiteral', 'value')
StringLiteral = nt('StringLiteral', 'value')
BitVectorLiteral = nt('BitVectorLiteral', 'size value')
Quantifier = nt('Quantifier', 'kind bindings child')
Match = nt('Match', 'term cases')
MatchCase = nt('MatchCase', 'operator arguments result')
Lambda = nt('Lambda', 'arguments body')

EXISTS = 'exists'
FORALL = 'forall'

LITERAL_TYPES = (NumberLiteral, DecimalLiteral, StringLiteral, BitVectorLiteral)

def app_name(term):
    """Name of the operator of an application term."""
    return term.name.name

###############################################################################
# Specification events
###############################################################################

# Meta events
SetInfoEvent = nt('SetInfoEvent', 'keyword value')
StreamEndEvent = nt('StreamEndEvent', '')

# SMT events
DeclareFunctionEvent = nt('DeclareFunctionEvent', 'name return_sort argument_sorts')
DefineFunctionEvent = nt('DefineFunctionEvent', 'name return_sort arguments body')
DeclareDatatypeEvent = nt('DeclareDatatypeEvent', 'name')
DefineDatatypeEvent = nt('DefineDatatypeEvent', 'name constructors')
DatatypeConstructorDecl = nt('DatatypeConstructorDecl', 'name argument_sorts')

# SemGuS events
CheckSynthEvent = nt('CheckSynthEvent', '')
DeclareTermTypeEvent = nt('DeclareTermTypeEvent', 'name')
DefineTermTypeEvent = nt('DefineTermTypeEvent', 'name constructors')
TermConstructorDecl = nt('TermConstructorDecl', 'name children')
HornClauseEvent = nt('HornClauseEvent', 'constructor head body_relations constraint variables')
ChcConstructor = nt('ChcConstructor', 'name arguments return_sort')
ConstraintEvent = nt('ConstraintEvent', 'constraint')
SynthFunEvent = nt('SynthFunEvent', 'name grammar term_type')
GrammarNonTerminal = nt('GrammarNonTerminal', 'name term_type productions')
GrammarProduction = nt('GrammarProduction', 'operator occurrences')
