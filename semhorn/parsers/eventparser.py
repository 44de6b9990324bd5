"""Deserialization of SemGuS specification events from their JSON representation.

Parsing is all-or-nothing: the first invalid element aborts the parse with
a :class:`DeserializationException` whose path starts at the index of the
offending event.

.. testsetup::

   from semhorn.parsers.eventparser import *

>>> parse('[{"$event": "declare-term-type", "name": "E"}, {"$event": "check-synth"}]')
[DeclareTermTypeEvent(name='E'), CheckSynthEvent()]
>>> parse('[{"$event": "declare-term-type"}]')
Traceback (most recent call last):
...
semhorn.parsers.jsonutils.DeserializationException: Missing required field at 0.name

"""

import json
from types import MappingProxyType

from .. import consts
from ..utils import logger
from . import jsonutils as ju
from . import terms
from .jsonutils import DeserializationException, path_segment
from .representation import *

###############################################################################
# Entry points
###############################################################################

def parse(json_text):
    """Parse a string containing a JSON array of events."""
    return parse_array(json.loads(json_text))

def parse_file(fp):
    """Fully consume a text stream and parse it as a JSON array of events."""
    return parse_array(json.load(fp))

def parse_array(events_dto):
    """Deserialize an already decoded JSON value as an array of events."""
    if not isinstance(events_dto, list):
        raise DeserializationException('Event array must be a JSON array')
    return parse_events(ju.ensure_objects(events_dto))

def parse_events(events_dto):
    """Deserialize a list of JSON objects as events, failing on the first invalid one."""
    events = []
    for i, event_dto in enumerate(events_dto):
        with path_segment(i):
            events.append(parse_event(event_dto))
    logger.debug('Parsed {} events'.format(len(events)))
    return events

def parse_event(event_dto):
    """Deserialize a single event, given either as JSON text or as a decoded object."""
    if isinstance(event_dto, str):
        event_dto = json.loads(event_dto)
    ju.ensure_kind(event_dto, dict)
    event_type = ju.get_string(event_dto, consts.EVENT_KEY)
    try:
        parser = _EVENT_PARSERS[event_type]
    except KeyError:
        raise DeserializationException(
            'Unknown specification event "{}"'.format(event_type),
            consts.EVENT_KEY) from None
    return parser(event_dto)

def parse_terms(json_text):
    """Parse a string containing a JSON array of terms, such as a table of examples."""
    return parse_term_array(json.loads(json_text))

def parse_term_array(terms_dto):
    if not isinstance(terms_dto, list):
        raise DeserializationException('Term array must be a JSON array')
    res = []
    for i, term_dto in enumerate(terms_dto):
        with path_segment(i):
            res.append(terms.deserialize_term(term_dto))
    return res

###############################################################################
# Meta events
###############################################################################

def _set_info(dto):
    return SetInfoEvent(ju.get_string(dto, 'keyword'),
                        terms.deserialize_attribute_value_at(dto, 'value'))

###############################################################################
# SMT events
###############################################################################

def _declare_function(dto):
    name = ju.get_string(dto, 'name')
    rank = ju.get_object(dto, 'rank')
    with path_segment('rank'):
        return_sort = terms.deserialize_identifier_at(rank, 'returnSort')
        arg_sorts = terms.deserialize_identifiers_at(rank, 'argumentSorts')
    return DeclareFunctionEvent(name, return_sort, tuple(arg_sorts))

def _define_function(dto):
    decl = _declare_function(dto)
    definition = ju.get_object(dto, 'definition')
    with path_segment('definition'):
        arg_names = ju.get_strings(definition, 'arguments')
        if len(arg_names) != len(decl.argument_sorts):
            fmt = 'Number of argument sorts and lambda arity differ {} != {}'
            raise DeserializationException(
                fmt.format(len(decl.argument_sorts), len(arg_names)), 'arguments')
        body = terms.deserialize_term_at(definition, 'body')
    return DefineFunctionEvent(decl.name, decl.return_sort,
                               terms.typed_vars(arg_names, decl.argument_sorts),
                               body)

def _declare_datatype(dto):
    return DeclareDatatypeEvent(ju.get_string(dto, 'name'))

def _define_datatype(dto):
    name = ju.get_string(dto, 'name')
    constructors = []
    for i, ctor_dto in enumerate(ju.get_objects(dto, 'constructors')):
        with path_segment('constructors', i):
            constructors.append(DatatypeConstructorDecl(
                ju.get_string(ctor_dto, 'name'),
                tuple(terms.deserialize_identifiers_at(ctor_dto, 'children'))))
    return DefineDatatypeEvent(name, tuple(constructors))

###############################################################################
# SemGuS events
###############################################################################

def _declare_term_type(dto):
    return DeclareTermTypeEvent(ju.get_string(dto, 'name'))

def _define_term_type(dto):
    name = ju.get_string(dto, 'name')
    constructors = []
    for i, ctor_dto in enumerate(ju.get_objects(dto, 'constructors')):
        with path_segment('constructors', i):
            constructors.append(TermConstructorDecl(
                ju.get_string(ctor_dto, 'name'),
                tuple(ju.get_strings(ctor_dto, 'children'))))
    return DefineTermTypeEvent(name, tuple(constructors))

def _chc_constructor(dto):
    ctor_dto = ju.get_object(dto, 'constructor')
    with path_segment('constructor'):
        name = ju.get_string(ctor_dto, 'name')
        return_sort = ju.get_string(ctor_dto, 'returnSort')
        arg_names = ju.get_strings(ctor_dto, 'arguments')
        arg_sorts_dto = ju.get_array(ctor_dto, 'argumentSorts')
        ju.ensure_same_length(arg_sorts_dto, arg_names,
                              'Argument sorts and arguments of CHC constructor')
        with path_segment('argumentSorts'):
            arg_sorts = terms.deserialize_identifiers(arg_sorts_dto)
    return ChcConstructor(name, terms.typed_vars(arg_names, arg_sorts), return_sort)

def _annotate(dto, key, attribute, flags):
    names = ju.get_optional_strings(dto, key)
    if names is None:
        return
    for i, var in enumerate(names):
        if var not in flags:
            raise DeserializationException(
                'Unknown variable "{}" declared as {}'.format(var, attribute), key, i)
        flags[var].add(attribute)

def _horn_clause(dto):
    constructor = _chc_constructor(dto)
    head = terms.deserialize_relation_app_at(dto, 'head')

    body_relations = []
    for i, rel_dto in enumerate(ju.get_objects(dto, 'bodyRelations')):
        with path_segment('bodyRelations', i):
            body_relations.append(terms.deserialize_relation_app(rel_dto))

    constraint = terms.deserialize_term_at(dto, 'constraint')

    flags = {}
    for i, var in enumerate(ju.get_strings(dto, 'variables')):
        if var in flags:
            raise DeserializationException(
                'Duplicate variable "{}"'.format(var), 'variables', i)
        flags[var] = set()
    _annotate(dto, 'inputVariables', consts.INPUT_ATTR, flags)
    _annotate(dto, 'outputVariables', consts.OUTPUT_ATTR, flags)
    variables = MappingProxyType({
        var: AnnotatedVar(var, frozenset(attrs)) for var, attrs in flags.items()
    })

    return HornClauseEvent(constructor, head, tuple(body_relations),
                           constraint, variables)

def _constraint(dto):
    return ConstraintEvent(terms.deserialize_term_at(dto, 'constraint'))

def _grammar(grammar_dto):
    """Deserialize the grammar of a synth-fun event, checking its cross-references.

    Returns a read-only mapping from nonterminal name to :class:`GrammarNonTerminal`."""
    nt_dtos = ju.get_objects(grammar_dto, 'nonTerminals')
    prod_dtos = ju.get_objects(grammar_dto, 'productions')

    term_types = {}
    for i, nt_dto in enumerate(nt_dtos):
        with path_segment('nonTerminals', i):
            name = ju.get_string(nt_dto, 'name')
            if name in term_types:
                raise DeserializationException(
                    'Duplicate nonterminal declaration "{}"'.format(name), 'name')
            term_types[name] = ju.get_string(nt_dto, 'termType')

    productions = {name: {} for name in term_types}
    for i, prod_dto in enumerate(prod_dtos):
        with path_segment('productions', i):
            instance = ju.get_string(prod_dto, 'instance')
            operator = ju.get_string(prod_dto, 'operator')
            occurrences = ju.get_strings(prod_dto, 'occurrences')
            if instance not in productions:
                raise DeserializationException(
                    'Unknown nonterminal "{}" referenced in production'.format(instance),
                    'instance')
            if operator in productions[instance]:
                fmt = 'Duplicate production "{}" for nonterminal "{}"'
                raise DeserializationException(fmt.format(operator, instance), 'operator')
            for j, child in enumerate(occurrences):
                if child not in term_types:
                    raise DeserializationException(
                        'Unknown nonterminal "{}" referenced in production child'.format(child),
                        'occurrences', j)
            productions[instance][operator] = GrammarProduction(operator, tuple(occurrences))

    return MappingProxyType({
        name: GrammarNonTerminal(name, term_types[name], MappingProxyType(productions[name]))
        for name in term_types
    })

def _synth_fun(dto):
    name = ju.get_string(dto, 'name')
    term_type = ju.get_string(dto, 'termType')
    grammar_dto = ju.get_object(dto, 'grammar')
    with path_segment('grammar'):
        grammar = _grammar(grammar_dto)
    return SynthFunEvent(name, grammar, term_type)

_EVENT_PARSERS = {
    # meta events
    consts.SET_INFO: _set_info,
    consts.END_OF_STREAM: lambda dto: StreamEndEvent(),

    # smt events
    consts.DECLARE_FUNCTION: _declare_function,
    consts.DEFINE_FUNCTION: _define_function,
    consts.DECLARE_DATATYPE: _declare_datatype,
    consts.DEFINE_DATATYPE: _define_datatype,

    # semgus events
    consts.CHECK_SYNTH: lambda dto: CheckSynthEvent(),
    consts.DECLARE_TERM_TYPE: _declare_term_type,
    consts.DEFINE_TERM_TYPE: _define_term_type,
    consts.CHC: _horn_clause,
    consts.CONSTRAINT: _constraint,
    consts.SYNTH_FUN: _synth_fun,
}
