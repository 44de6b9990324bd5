"""Deserialization of identifiers, relation applications, attribute values and SMT terms.

.. testsetup::

   from semhorn.parsers.terms import *

>>> deserialize_identifier(['BitVec', 8])
BitVec[8]
>>> deserialize_term(42)
NumberLiteral(value=42)
>>> deserialize_term({'$termType': 'variable', 'name': 'x', 'sort': 'Int'})
Variable(name='x', sort=Int)

"""

import re

from .. import consts
from . import jsonutils as ju
from .jsonutils import DeserializationException, path_segment
from .representation import *

###############################################################################
# Identifiers & variables
###############################################################################

def deserialize_identifier(dto):
    """An identifier is either a plain string or an array `[name, index, ...]`."""
    if isinstance(dto, str):
        return Identifier(dto)
    if isinstance(dto, list):
        if not dto:
            raise DeserializationException('Identifier array must not be empty')
        name = ju.ensure_kind(dto[0], str, 0)
        indices = []
        for i, index in enumerate(dto[1:], start = 1):
            if not (isinstance(index, str) or ju.is_int(index)):
                raise DeserializationException('Identifier index must be a string or an integer', i)
            indices.append(index)
        return Identifier(name, indices)
    raise DeserializationException('Identifier must be a string or an array')

def deserialize_identifier_at(obj, key):
    dto = ju.get(obj, key)
    with path_segment(key):
        return deserialize_identifier(dto)

def deserialize_identifiers(arr):
    res = []
    for i, dto in enumerate(arr):
        with path_segment(i):
            res.append(deserialize_identifier(dto))
    return res

def deserialize_identifiers_at(obj, key):
    arr = ju.get_array(obj, key)
    with path_segment(key):
        return deserialize_identifiers(arr)

def typed_vars(names, sorts):
    return tuple(TypedVar(n, s) for n, s in zip(names, sorts))

###############################################################################
# Relation applications
###############################################################################

def deserialize_relation_app(dto):
    name = ju.get_string(dto, 'name')
    signature = ju.get_array(dto, 'signature')
    args = ju.get_strings(dto, 'arguments')
    ju.ensure_same_length(signature, args,
                          'Signature and arguments of relation application')
    with path_segment('signature'):
        sorts = deserialize_identifiers(signature)
    return RelationApp(name, typed_vars(args, sorts))

def deserialize_relation_app_at(obj, key):
    dto = ju.get_object(obj, key)
    with path_segment(key):
        return deserialize_relation_app(dto)

###############################################################################
# Attribute values
###############################################################################

def deserialize_attribute_value(dto):
    if dto is None:
        return UnitValue()
    if isinstance(dto, str):
        return StringValue(dto)
    if isinstance(dto, bool):
        return KeywordValue('true' if dto else 'false')
    if isinstance(dto, (int, float)):
        return NumberValue(dto)
    if isinstance(dto, list):
        values = []
        for i, elem in enumerate(dto):
            with path_segment(i):
                values.append(deserialize_attribute_value(elem))
        return ListValue(tuple(values))
    if isinstance(dto, dict):
        return KeywordValue(ju.get_string(dto, 'keyword'))
    raise DeserializationException('Unsupported attribute value')

def deserialize_attribute_value_at(obj, key):
    dto = obj.get(key)
    with path_segment(key):
        return deserialize_attribute_value(dto)

###############################################################################
# Terms
###############################################################################

_BV_LITERAL = re.compile(r'^#(x[0-9a-fA-F]+|b[01]+)$')

def _bitvector_value(dto):
    if ju.is_int(dto):
        if dto < 0:
            raise DeserializationException('Bit-vector value must be non-negative', 'value')
        return dto
    if isinstance(dto, str) and _BV_LITERAL.match(dto):
        base = 16 if dto[1] == 'x' else 2
        return int(dto[2:], base)
    raise DeserializationException('Bit-vector value must be a non-negative integer or a #x/#b literal', 'value')

def _application(dto):
    name = deserialize_identifier_at(dto, 'name')
    return_sort = deserialize_identifier_at(dto, 'returnSort')
    arg_sorts = deserialize_identifiers_at(dto, 'argumentSorts')
    args_dto = ju.get_array(dto, 'arguments')
    ju.ensure_same_length(arg_sorts, args_dto,
                          'Argument sorts and arguments of application')
    args = []
    for i, (sort, arg_dto) in enumerate(zip(arg_sorts, args_dto)):
        with path_segment('arguments', i):
            args.append(TypedTerm(sort, deserialize_term(arg_dto)))
    return Application(name, return_sort, tuple(args))

def _variable(dto):
    return Variable(ju.get_string(dto, 'name'),
                    deserialize_identifier_at(dto, 'sort'))

def _quantifier(kind):
    def deserialize(dto):
        names = ju.get_strings(dto, 'bindings')
        sorts = deserialize_identifiers_at(dto, 'bindingSorts')
        ju.ensure_same_length(names, sorts, 'Bindings and binding sorts of quantifier')
        return Quantifier(kind, typed_vars(names, sorts), deserialize_term_at(dto, 'child'))
    return deserialize

def _match(dto):
    scrutinee = deserialize_term_at(dto, 'term')
    cases = []
    for i, binder in enumerate(ju.get_objects(dto, 'binders')):
        with path_segment('binders', i):
            operator = ju.get(binder, 'operator')
            if operator is not None:
                ju.ensure_kind(operator, str, 'operator')
            cases.append(MatchCase(operator,
                                   tuple(ju.get_strings(binder, 'arguments')),
                                   deserialize_term_at(binder, 'child')))
    return Match(scrutinee, tuple(cases))

def _lambda(dto):
    return Lambda(tuple(ju.get_strings(dto, 'arguments')),
                  deserialize_term_at(dto, 'body'))

def _bitvector(dto):
    size = ju.get_int(dto, 'size')
    if size <= 0:
        raise DeserializationException('Bit-vector size must be positive', 'size')
    return BitVectorLiteral(size, _bitvector_value(ju.get(dto, 'value')))

_TERM_PARSERS = {
    consts.TERM_APPLICATION: _application,
    consts.TERM_VARIABLE: _variable,
    consts.TERM_EXISTS: _quantifier(EXISTS),
    consts.TERM_FORALL: _quantifier(FORALL),
    consts.TERM_MATCH: _match,
    consts.TERM_LAMBDA: _lambda,
    consts.TERM_BITVECTOR: _bitvector,
}

def deserialize_term(dto):
    """Deserialize a JSON value as an SMT term.

    Bare JSON numbers and strings are literals; everything else is an
    object discriminated by its `$termType` field."""
    if isinstance(dto, bool):
        raise DeserializationException('Term must be a number, a string or an object')
    if isinstance(dto, int):
        return NumberLiteral(dto)
    if isinstance(dto, float):
        return DecimalLiteral(dto)
    if isinstance(dto, str):
        return StringLiteral(dto)
    if not isinstance(dto, dict):
        raise DeserializationException('Term must be a number, a string or an object')
    term_type = ju.get_string(dto, consts.TERM_KEY)
    try:
        parser = _TERM_PARSERS[term_type]
    except KeyError:
        raise DeserializationException(
            'Unknown term type "{}"'.format(term_type), consts.TERM_KEY) from None
    return parser(dto)

def deserialize_term_at(obj, key):
    dto = ju.get(obj, key)
    with path_segment(key):
        return deserialize_term(dto)
