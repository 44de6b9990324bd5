"""Builders for the JSON representation of events and terms used in the tests.

The main fixture is a small arithmetic grammar over the term type `E`:

    Start ::= $x | $1 | ($+ Start Start)

with the semantics function `E.Sem(t, x, r)` relating a term `t` and an
input `x` to the term's value `r`.
"""

import json

def app(name, args = (), sorts = None, ret = 'Int'):
    args = list(args)
    if sorts is None:
        sorts = ['Int'] * len(args)
    return {'$termType': 'application', 'name': name, 'returnSort': ret,
            'argumentSorts': list(sorts), 'arguments': args}

def var(name, sort = 'Int'):
    return {'$termType': 'variable', 'name': name, 'sort': sort}

def eq(lhs, rhs, sort = 'Int'):
    return app('=', [lhs, rhs], [sort, sort], 'Bool')

def exists(names, child, sort = 'Int', sorts = None):
    if sorts is None:
        sorts = [sort] * len(names)
    return {'$termType': 'exists', 'bindings': list(names),
            'bindingSorts': list(sorts), 'child': child}

def sem(term, x, r):
    """A call of the semantics function."""
    return app('E.Sem', [term, x, r], ['E', 'Int', 'Int'], 'Bool')

def case(operator, arguments, child):
    return {'operator': operator, 'arguments': list(arguments), 'child': child}

def match(term, cases):
    return {'$termType': 'match', 'term': term, 'binders': list(cases)}

###############################################################################
# Events
###############################################################################

def declare_term_type(name):
    return {'$event': 'declare-term-type', 'name': name}

def define_term_type(name, constructors):
    return {'$event': 'define-term-type', 'name': name,
            'constructors': [{'name': c, 'children': list(children)}
                             for c, children in constructors]}

def define_function(name, arg_names, arg_sorts, body, ret = 'Bool'):
    return {'$event': 'define-function', 'name': name,
            'rank': {'returnSort': ret, 'argumentSorts': list(arg_sorts)},
            'definition': {'arguments': list(arg_names), 'body': body}}

def chc(operator, children, constraint, body_relations = (), term_type = 'E'):
    variables = ['t', 'x', 'r'] + [v for rel in body_relations for v in rel['arguments']]
    return {'$event': 'chc',
            'constructor': {'name': operator, 'returnSort': term_type,
                            'arguments': list(children),
                            'argumentSorts': [term_type] * len(children)},
            'head': {'name': 'E.Sem', 'signature': [term_type, 'Int', 'Int'],
                     'arguments': ['t', 'x', 'r']},
            'bodyRelations': list(body_relations),
            'constraint': constraint,
            'variables': list(dict.fromkeys(variables)),
            'inputVariables': ['x'],
            'outputVariables': ['r']}

def relation(term, x, r):
    return {'name': 'E.Sem', 'signature': ['E', 'Int', 'Int'], 'arguments': [term, x, r]}

def synth_fun(productions, name = 'f', nonterminals = (('Start', 'E'),), term_type = 'E'):
    return {'$event': 'synth-fun', 'name': name, 'termType': term_type,
            'grammar': {
                'nonTerminals': [{'name': n, 'termType': t} for n, t in nonterminals],
                'productions': [{'instance': instance, 'operator': op, 'occurrences': list(occ)}
                                for instance, op, occ in productions]}}

def example(x, r):
    """The constraint `(E.Sem f x r)`."""
    return {'$event': 'constraint',
            'constraint': sem(app('f', ret = 'E'), x, r)}

###############################################################################
# The arithmetic problem
###############################################################################

SEM_CASES = {
    '$x': case('$x', [], eq(var('r'), var('x'))),
    '$1': case('$1', [], eq(var('r'), 1)),
    '$+': case('$+', ['t1', 't2'],
               exists(['r1', 'r2'],
                      app('and', [sem(var('t1', 'E'), var('x'), var('r1')),
                                  sem(var('t2', 'E'), var('x'), var('r2')),
                                  eq(var('r'), app('+', [var('r1'), var('r2')]))],
                          ['Bool'] * 3, 'Bool'))),
}

CONSTRUCTORS = [('$x', []), ('$1', []), ('$+', ['E', 'E'])]

def arithmetic_events(operators = ('$x', '$1', '$+'), examples = ((1, 1), (2, 2))):
    """Events of the arithmetic problem restricted to the given operators."""
    events = [
        {'$event': 'set-info', 'keyword': 'name', 'value': 'arith'},
        declare_term_type('E'),
        define_term_type('E', CONSTRUCTORS),
        {'$event': 'declare-function', 'name': 'E.Sem',
         'rank': {'returnSort': 'Bool', 'argumentSorts': ['E', 'Int', 'Int']}},
        define_function('E.Sem', ['t', 'x', 'r'], ['E', 'Int', 'Int'],
                        match(var('t', 'E'), [SEM_CASES[op] for op in operators])),
        chc('$x', [], eq(var('r'), var('x'))),
        chc('$1', [], eq(var('r'), 1)),
        chc('$+', ['t1', 't2'], eq(var('r'), app('+', [var('r1'), var('r2')])),
            [relation('t1', 'x', 'r1'), relation('t2', 'x', 'r2')]),
        synth_fun([('Start', op, ['Start', 'Start'] if op == '$+' else [])
                   for op in operators]),
    ]
    events.extend(example(x, r) for x, r in examples)
    events.append({'$event': 'check-synth'})
    events.append({'$event': 'end-of-stream'})
    return events

def to_json(events):
    return json.dumps(events)

###############################################################################
# The conditional problem
###############################################################################

def conj(*conjuncts):
    return app('and', list(conjuncts), ['Bool'] * len(conjuncts), 'Bool')

def cond_sem(term, x, r):
    """A call of the semantics function of conditions."""
    return app('B.Sem', [term, x, r], ['B', 'Int', 'Bool'], 'Bool')

def ite_events(examples = ((-1, 0), (3, 3))):
    """Events of a grammar with two term types:

        Start ::= $x | $0 | ($ite Cond Start Start)
        Cond  ::= ($lt Start Start)

    `E.Sem` gives the integer value of a term of type `E`, `B.Sem` the
    truth value of a term of type `B`.
    """
    e_cases = [
        case('$x', [], eq(var('r'), var('x'))),
        case('$0', [], eq(var('r'), 0)),
        case('$ite', ['tc', 'tt', 'te'],
             exists(['b', 'r1', 'r2'],
                    conj(cond_sem(var('tc', 'B'), var('x'), var('b', 'Bool')),
                         sem(var('tt', 'E'), var('x'), var('r1')),
                         sem(var('te', 'E'), var('x'), var('r2')),
                         eq(var('r'), app('ite', [var('b', 'Bool'), var('r1'), var('r2')],
                                          ['Bool', 'Int', 'Int']))),
                    sorts = ['Bool', 'Int', 'Int'])),
    ]
    b_cases = [
        case('$lt', ['t1', 't2'],
             exists(['r1', 'r2'],
                    conj(sem(var('t1', 'E'), var('x'), var('r1')),
                         sem(var('t2', 'E'), var('x'), var('r2')),
                         eq(var('r', 'Bool'), app('<', [var('r1'), var('r2')], ret = 'Bool'), 'Bool')))),
    ]
    events = [
        declare_term_type('E'),
        declare_term_type('B'),
        define_term_type('E', [('$x', []), ('$0', []), ('$ite', ['B', 'E', 'E'])]),
        define_term_type('B', [('$lt', ['E', 'E'])]),
        define_function('E.Sem', ['t', 'x', 'r'], ['E', 'Int', 'Int'], match(var('t', 'E'), e_cases)),
        define_function('B.Sem', ['t', 'x', 'r'], ['B', 'Int', 'Bool'], match(var('t', 'B'), b_cases)),
        synth_fun([('Start', '$x', []), ('Start', '$0', []),
                   ('Start', '$ite', ['Cond', 'Start', 'Start']),
                   ('Cond', '$lt', ['Start', 'Start'])],
                  nonterminals = [('Start', 'E'), ('Cond', 'B')]),
    ]
    events.extend(example(x, r) for x, r in examples)
    events.append({'$event': 'check-synth'})
    events.append({'$event': 'end-of-stream'})
    return events
