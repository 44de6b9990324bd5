import pytest

from semhorn.parsers import parse_array
from semhorn.parsers.representation import *
from semhorn.problem import ProblemException, ProblemGenerator, from_events
from semhorn.problem import grammar
from semhorn.utils.utils import IllegalBuilderState

from . import events as ev


def build(events):
    return from_events(parse_array(events))


def without(events, event_type):
    return [e for e in events if e['$event'] != event_type]


def with_synth_fun(events, synth_fun):
    return [synth_fun if e['$event'] == 'synth-fun' else e for e in events]


def test_round_trip() -> None:
    problem = build(ev.arithmetic_events())
    assert problem.target_name == 'f'
    assert list(problem.nonterminals) == ['Start']
    assert problem.target_nonterminal is problem.nonterminal('Start')
    assert problem.target_nonterminal.term_type == 'E'
    assert problem.metadata['name'] == StringValue('arith')
    assert len(problem.constraints) == 2
    assert list(problem.smt_context.functions) == ['E.Sem']


def test_productions_share_semantic_rules() -> None:
    problem = build(ev.arithmetic_events())
    start = problem.target_nonterminal
    assert list(start.productions) == ['$x', '$1', '$+']
    plus = start.productions['$+']
    assert plus.children == (start, start)
    assert len(plus.semantic_rules) == 1
    rule = plus.semantic_rules[0]
    assert [v.name for v in rule.child_term_vars] == ['t1', 't2']
    assert [str(r) for r in rule.body_relations] == ['E.Sem(t1, x, r1)', 'E.Sem(t2, x, r2)']
    assert [(n, p.operator) for n, p in problem.productions()] == \
        [(start, '$x'), (start, '$1'), (start, '$+')]


def test_recursive_grammar_repr() -> None:
    problem = build(ev.arithmetic_events())
    assert repr(problem.target_nonterminal) == '<Start>'
    assert 'Start : E ::= $x | $1 | $+' in str(problem)


def test_duplicate_term_type_declaration() -> None:
    events = ev.arithmetic_events()
    events.insert(2, ev.declare_term_type('E'))
    with pytest.raises(ProblemException, match = 'Duplicate term type declaration: E'):
        build(events)


def test_undeclared_term_type_definition() -> None:
    events = without(ev.arithmetic_events(), 'declare-term-type')
    with pytest.raises(ProblemException, match = 'Undeclared term type for definition: E'):
        build(events)


def test_duplicate_constructor() -> None:
    events = [ev.declare_term_type('E'), ev.define_term_type('E', [('$x', []), ('$x', [])])]
    with pytest.raises(ProblemException, match = r'Duplicate term constructor \$x in term type E'):
        build(events)


def test_undeclared_constructor_child() -> None:
    events = [ev.declare_term_type('E'), ev.define_term_type('E', [('$neg', ['B'])])]
    with pytest.raises(ProblemException, match = 'Undeclared term type for constructor child: B'):
        build(events)


def test_chc_for_unknown_constructor() -> None:
    events = ev.arithmetic_events()
    events.insert(6, ev.chc('$minus', [], ev.eq(ev.var('r'), 0)))
    with pytest.raises(ProblemException, match = r'Unknown term constructor \$minus in term type E'):
        build(events)


def test_chc_for_unknown_term_type() -> None:
    events = ev.arithmetic_events()
    events.insert(6, ev.chc('$x', [], ev.eq(ev.var('r'), 0), term_type = 'B'))
    with pytest.raises(ProblemException, match = 'Unknown term type: B'):
        build(events)


def test_chcs_for_distinct_constructors_accumulate() -> None:
    events = ev.arithmetic_events()
    events.insert(6, ev.chc('$1', [], ev.eq(ev.var('r'), 1)))
    problem = build(events)
    productions = problem.target_nonterminal.productions
    assert len(productions['$1'].semantic_rules) == 2
    assert len(productions['$x'].semantic_rules) == 1


def test_second_synth_fun() -> None:
    events = ev.arithmetic_events()
    events.append(ev.synth_fun([('Start', '$x', [])], name = 'g'))
    with pytest.raises(ProblemException, match = 'Synthesis function already set: f'):
        build(events)


def test_missing_synth_fun() -> None:
    with pytest.raises(ProblemException, match = 'No synthesis function has been set'):
        build(without(ev.arithmetic_events(), 'synth-fun'))


def test_production_without_constructor() -> None:
    events = ev.arithmetic_events()
    events = with_synth_fun(events, ev.synth_fun([('Start', '$x', []), ('Start', '$neg', ['Start'])]))
    with pytest.raises(ProblemException, match = r'Production \$neg of nonterminal Start has no constructor in term type E'):
        build(events)


def test_production_children_must_match_constructor() -> None:
    events = ev.arithmetic_events()
    events = with_synth_fun(events, ev.synth_fun([('Start', '$x', []), ('Start', '$+', ['Start'])]))
    with pytest.raises(ProblemException, match = r'do not match constructor signature'):
        build(events)


def test_nonterminal_of_undeclared_term_type() -> None:
    events = ev.arithmetic_events()
    events = with_synth_fun(events, ev.synth_fun([('Start', '$x', [])], nonterminals = [('Start', 'B')], term_type = 'B'))
    with pytest.raises(ProblemException, match = 'Undeclared term type B for nonterminal Start'):
        build(events)


def test_no_nonterminal_for_target_term_type() -> None:
    events = ev.arithmetic_events()
    events.insert(2, ev.declare_term_type('B'))
    events = with_synth_fun(events, ev.synth_fun([('Start', '$x', [])], term_type = 'B'))
    with pytest.raises(ProblemException, match = 'No nonterminal of term type B for synthesis function f'):
        build(events)


def test_target_is_first_nonterminal_of_term_type() -> None:
    events = ev.arithmetic_events()
    synth_fun = ev.synth_fun([('Start', '$+', ['Leaf', 'Leaf']), ('Leaf', '$x', []), ('Leaf', '$1', [])],
                             nonterminals = [('Start', 'E'), ('Leaf', 'E')])
    events = with_synth_fun(events, synth_fun)
    problem = build(events)
    assert problem.target_nonterminal.name == 'Start'
    g = grammar.problem_graph(problem)
    assert g['Start']['Leaf']['operators'] == ['$+']
    assert grammar.unreachable_nonterminals(g, 'Leaf') == ['Start']
    assert grammar.recursive_nonterminals(g) == []


def test_redefinition_last_write_wins() -> None:
    events = ev.arithmetic_events()
    events.insert(4, ev.define_function('E.Sem', ['t', 'x', 'r'], ['E', 'Int', 'Int'],
                                        ev.match(ev.var('t', 'E'), [])))
    problem = build(events)
    assert len(problem.function('E.Sem').body.cases) == 3


def test_finished_generator_rejects_events() -> None:
    gen = ProblemGenerator()
    for event in parse_array(ev.arithmetic_events()):
        gen.consume(event)
    gen.finish()
    with pytest.raises(IllegalBuilderState):
        gen.consume(CheckSynthEvent())
    with pytest.raises(IllegalBuilderState):
        gen.finish()


def test_unknown_event_type() -> None:
    with pytest.raises(ProblemException):
        ProblemGenerator().consume('check-synth')
