import json

import pytest

from semhorn import api, config, wrapper
from semhorn.semhorn import arg_parser, main
from semhorn.utils import timing

from . import events as ev


@pytest.fixture(autouse=True)
def clear_event_log():
    timing.log.clear()
    yield
    timing.log.clear()


def write_problem(tmp_path, operators = ('$x', '$1', '$+'), examples = ((1, 1), (2, 2))):
    path = tmp_path / 'problem.sem.json'
    path.write_text(ev.to_json(ev.arithmetic_events(operators, examples)))
    return path


def test_arg_parser_defaults() -> None:
    args = arg_parser().parse_args(['problem.json'])
    assert args.engine == 'horn'
    assert args.timeout is None
    assert args.dump_smt is None
    assert not args.no_stats


def test_realizable(tmp_path, capsys) -> None:
    path = write_problem(tmp_path, operators = ('$x',))
    assert main([str(path), '-q', '--no-stats']) == 0
    assert 'unsat (realizable on the given examples)' in capsys.readouterr().out


def test_unrealizable(tmp_path, capsys) -> None:
    path = write_problem(tmp_path, operators = ('$1',))
    assert main([str(path), '-q', '--no-stats']) == 0
    assert 'sat (unrealizable on the given examples)' in capsys.readouterr().out


def test_examples_file(tmp_path, capsys) -> None:
    path = write_problem(tmp_path, operators = ('$x',))
    examples = tmp_path / 'examples.json'
    examples.write_text(json.dumps([ev.sem(ev.app('f', ret = 'E'), 1, 5)]))
    assert main([str(path), '-x', str(examples), '-q', '--no-stats']) == 0
    assert 'sat (unrealizable' in capsys.readouterr().out


def test_dump_smt(tmp_path) -> None:
    path = write_problem(tmp_path, operators = ('$x',))
    target = tmp_path / 'out.smt2'
    assert main([str(path), '--dump-smt', str(target), '-q', '--no-stats', '--suppress-result']) == 0
    script = target.read_text()
    assert script.startswith('(set-logic HORN)')
    assert '(declare-fun E.Sem (Int Int) Bool)' in script
    assert script.count('(assert ') == 2
    assert script.rstrip().endswith('(check-sat)')


def test_stats_table(tmp_path, capsys) -> None:
    path = write_problem(tmp_path, operators = ('$x',))
    assert main([str(path), '-q', '-e', 'smt']) == 0
    out = capsys.readouterr().out
    assert 'Benchmark' in out and 'Status' in out
    assert str(path) in out
    assert 'UNSAT' in out


def test_missing_file(tmp_path, capsys) -> None:
    assert main([str(tmp_path / 'missing.json'), '-q', '--no-stats']) == 1
    assert 'Terminating with exception' in capsys.readouterr().out


def test_encoding_error_is_reported(tmp_path, capsys) -> None:
    path = tmp_path / 'bad.json'
    path.write_text(json.dumps([{'$event': 'declare-term-type'}]))
    assert main([str(path), '-q', '--no-stats']) == 1
    assert 'Missing required field at 0.name' in capsys.readouterr().out


def test_debug_propagates_exceptions(tmp_path) -> None:
    io_config = config.IOConfig()
    io_config.input_file = str(tmp_path / 'missing.json')
    io_config.print_stats = False
    io_config.propagate_all_exceptions = True
    with pytest.raises(FileNotFoundError):
        wrapper.run(io_config, config.SolverConfig())


def test_print_formulas(tmp_path, capsys) -> None:
    path = write_problem(tmp_path, operators = ('$x',))
    assert main([str(path), '-q', '--no-stats', '--print-formulas']) == 0
    out = capsys.readouterr().out
    assert 'Encoding of E.Sem on 2 example(s)' in out
    assert 'query:' in out


def test_api_on_files(tmp_path) -> None:
    path = write_problem(tmp_path)
    assert api.load_problem(str(path)).target_name == 'f'
    g = api.grammar_graph(str(path))
    assert list(g.nodes) == ['Start']
    assert g['Start']['Start']['operators'] == ['$+']
    assert api.is_realizable(str(path))


def test_api_reads_paths(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    path = tmp_path / '[arith].sem.json'
    path.write_text(ev.to_json(ev.arithmetic_events()))
    assert api.load_problem('[arith].sem.json').target_name == 'f'
    assert api.load_problem(path).target_name == 'f'
    assert api.parse_events(ev.to_json(ev.arithmetic_events()))[1].name == 'E'
