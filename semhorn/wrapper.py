"""Provides high-level access to the realizability check via the :func:`run` function.
"""

from . import config
from . import consts
from . import encoder
from . import parsers
from . import problem
from . import serialization
from . import z3api
from .utils import logger, timing

_VERDICTS = {
    consts.UNSAT: 'realizable on the given examples',
    consts.SAT: 'unrealizable on the given examples',
    consts.UNKNOWN: 'realizability unknown',
}

_STATUS_EVENTS = {
    consts.SAT: timing.EventType.Sat,
    consts.UNSAT: timing.EventType.Unsat,
    consts.UNKNOWN: timing.EventType.Unknown,
}

###############################################################################
# IO Routines for Preprocessing and Postprocessing
###############################################################################

def parse_problem(input_file):
    "Parses and collects the problem in the file of the given name."
    with open(input_file, "r") as f:
        events = parsers.parse_file(f)
    timing.log(timing.EventType.Parsed)
    logger.debug('Parsed {} events from {}'.format(len(events), input_file))
    res = problem.from_events(events)
    timing.log(timing.EventType.Built)
    return res

def parse_examples(examples_file):
    "Parses the example rows in the file of the given name."
    with open(examples_file, "r") as f:
        rows = parsers.parse_terms(f.read())
    logger.info('Read {} example(s) from {}'.format(len(rows), examples_file))
    return rows

def show_result(result):
    "Print the verdict and its interpretation."
    print('{} ({})'.format(result, _VERDICTS.get(result, 'unexpected solver result')))

def dump_encoding(io_config, encoding):
    """Write the SMT encoding to the file configured in `io_config`."""
    file_ = io_config.encoding_file or config.ENCODING_FILE_PREFIX + '.smt2'
    serialization.write_encoding_to_file(file_, encoding)

###############################################################################
# Main solution process
###############################################################################

def preprocess(io_config):
    """Encapsulates the parsing process.

    Returns the problem and the example rows (None if the problem's
    constraints are to be used)."""
    logger.info("Will check realizability of '{}'".format(io_config.input_file))
    parsed = parse_problem(io_config.input_file)
    logger.debug('Problem:\n{}'.format(parsed))
    examples = None
    if io_config.examples_file is not None:
        examples = parse_examples(io_config.examples_file)
    return parsed, examples

def solve(io_config, solver_config, parsed, examples):
    "Encodes the problem in a fresh z3 context and checks the encoding."
    with z3api.solver_context() as ctx:
        encoding = encoder.encode(ctx, parsed, examples)
        timing.log(timing.EventType.Encoded)
        if io_config.print_formulas:
            print(encoding)
        if io_config.dump_smt:
            dump_encoding(io_config, encoding)
        timing.log(timing.EventType.StartSolver)
        result = z3api.check(ctx, encoding.formulas, solver_config.engine, solver_config.timeout)
        timing.log(timing.EventType.EndSolver)
    return result

def _handle_exception(io_config, e):
    if io_config.propagate_all_exceptions:
        import traceback
        traceback.print_exc()
        raise e
    else:
        print('Terminating with exception ({})'.format(e))

def run(io_config, solver_config, batch_mode = False):
    """Run the realizability check according to the given configuration.

    In batch mode, the verdict ('sat', 'unsat' or 'unknown') is returned
    for further processing; it is None if the run failed."""
    timing.log(
        timing.EventType.Start,
        benchmark = io_config.input_file,
        engine = config.EngineEnum.to_string(solver_config.engine)
    )
    result = None
    try:
        parsed, examples = preprocess(io_config)
    except Exception as e:
        parsed = None
        timing.log(timing.EventType.Error)
        _handle_exception(io_config, e)

    if parsed is not None:
        try:
            result = solve(io_config, solver_config, parsed, examples)
        except Exception as e:
            timing.log(timing.EventType.Error)
            _handle_exception(io_config, e)
        else:
            timing.log(_STATUS_EVENTS.get(result, timing.EventType.Unknown))
            if io_config.show_result:
                show_result(result)

    if io_config.print_stats:
        timing.print_solver_stats()

    if batch_mode:
        return result
