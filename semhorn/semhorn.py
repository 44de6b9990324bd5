import argparse
import sys

from . import config
from . import consts
from .utils import logger

def arg_parser():
    parser = argparse.ArgumentParser(
        prog = 'semhorn',
        description = 'Check the realizability of a SemGuS problem on a set of examples')
    parser.add_argument('filename', type = str,
                        help = 'Path to the JSON event stream of the SemGuS problem')
    parser.add_argument('-x', '--examples', type = str, default = None,
                        help = 'JSON file with example rows to use instead of the constraints')
    parser.add_argument('-e', '--engine', type = str, default = consts.HORN_ENGINE,
                        choices = [consts.HORN_ENGINE, consts.SMT_ENGINE],
                        help = 'z3 engine used to check the encoding')
    parser.add_argument('-t', '--timeout', type = int, default = config.DEFAULT_TIMEOUT_MS,
                        help = 'solver timeout in milliseconds')
    parser.add_argument('--dump-smt', nargs = '?', default = None,
                        const = config.ENCODING_FILE_PREFIX + '.smt2', metavar = 'FILE',
                        help = 'write smt encoding to file')
    parser.add_argument('--print-formulas',
                        help = 'print the encoded formulas',
                        action = 'store_true')
    parser.add_argument('-v', '--verbose', help = 'increase output verbosity',
                        action = 'store_true')
    parser.add_argument('-q', '--quiet', help = 'decrease output verbosity',
                        action = 'store_true')
    parser.add_argument('--debug', help = 'debug output',
                        action = 'store_true')
    parser.add_argument('--no-stats', help = 'do not print timing statistics',
                        action = 'store_true')
    parser.add_argument('--suppress-result',
                        help = argparse.SUPPRESS,
                        action = 'store_true')
    return parser

def _configure_logger(verbose, quiet):
    if verbose:
        level=logger.DEBUG
    elif quiet:
        level=logger.WARN
    else:
        level=logger.INFO
    logger.set_level(level)

def _configure_io(args):
    io_config = config.IOConfig()
    io_config.input_file = args.filename
    io_config.examples_file = args.examples
    io_config.dump_smt = args.dump_smt is not None
    if args.dump_smt is not None:
        io_config.encoding_file = args.dump_smt
    io_config.print_formulas = args.print_formulas
    io_config.show_result = not args.suppress_result
    io_config.print_stats = not args.no_stats
    if args.debug:
        io_config.propagate_all_exceptions = True
    return io_config

def _configure_solver(args):
    solver_config = config.SolverConfig()
    solver_config.engine = config.EngineEnum.from_string(args.engine)
    solver_config.timeout = args.timeout
    return solver_config

def main(argv = None):
    parser = arg_parser()
    args = parser.parse_args(argv)
    _configure_logger(args.verbose, args.quiet)

    from . import wrapper
    io_config = _configure_io(args)
    solver_config = _configure_solver(args)
    result = wrapper.run(io_config, solver_config, batch_mode = True)
    return 0 if result is not None else 1

if __name__ == '__main__':
    sys.exit(main())
