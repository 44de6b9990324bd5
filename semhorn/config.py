import logging

from . import consts

# If the tool crashes with
# > Z3Exception("init(Z3_LIBRARY_PATH) must be invoked before using Z3-python"),
# you can manually set the path to libz3.so below
Z3_LIB_PATH = ""

# Path / file config
ENCODING_FILE_PREFIX = "encoding"

# Solver config
DEFAULT_TIMEOUT_MS = None

DEFAULT_LOG_LEVEL = logging.WARN

class EngineEnum:

    Horn, Smt = range(2)

    _d = {
        consts.HORN_ENGINE: Horn,
        consts.SMT_ENGINE: Smt
    }

    @staticmethod
    def from_string(s):
        return EngineEnum._d.get(s.lower(), EngineEnum.Horn)

    @staticmethod
    def to_string(e):
        return {v: k for k, v in EngineEnum._d.items()}.get(e, 'UNKNOWN')

class IOConfig:

    def __init__(self):
        self.input_file = None
        self.examples_file = None
        self.dump_smt = False
        self.print_formulas = False
        self.show_result = True
        self.encoding_file = ENCODING_FILE_PREFIX + ".smt2"
        self.print_stats = True
        self.propagate_all_exceptions = False

class SolverConfig:

    def __init__(self):
        self.engine = EngineEnum.Horn
        self.timeout = DEFAULT_TIMEOUT_MS
