# Event discriminator and the event names
EVENT_KEY = "$event"

SET_INFO = "set-info"
END_OF_STREAM = "end-of-stream"
DECLARE_FUNCTION = "declare-function"
DEFINE_FUNCTION = "define-function"
DECLARE_DATATYPE = "declare-datatype"
DEFINE_DATATYPE = "define-datatype"
CHECK_SYNTH = "check-synth"
DECLARE_TERM_TYPE = "declare-term-type"
DEFINE_TERM_TYPE = "define-term-type"
CHC = "chc"
CONSTRAINT = "constraint"
SYNTH_FUN = "synth-fun"

# Term discriminator and the term kinds
TERM_KEY = "$termType"

TERM_APPLICATION = "application"
TERM_VARIABLE = "variable"
TERM_EXISTS = "exists"
TERM_FORALL = "forall"
TERM_MATCH = "match"
TERM_LAMBDA = "lambda"
TERM_BITVECTOR = "bitvector"

# Variable annotations in horn clauses
INPUT_ATTR = "input"
OUTPUT_ATTR = "output"

# Builtin sorts
INT_SORT = "Int"
BOOL_SORT = "Bool"
REAL_SORT = "Real"
STRING_SORT = "String"
BITVEC_SORT = "BitVec"

# Engines
HORN_ENGINE = "horn"
SMT_ENGINE = "smt"

# Verdicts as reported by z3
SAT = "sat"
UNSAT = "unsat"
UNKNOWN = "unknown"

# Prefix of the fresh result variables in the closing formula
RESULT_VAR_PREFIX = "res"

# Name construction functions
def vector_var_name(index, name):
    """Name of the copy of variable `name` for the example with the given index.

    >>> vector_var_name(2, 'r')
    '2_r'

    """
    return "{}_{}".format(index, name)

