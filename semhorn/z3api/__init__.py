import z3

from .. import config
from .z3utils import solver_context, make_solver, check

if config.Z3_LIB_PATH:
    z3.init(config.Z3_LIB_PATH)
