from .generator import ProblemGenerator, ProblemException, from_events, parse, parse_file
from .model import SemgusProblem, SemgusNonTerminal, SemgusProduction, SemanticRule, SmtContext
