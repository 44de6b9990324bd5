from ..utils import utils

class EncodingException(utils.SemhornException):
    """Root exception for the vectorized encoder"""

class UnknownOperatorException(EncodingException):
    """Raised when a term applies an operator that is neither a theory symbol
    nor the name of a function with an indicator."""

class UnsupportedSortException(EncodingException):
    """Raised when a sort cannot be translated into a z3 sort."""

class UnboundVariableException(EncodingException):
    """Raised when a term refers to a variable that is neither a function argument
    nor bound by an enclosing quantifier."""

class ExampleShapeException(EncodingException):
    """Raised when the example rows are not applications of one operator with a
    uniform number of arguments, or contain non-literal values."""
