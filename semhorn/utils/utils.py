"""General utility classes and functions.

.. testsetup::

   from semhorn.utils.utils import *

"""

class SemhornException(Exception):
    """Root exception"""

class IllegalBuilderState(SemhornException):
    """Raised when a stateful object is used after it has been finalized"""

def wrong_type(obj):
    return 'Received argument {} of unsupported type {}'.format(obj, type(obj).__name__)

def find_first(p, seq, default = None):
    """Returns the first item in `seq` that satisies `p`, or `default`.

    >>> find_first(lambda x: x > 2, [1, 2, 3, 4])
    3
    >>> find_first(lambda x: x > 7, [1, 2, 3, 4]) is None
    True

    """
    return next((x for x in seq if p(x)), default)

def transpose(rows):
    """Transpose a list of equally long rows into a list of columns.

    >>> transpose([[1, 2, 3], [4, 5, 6]])
    [[1, 4], [2, 5], [3, 6]]
    >>> transpose([])
    []

    """
    return [list(col) for col in zip(*rows)]

def indented(lines, indent = 2):
    indented_lines = [" "*indent + line for line in lines.split("\n")]
    return "\n".join(indented_lines)
