"""Columnar view of a table of input/output examples.

Every example row is an application of the function under synthesis, e.g.
`(E.Sem t 1 2)`: position 0 holds the term being synthesized, the
remaining positions hold the concrete inputs and, last, the output. The
rows are transposed so that each argument position becomes one vector of
values with one entry per example.
"""

from ..parsers.representation import *
from ..utils import logger, utils
from . import sorts
from .exceptions import EncodingException, ExampleShapeException

class ExampleTable:
    """The transposed example rows.

    :param: operator: the name of the function all rows apply
    :param: inputs: list of input columns, one per argument position 1..K-2
    :param: results: the output column (argument position K-1)
    """

    def __init__(self, operator, inputs, results):
        self.operator = operator
        self.inputs = inputs
        self.results = results

    @staticmethod
    def from_rows(ctx, rows):
        """Transpose the application terms in `rows` into columns of z3 values.

        All rows must apply the same operator to the same number (at least
        two) of literal arguments."""
        rows = list(rows)
        if not rows:
            logger.info('No examples given')
            return ExampleTable(None, [], [])
        operator = None
        width = None
        for i, row in enumerate(rows):
            if not isinstance(row, Application):
                raise ExampleShapeException('Example {} is no application: {}'.format(i, row))
            if operator is None:
                operator = app_name(row)
                width = len(row.arguments)
            elif app_name(row) != operator:
                fmt = 'Example {} applies {} instead of {}'
                raise ExampleShapeException(fmt.format(i, app_name(row), operator))
            elif len(row.arguments) != width:
                fmt = 'Example {} has {} arguments instead of {}'
                raise ExampleShapeException(fmt.format(i, len(row.arguments), width))
        if width < 2:
            raise ExampleShapeException('Examples of {} need a term and a result position'.format(operator))

        columns = utils.transpose([_row_values(ctx, i, row) for i, row in enumerate(rows)])
        logger.debug('Vectorized {} example(s) of {} into {} column(s)'.format(
            len(rows), operator, len(columns)))
        return ExampleTable(operator, columns[:-1], columns[-1])

    @property
    def num_examples(self):
        return len(self.results)

    @property
    def columns(self):
        """All columns, inputs first and results last."""
        return self.inputs + [self.results]

    def input_column(self, i):
        """The input column for argument position `i + 1`, or None if the examples don't fix it."""
        if 0 <= i < len(self.inputs):
            return self.inputs[i]
        return None

    def __repr__(self):
        return 'ExampleTable({}, {} example(s), {} input column(s))'.format(
            self.operator, self.num_examples, len(self.inputs))

def _row_values(ctx, index, row):
    values = []
    for arg in row.arguments[1:]:
        try:
            values.append(sorts.expect_literal(ctx, arg.term, sorts.to_z3_sort(ctx, arg.sort)))
        except EncodingException as e:
            raise ExampleShapeException('Example {}: {}'.format(index, e)) from e
    return values
