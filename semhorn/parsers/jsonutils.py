"""Typed accessors for deserialized JSON values.

Every accessor raises :class:`DeserializationException` with the path of
the offending value relative to the object it was given. Callers that
descend into nested values prepend their own segment on the way out, so
that the exception that reaches the top carries the full path:

>>> try:
...     with path_segment('rank'):
...         get_string({'name': 3}, 'name')
... except DeserializationException as e:
...     print(e)
Expected a string at rank.name

"""

import contextlib

from ..utils import utils

class DeserializationException(utils.SemhornException):
    """Raised when JSON data is not a valid representation of the expected value.

    The path lists the array indices and field names leading from the root
    of the input to the offending value."""

    def __init__(self, msg, *path):
        super().__init__(msg)
        self.msg = msg
        self.path = [str(seg) for seg in path]

    def prepend(self, *segments):
        """Prepend the given path segment(s) and return the exception itself."""
        self.path[0:0] = [str(seg) for seg in segments]
        return self

    def path_str(self):
        return '.'.join(self.path)

    def __str__(self):
        if self.path:
            return '{} at {}'.format(self.msg, self.path_str())
        return self.msg

@contextlib.contextmanager
def path_segment(*segments):
    """Context manager that prepends `segments` to escaping deserialization errors."""
    try:
        yield
    except DeserializationException as e:
        raise e.prepend(*segments)

_KIND_NAMES = {
    dict: 'an object',
    list: 'an array',
    str: 'a string',
    bool: 'a boolean',
}

def is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)

def ensure_kind(value, kind, *path):
    if not isinstance(value, kind) or (kind is not bool and isinstance(value, bool)):
        raise DeserializationException(
            'Expected {}'.format(_KIND_NAMES.get(kind, kind.__name__)), *path)
    return value

def get(obj, key):
    try:
        return obj[key]
    except KeyError:
        raise DeserializationException('Missing required field', key) from None

def _get_kind(obj, key, kind):
    return ensure_kind(get(obj, key), kind, key)

def get_string(obj, key):
    return _get_kind(obj, key, str)

def get_object(obj, key):
    return _get_kind(obj, key, dict)

def get_array(obj, key):
    return _get_kind(obj, key, list)

def get_int(obj, key):
    value = get(obj, key)
    if not is_int(value):
        raise DeserializationException('Expected an integer', key)
    return value

def ensure_objects(arr):
    for i, elem in enumerate(arr):
        ensure_kind(elem, dict, i)
    return arr

def ensure_strings(arr):
    for i, elem in enumerate(arr):
        ensure_kind(elem, str, i)
    return arr

def get_objects(obj, key):
    arr = get_array(obj, key)
    with path_segment(key):
        return ensure_objects(arr)

def get_strings(obj, key):
    arr = get_array(obj, key)
    with path_segment(key):
        return ensure_strings(arr)

def get_optional_strings(obj, key):
    """Like :func:`get_strings`, but returns None if the field is absent or null."""
    if obj.get(key) is None:
        return None
    return get_strings(obj, key)

def ensure_same_length(xs, ys, what, *path):
    if len(xs) != len(ys):
        fmt = '{} have different lengths {} != {}'
        raise DeserializationException(fmt.format(what, len(xs), len(ys)), *path)
