import sys

assert sys.version_info >= (3, 8), 'semhorn requires python >= 3.8'

__version__ = '0.1.0'

from .api import *
