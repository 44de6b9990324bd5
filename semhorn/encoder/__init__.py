from .encoder import Encoding, VectorEncoder, encode
from .examples import ExampleTable
from .exceptions import *
