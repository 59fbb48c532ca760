"""
Error annotation chains.

The errchain package contains:
 - new() creating an error with a message and a stack trace
 - functions annotating an error with a message, a stack trace,
   a severity level or a status code without losing the original error
 - functions walking the chain of annotations back to the original
   error or to the most recent annotation of a given kind
 - stack trace capture and formatting

- - - - - -
Released under the MIT License.
"""

__version_info__ = (26, 10, 19)
__version__ = '.'.join(str(n) for n in __version_info__)

from . import chain, config, errors, levels, stack     # mypy, pylint
from .chain import *
from .config import *
from .errors import *
from .levels import *
from .stack import *

__all__ = [
    '__version__',
    '__version_info__',
    *chain.__all__,
    *config.__all__,
    *errors.__all__,
    *levels.__all__,
    *stack.__all__,
    ]
