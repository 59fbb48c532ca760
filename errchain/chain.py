"""
Error chain inspection.

All functions walk the chain from the outermost node inwards
and accept any exception or None. Exceptions not created
by this package are treated as the innermost error.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Optional, TypeVar

from .errors import Failure, WithLevel, WithStatus, Wrapper
from .levels import DEFAULT_LEVEL, DEFAULT_STATUS, Level
from .stack import StackTrace


__all__ = [
    'unwrap_one', 'cause', 'unwrap', 'iter_chain',
    'find', 'find_level', 'find_status', 'stack_trace',
    ]

_E = TypeVar('_E', bound=BaseException)


def unwrap_one(err: Optional[BaseException]) -> Optional[BaseException]:
    """Return the cause of err, or err itself if it has no cause."""
    if isinstance(err, Wrapper):
        return err.cause
    return err


def cause(err: Optional[BaseException]) -> Optional[BaseException]:
    """
    Return the original error, i.e. the innermost error of the chain.

    Return None if err is None or if the chain ends with
    a message without a cause.
    """
    while isinstance(err, Wrapper):
        err = err.cause
    return err

unwrap = cause


def iter_chain(err: Optional[BaseException]) -> Iterator[BaseException]:
    """Iterate over the chain, err first, the original error last."""
    while err is not None:
        yield err
        if not isinstance(err, Wrapper):
            return
        err = err.cause


def find(err: Optional[BaseException], kind: type[_E]) -> Optional[_E]:
    """
    Return the first error in the chain that is an instance of kind.

    The search starts with err itself. The outermost match
    wins, i.e. a later annotation shadows the earlier ones.
    """
    for node in iter_chain(err):
        if isinstance(node, kind):
            return node
    return None


def find_level(err: Optional[BaseException]) -> tuple[Level, bool]:
    """
    Return the most recently added severity level.

    Return (level, True) if found, (DEFAULT_LEVEL, False) otherwise.
    """
    node = find(err, WithLevel)
    if node is None:
        return DEFAULT_LEVEL, False
    return node.severity, True


def find_status(err: Optional[BaseException]) -> tuple[int, bool]:
    """
    Return the most recently added status code.

    Return (status, True) if found, (DEFAULT_STATUS, False) otherwise.
    """
    node = find(err, WithStatus)
    if node is None:
        return int(DEFAULT_STATUS), False
    return node.status_code, True


def stack_trace(err: Optional[BaseException]) -> StackTrace:
    """Return the most recently recorded stack trace in the chain."""
    for node in iter_chain(err):
        if isinstance(node, Failure) and (stack := node.stack_trace()):
            return stack
    return StackTrace()
