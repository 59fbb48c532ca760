"""
Error chain nodes.

An error chain is built from the innermost error outwards. Every
annotation creates a new node wrapping the previous chain, nodes
are never modified after creation. The innermost error is either
a Fundamental created by new() or any other exception.

Node kinds:
 - Fundamental: a message and a stack trace, the root of a chain
 - WithMessage: adds a message
 - WithStack: adds a stack trace
 - WithLevel: adds a severity level
 - WithStatus: adds a numeric status code

All annotating functions except with_message() return None when
called with None instead of an error.

Supported format specifiers:

    s   the message of the whole chain, same as str(err)
    v   same as s (also the default)
    q   the message as a double-quoted string, special characters
        are escaped like in JSON (e.g. \\n, \\", \\u0001)
    +v  extended format: messages and stack traces
        from the innermost error outwards

Nodes can be copied and pickled, stack traces are pickled
as resolved file names, function names and line numbers.
"""

from __future__ import annotations

import json
from typing import Any, Optional, Union

from .levels import Level
from .stack import capture_frames, StackTrace


__all__ = [
    'Failure', 'Wrapper',
    'Fundamental', 'WithMessage', 'WithStack', 'WithLevel', 'WithStatus',
    'new', 'wrap', 'with_message', 'with_stack', 'with_level', 'with_status',
    ]


_NO_STACK = StackTrace()


def _sprintf(message: str, args: tuple[Any, ...]) -> str:
    """printf-style formatting, but only if there are args."""
    return message % args if args else message


def _check_int(name: str, value: Any) -> int:
    """Accept an int or an int subclass except bool."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, but got {value!r}")
    return int(value)


def _format_extended(err: BaseException) -> str:
    if isinstance(err, Failure):
        return err.format_extended()
    return str(err)


class Failure(Exception):
    """
    Base class for all chain nodes.

    Provides the fluent interface and the formatting.
    """

    _stack: StackTrace = _NO_STACK

    def stack_trace(self) -> StackTrace:
        """Return the stack trace recorded by this node (possibly empty)."""
        return self._stack

    def format_extended(self) -> str:
        """Return the chain's messages and stack traces."""
        return str(self)

    def __format__(self, spec: str) -> str:
        if spec in ('', 's', 'v'):
            return str(self)
        if spec == 'q':
            return json.dumps(str(self), ensure_ascii=False)
        if spec == '+v':
            return self.format_extended()
        raise ValueError(f"Invalid format specifier {spec!r} for {type(self).__name__}")

    def wrap(self, message: str, *args: Any) -> WithMessage:
        """Annotate with a message. No stack trace is recorded."""
        return with_message(self, message, *args)

    def level(self, level: Union[Level, int]) -> WithLevel:
        """Annotate with a severity level."""
        node = with_level(self, level)
        assert node is not None
        return node

    def status(self, status: int) -> WithStatus:
        """Annotate with a status code."""
        node = with_status(self, status)
        assert node is not None
        return node


class Fundamental(Failure):
    """An error that has a message and a stack trace, but no cause."""

    def __init__(self, message: str, stack: StackTrace = _NO_STACK) -> None:
        super().__init__(message)
        self._message = message
        self._stack = stack

    @property
    def message(self) -> str:
        return self._message

    @property
    def stack(self) -> StackTrace:
        return self._stack

    def __str__(self) -> str:
        return self._message

    def format_extended(self) -> str:
        return self._message + format(self._stack, '+v')

    def __reduce__(self):
        return (type(self), (self._message, self._stack))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._message!r})"


class Wrapper(Failure):
    """
    Base class for nodes annotating an inner error (the cause).

    Unless overridden, the message and the extended format
    are taken from the cause.
    """

    _optional_cause = False

    def __init__(self, cause: Optional[BaseException], *args: Any) -> None:
        if cause is None:
            if not self._optional_cause:
                raise TypeError(f"{type(self).__name__}: the cause must not be None")
        elif not isinstance(cause, BaseException):
            raise TypeError(
                f"{type(self).__name__}: the cause must be an exception, but got {cause!r}")
        super().__init__(*args)
        self._cause = cause

    @property
    def cause(self) -> Optional[BaseException]:
        return self._cause

    def __str__(self) -> str:
        return str(self._cause)

    def format_extended(self) -> str:
        return _format_extended(self._cause)


class WithMessage(Wrapper):
    """Add a message to the cause."""

    _optional_cause = True

    def __init__(self, cause: Optional[BaseException], message: str) -> None:
        super().__init__(cause, message)
        self._message = message

    @property
    def message(self) -> str:
        """The message of this node only."""
        return self._message

    def __str__(self) -> str:
        if self._cause is None:
            return self._message
        return f"{self._message}: {self._cause}"

    def format_extended(self) -> str:
        if self._cause is None:
            return self._message
        return f"{_format_extended(self._cause)}\n{self._message}"

    def __reduce__(self):
        return (type(self), (self._cause, self._message))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._cause!r}, {self._message!r})"


class WithStack(Wrapper):
    """Add a stack trace to the cause."""

    def __init__(self, cause: BaseException, stack: StackTrace) -> None:
        super().__init__(cause)
        self._stack = stack

    @property
    def stack(self) -> StackTrace:
        return self._stack

    def format_extended(self) -> str:
        return _format_extended(self._cause) + format(self._stack, '+v')

    def __reduce__(self):
        return (type(self), (self._cause, self._stack))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._cause!r})"


class WithLevel(Wrapper):
    """Add a severity level to the cause."""

    def __init__(self, cause: BaseException, level: Union[Level, int]) -> None:
        super().__init__(cause)
        self._severity = Level(_check_int('level', level))

    @property
    def severity(self) -> Level:
        return self._severity

    def __reduce__(self):
        return (type(self), (self._cause, self._severity))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._cause!r}, Level.{self._severity.name})"


class WithStatus(Wrapper):
    """Add a status code to the cause."""

    def __init__(self, cause: BaseException, status: int) -> None:
        super().__init__(cause)
        self._status_code = _check_int('status', status)

    @property
    def status_code(self) -> int:
        return self._status_code

    def __reduce__(self):
        return (type(self), (self._cause, self._status_code))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._cause!r}, {self._status_code})"


def new(message: str, *args: Any) -> Fundamental:
    """
    Return a new error with the given message.

    If args are given, the message is formatted with the
    % operator. The stack trace is recorded.
    """
    return Fundamental(_sprintf(message, args), capture_frames(1))


def with_message(err: Optional[BaseException], message: str, *args: Any) -> WithMessage:
    """
    Annotate err with a message.

    Unlike other functions, with_message(None, ...) returns
    an error. Its message is the message alone.
    """
    return WithMessage(err, _sprintf(message, args))


def wrap(err: Optional[BaseException], message: str, *args: Any) -> Optional[WithStack]:
    """
    Annotate err with a message and a stack trace recorded
    at the point wrap() was called.

    The stack trace belongs to the outer WithStack node,
    the message to the inner WithMessage node.
    """
    if err is None:
        return None
    return WithStack(WithMessage(err, _sprintf(message, args)), capture_frames(1))


def with_stack(err: Optional[BaseException]) -> Optional[WithStack]:
    """Annotate err with a stack trace recorded at the point with_stack() was called."""
    if err is None:
        return None
    return WithStack(err, capture_frames(1))


def with_level(err: Optional[BaseException], level: Union[Level, int]) -> Optional[WithLevel]:
    """Annotate err with a severity level."""
    if err is None:
        return None
    return WithLevel(err, level)


def with_status(err: Optional[BaseException], status: int) -> Optional[WithStatus]:
    """Annotate err with a status code."""
    if err is None:
        return None
    return WithStatus(err, status)
