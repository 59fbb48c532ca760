"""
Call stack capture.

A Frame identifies one call site. A StackTrace is a sequence of frames,
the innermost call (i.e. the capture site) first.

Frames keep only the code object, the module name and the line number,
never the interpreter's frame objects. A captured stack trace does not
keep local variables alive and cannot create reference cycles.

Supported format specifiers for a Frame:

    s   base name of the source file
    +s  function name and full path of the source file,
        separated by a newline and a tab
    d   line number
    n   function name without the module name
    v   same as s:d (also the default)
    +v  same as +s:d

and for a StackTrace:

    s   list of frames formatted with s
    v   list of frames formatted with v (also the default)
    +v  each frame formatted with +v on a new line
"""

from __future__ import annotations

from collections.abc import Iterable
import os.path
import sys
from types import CodeType
from typing import Optional, overload, Union

from .config import settings


__all__ = ['Frame', 'StackTrace', 'capture_frames', 'caller']


_UNKNOWN = 'unknown'


class Frame:
    """
    A single captured call site.

    Frame() without arguments is an invalid frame. It is formatted
    as "unknown".

    A pickled frame is restored without the code object, only with
    the resolved file name and function name.
    """

    __slots__ = ('_code', '_lineno', '_module', '_location')

    def __init__(
            self,
            code: Optional[CodeType] = None,
            lineno: int = 0,
            module: Optional[str] = None) -> None:
        self._code = code
        self._lineno = lineno if code is not None else 0
        self._module = module
        self._location: Optional[tuple[str, str]] = None  # (file, name) if restored

    def is_valid(self) -> bool:
        return self._code is not None or self._location is not None

    @property
    def name(self) -> str:
        """Function name without the module name, e.g. Type.method."""
        code = self._code
        if code is None:
            return self._location[1] if self._location is not None else ""
        # co_qualname exists in Python 3.11+
        return getattr(code, 'co_qualname', code.co_name)

    @property
    def function(self) -> str:
        """Fully qualified function name."""
        if not self.is_valid():
            return _UNKNOWN
        name = self.name
        return f"{self._module}.{name}" if self._module else name

    @property
    def file(self) -> str:
        """Full path of the source file."""
        if self._code is not None:
            return self._code.co_filename
        return self._location[0] if self._location is not None else _UNKNOWN

    @property
    def line(self) -> int:
        return self._lineno

    def __format__(self, spec: str) -> str:
        if spec == 's':
            return os.path.basename(self.file)
        if spec == '+s':
            if not self.is_valid():
                return _UNKNOWN
            return f"{self.function}\n\t{self.file}"
        if spec == 'd':
            return str(self._lineno)
        if spec == 'n':
            return self.name
        if spec in ('', 'v'):
            return f"{self:s}:{self:d}"
        if spec == '+v':
            return f"{self:+s}:{self:d}"
        raise ValueError(f"Invalid format specifier {spec!r} for {type(self).__name__}")

    def __str__(self) -> str:
        return format(self, 'v')

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self}>"

    def _key(self) -> tuple[str, str, int]:
        return (self.file, self.name, self._lineno)

    def __eq__(self, other) -> bool:
        if isinstance(other, Frame):
            return self._key() == other._key()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._key())

    def __reduce__(self):
        # code objects cannot be pickled
        if not self.is_valid():
            return (type(self), ())
        return (_restore_frame, (self.file, self.name, self._lineno, self._module))


def _restore_frame(file: str, name: str, lineno: int, module: Optional[str]) -> Frame:
    """Create a frame from resolved data, used for unpickling."""
    frame = Frame()
    frame._location = (file, name)
    frame._lineno = lineno
    frame._module = module
    return frame


class StackTrace(tuple):
    """
    An immutable sequence of frames, the capture site first.
    """

    __slots__ = ()

    def __new__(cls, frames: Iterable[Frame] = ()) -> StackTrace:
        return super().__new__(cls, frames)

    def __reduce__(self):
        return (type(self), (tuple(self),))

    @overload
    def __getitem__(self, index: int) -> Frame: ...
    @overload
    def __getitem__(self, index: slice) -> StackTrace: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[Frame, StackTrace]:
        item = super().__getitem__(index)
        if isinstance(index, slice):
            return type(self)(item)
        return item

    def __format__(self, spec: str) -> str:
        if spec == '+v':
            return ''.join(f"\n{frame:+v}" for frame in self)
        if spec in ('', 's', 'v'):
            frame_spec = spec or 'v'
            return '[' + ' '.join(format(frame, frame_spec) for frame in self) + ']'
        raise ValueError(f"Invalid format specifier {spec!r} for {type(self).__name__}")

    def __str__(self) -> str:
        return format(self, 'v')

    def __repr__(self) -> str:
        return f"{type(self).__name__}([{', '.join(format(frame, 'v') for frame in self)}])"


def capture_frames(skip: int = 0) -> StackTrace:
    """
    Return the current call stack.

    The frame of capture_frames() is always excluded, 'skip' is
    the number of additional frames to exclude. With skip=0
    the first frame is the caller of capture_frames().

    The result is empty if the stack capture is disabled in
    the settings.
    """
    if skip < 0:
        raise ValueError(f"skip must not be negative, but got {skip}")
    if not settings.capture_stack:
        return StackTrace()
    try:
        # pylint: disable-next=protected-access
        pyframe = sys._getframe(skip + 1)
    except ValueError:
        # call stack is not deep enough
        return StackTrace()
    frames = []
    depth = settings.stack_depth
    while pyframe is not None and len(frames) < depth:
        frames.append(Frame(
            pyframe.f_code, pyframe.f_lineno or 0, pyframe.f_globals.get('__name__')))
        pyframe = pyframe.f_back
    del pyframe
    return StackTrace(frames)


def caller() -> Frame:
    """Return the frame of the function calling caller()."""
    frames = capture_frames(1)
    return frames[0] if frames else Frame()
