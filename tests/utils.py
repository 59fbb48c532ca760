"""
Helpers for unit tests.
"""

# pylint: disable=missing-docstring, protected-access

import collections
import gc
import inspect
import re
import sys
import types


__all__ = ['P3_11', 'lineno', 'frame_regex', 'assert_frame', 'find_frame_objects']


P3_11 = sys.version_info >= (3, 11)


def lineno() -> int:
    """Return the line number of the call to lineno()."""
    return inspect.currentframe().f_back.f_lineno


def frame_regex(module: str, function: str, line: int) -> str:
    """
    Return a regex matching a frame formatted with '+v'.

    The tests may be imported as 'tests.test_xxx' or just 'test_xxx'.
    """
    return (
        rf"(tests\.)?{re.escape(module)}\.{re.escape(function)}"
        + rf"\n\t.*{re.escape(module)}\.py:{line}")


def assert_frame(text: str, module: str, function: str, line: int) -> None:
    regex = frame_regex(module, function, line)
    assert re.fullmatch(regex, text), f"{text!r} does not match {regex!r}"


def find_frame_objects(obj, limit=10_000):
    """
    Return interpreter frames reachable from obj.

    Modules and classes are not followed.
    """
    found = []
    seen = set()
    queue = collections.deque([obj])
    while queue and len(seen) < limit:
        item = queue.popleft()
        if id(item) in seen:
            continue
        seen.add(id(item))
        if isinstance(item, types.FrameType):
            found.append(item)
            continue
        if isinstance(item, (str, type, types.ModuleType)):
            continue
        queue.extend(gc.get_referents(item))
    return found
