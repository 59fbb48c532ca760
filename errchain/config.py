"""
Library settings.

The settings are read from ERRCHAIN_* environment variables once
during the import and can be changed later with configure().

    ERRCHAIN_CAPTURE_STACK  record stack traces (yes/no), default yes
    ERRCHAIN_STACK_DEPTH    max number of frames in a stack trace, default 32
"""

from __future__ import annotations

from collections.abc import Mapping
import difflib
import logging
import os
from types import SimpleNamespace
from typing import Optional


__all__ = ['configure']


DEFAULT_STACK_DEPTH = 32
_ENV_CAPTURE_STACK = 'ERRCHAIN_CAPTURE_STACK'
_ENV_STACK_DEPTH = 'ERRCHAIN_STACK_DEPTH'
_ENV_NAMES = [_ENV_CAPTURE_STACK, _ENV_STACK_DEPTH]

settings = SimpleNamespace(
    capture_stack=True,
    stack_depth=DEFAULT_STACK_DEPTH,
    )
_logger = logging.getLogger(__package__)

_TRUE_STRINGS =  ['yes', 'true', 'y', 't', 'on',  '1']
_FALSE_STRINGS = ['no', 'false', 'n', 'f', 'off', '0', '']

def _str_to_bool(name: str, word: str, default: bool) -> bool:
    word = word.strip().lower()
    if word in _TRUE_STRINGS:
        return True
    if word in _FALSE_STRINGS:
        return False
    _logger.warning("%s: cannot convert %r to boolean. Use e.g. 'yes' or 'no'", name, word)
    return default


def _str_to_depth(name: str, word: str, default: int) -> int:
    try:
        depth = int(word)
    except ValueError:
        _logger.warning("%s: %r is not an integer", name, word)
        return default
    if depth < 1:
        _logger.warning("%s: stack depth must be positive, got %d", name, depth)
        return default
    return depth


def _process_env(env: Mapping[str, str]) -> None:
    """Process environment variables."""
    errchain_env = {name: value for name, value in env.items() if name.startswith("ERRCHAIN_")}
    settings.capture_stack = _str_to_bool(
        _ENV_CAPTURE_STACK, errchain_env.pop(_ENV_CAPTURE_STACK, "1"), default=True)
    settings.stack_depth = _str_to_depth(
        _ENV_STACK_DEPTH,
        errchain_env.pop(_ENV_STACK_DEPTH, str(DEFAULT_STACK_DEPTH)),
        default=DEFAULT_STACK_DEPTH)
    for name in errchain_env:
        if suggestions := difflib.get_close_matches(name, _ENV_NAMES, n=1):
            _logger.warning(
                "Unknown environment variable %r, did you mean %r?", name, suggestions[0])
        else:
            _logger.warning("Unknown environment variable %r", name)


_process_env(os.environ)        # yes, during import


def configure(*, capture_stack: Optional[bool] = None, stack_depth: Optional[int] = None) -> None:
    """
    Change the settings. Arguments left at None are not changed.

    The settings apply to stack traces captured afterwards.
    Existing chains are never modified.
    """
    if stack_depth is not None:
        if isinstance(stack_depth, bool) or not isinstance(stack_depth, int):
            raise TypeError(f"stack_depth must be an integer, but got {stack_depth!r}")
        if stack_depth < 1:
            raise ValueError(f"stack_depth must be positive, but got {stack_depth}")
        settings.stack_depth = stack_depth
    if capture_stack is not None:
        settings.capture_stack = bool(capture_stack)
    _logger.debug(
        "settings: capture_stack=%s, stack_depth=%d",
        settings.capture_stack, settings.stack_depth)
