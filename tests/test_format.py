"""
Test the short, quoted and extended error formats.
"""

import re

import pytest

import errchain
from errchain import Level

from .utils import *


def test_short_format():
    """s, v and the default format print the message."""
    err = errchain.new("not found").wrap("database error").level(Level.ERROR).status(404)
    for text in (format(err, 's'), format(err, 'v'), format(err, ''), f"{err}", str(err)):
        assert text == "database error: not found"
    assert "%s" % err == "database error: not found"


def test_quoted_format():
    """q prints a quoted and escaped message."""
    err = errchain.wrap(errchain.new('say "hi"'), "line\nbreak")
    assert format(err, 'q') == r'"line\nbreak: say \"hi\""'
    assert format(errchain.new("ok"), 'q') == '"ok"'
    assert format(errchain.with_message(None, "čaj"), 'q') == '"čaj"'
    # control characters use JSON escapes
    assert format(errchain.new("\x01\t"), 'q') == r'"\u0001\t"'


def test_invalid_format():
    with pytest.raises(ValueError, match="format specifier"):
        format(errchain.new("error"), 'd')
    with pytest.raises(ValueError):
        f"{errchain.with_message(None, 'error'):>20}"     # pylint: disable=expression-not-assigned


def test_extended_fundamental():
    """Message followed by the stack trace."""
    err, line = errchain.new("ooh"), lineno()
    lines = format(err, '+v').split('\n')
    assert lines[0] == "ooh"
    assert_frame('\n'.join(lines[1:3]), 'test_format', 'test_extended_fundamental', line)
    # all frames are printed
    assert len(lines) == 1 + 2 * len(err.stack)


def test_extended_wrap():
    """Innermost error first, each stack trace after its message."""
    root, line_new = errchain.new("ooh"), lineno()
    err, line_wrap = errchain.wrap(root, "ahh"), lineno()
    text = format(err, '+v')
    root_text = format(root, '+v')
    assert text.startswith(root_text + "\nahh\n")
    wrap_lines = text[len(root_text + "\nahh\n"):].split('\n')
    assert_frame('\n'.join(wrap_lines[:2]), 'test_format', 'test_extended_wrap', line_wrap)
    assert_frame(
        '\n'.join(root_text.split('\n')[1:3]), 'test_format', 'test_extended_wrap', line_new)


def test_extended_with_message():
    """The cause is printed before the message."""
    assert format(errchain.with_message(EOFError("EOF"), "read"), '+v') == "EOF\nread"
    assert format(errchain.with_message(None, "read"), '+v') == "read"
    err = errchain.with_message(errchain.with_message(EOFError("EOF"), "read"), "client")
    assert format(err, '+v') == "EOF\nread\nclient"


def test_extended_level_and_status():
    """Level and status nodes print their cause."""
    err = errchain.new("message").status(404)
    assert 'test_format.py' in format(err, '+v')
    assert format(err, '+v') == format(err.cause, '+v')
    err = errchain.new("message").level(Level.ALERT)
    assert 'test_format.py' in format(err, '+v')


def test_extended_without_stack():
    """No captured stack = the extended format is the short format."""
    err = errchain.with_status(EOFError("message"), 404)
    assert format(err, '+v') == "message"
    err = errchain.with_level(err, Level.DEBUG).wrap("context")
    assert format(err, '+v') == "message\ncontext"
    assert str(err) == "context: message"


def test_extended_capture_disabled():
    errchain.configure(capture_stack=False)
    err = errchain.wrap(errchain.new("ooh"), "ahh")
    assert format(err, '+v') == "ooh\nahh"


def test_extended_contains_location():
    """Chains built with new() or wrap() contain a source location."""
    for err in (
            errchain.new("x"),
            errchain.wrap(EOFError("EOF"), "x"),
            errchain.with_stack(EOFError("EOF")),
            errchain.new("x").wrap("y").level(Level.INFO)):
        assert re.search(r"test_format\.py:\d+", format(err, '+v'))


def test_repeated_formatting():
    """Formatting has no side effects."""
    err = errchain.wrap(errchain.new("x").status(500), "y").level(Level.DEBUG)
    for spec in ('s', 'q', 'v', '+v'):
        assert format(err, spec) == format(err, spec)
    assert str(err) == str(err)
