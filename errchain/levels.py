"""
Severity levels and status codes.
"""

from __future__ import annotations

import enum
from http import HTTPStatus
import logging
from typing import Final


__all__ = ['Level', 'DEFAULT_LEVEL', 'DEFAULT_STATUS']


class Level(enum.IntEnum):
    """
    Syslog severity levels as defined in RFC 5424.

    Note that a lower value means a more severe level.
    """

    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7

    def more_severe(self, other: Level) -> bool:
        """Return True if self is more severe than other."""
        return self.value < Level(other).value

    def to_logging(self) -> int:
        """Return the closest level of the logging module."""
        return _TO_LOGGING[self]

    @classmethod
    def from_logging(cls, levelno: int) -> Level:
        """
        Convert a level of the logging module.

        A value between two standard logging levels is rounded up
        to the more severe one.
        """
        for logging_level, level in _FROM_LOGGING:
            if levelno <= logging_level:
                return level
        return cls.CRITICAL


_TO_LOGGING = {
    Level.EMERGENCY: logging.CRITICAL,
    Level.ALERT: logging.CRITICAL,
    Level.CRITICAL: logging.CRITICAL,
    Level.ERROR: logging.ERROR,
    Level.WARNING: logging.WARNING,
    Level.NOTICE: logging.INFO,
    Level.INFO: logging.INFO,
    Level.DEBUG: logging.DEBUG,
    }

_FROM_LOGGING = (
    (logging.DEBUG, Level.DEBUG),
    (logging.INFO, Level.INFO),
    (logging.WARNING, Level.WARNING),
    (logging.ERROR, Level.ERROR),
    )

# reported when no level or status annotation was found
DEFAULT_LEVEL: Final = Level.EMERGENCY
DEFAULT_STATUS: Final = HTTPStatus.INTERNAL_SERVER_ERROR
