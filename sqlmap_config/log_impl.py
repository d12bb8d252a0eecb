"""
Log adapters selectable with the logImpl setting.

The default adapter delegates to the standard logging module. Configuration.get_log()
builds an adapter of the configured class for a logger name (with the logPrefix
setting prepended).
"""

import logging
import sys
from typing import Optional

from .interfaces import Log


class StdlibLoggingImpl(Log):
    """Delegates to logging.getLogger(name)."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def is_debug_enabled(self) -> bool:
        return self.logger.isEnabledFor(logging.DEBUG)

    def debug(self, message: str) -> None:
        self.logger.debug(message)

    def warn(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str, exc: Optional[BaseException] = None) -> None:
        self.logger.error(message, exc_info=exc)


class StdOutImpl(Log):
    """Writes every message to stdout (errors to stderr)."""

    def __init__(self, name: str):
        self.name = name

    def is_debug_enabled(self) -> bool:
        return True

    def debug(self, message: str) -> None:
        print(message)

    def warn(self, message: str) -> None:
        print(message)

    def error(self, message: str, exc: Optional[BaseException] = None) -> None:
        print(message, file=sys.stderr)
        if exc is not None:
            print(repr(exc), file=sys.stderr)


class NoLoggingImpl(Log):
    """Discards everything."""

    def __init__(self, name: str):
        self.name = name

    def is_debug_enabled(self) -> bool:
        return False

    def debug(self, message: str) -> None:
        pass

    def warn(self, message: str) -> None:
        pass

    def error(self, message: str, exc: Optional[BaseException] = None) -> None:
        pass
