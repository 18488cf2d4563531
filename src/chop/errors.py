"""Error types raised by chop.

A malformed todo line is never an error: it degrades to a passthrough line.
Everything here is fatal for the invocation that raised it.
"""


class ChopError(Exception):
    """Base class for fatal chop errors."""


class ConfigError(ChopError):
    """Invalid option combination, argument, status string or config file."""


class IOFailure(ChopError):
    """A named file or standard stream could not be read or written."""


class SelectorUnavailable(ChopError):
    """The interactive selection tool is missing or failed."""
