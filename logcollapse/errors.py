"""
Exception hierarchy for logcollapse.

Every failure here is fatal for the run: there is no retry and no
partial-success mode. The CLI reports the message and exits non-zero.
"""


class CollapseError(Exception):
    """Base class for errors that abort a collapse run."""


class InputOpenError(CollapseError):
    """Raised when the input log cannot be opened or read."""


class OutputWriteError(CollapseError):
    """Raised when the output file cannot be opened or written."""
