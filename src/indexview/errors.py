"""
Exceptions raised by indexview.

Every exception also derives from the builtin a caller would expect for the
same misuse, so `except RuntimeError` or `except TypeError` keep working.
"""


class IndexViewError(Exception):
    """Base class for all indexview errors."""


class ExhaustedIteratorError(IndexViewError, RuntimeError):
    """Advancing or dereferencing an iterator that is already at its limit."""


class ViewClosedError(IndexViewError, RuntimeError):
    """Using an owning view after it released its source."""


class ReadOnlyError(IndexViewError, TypeError):
    """Writing through an entry of a read-only source."""


class UnsupportedSourceError(IndexViewError, TypeError):
    """The factory cannot derive a position and limit from the given source."""
