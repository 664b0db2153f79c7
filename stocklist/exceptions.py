"""Package exceptions.

Form and request problems are reported as error mappings, not raised; only
conditions the page cannot recover from become exceptions.
"""


class StocklistError(Exception):
    """Base class for all stocklist errors."""


class SessionStoreError(StocklistError):
    """The visitor's session could not be read or written."""
