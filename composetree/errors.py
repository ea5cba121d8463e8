"""Exception hierarchy for ComposeTree.

All library errors derive from ComposeTreeError so callers can catch
everything raised by the library with a single except clause. Errors that
mirror a builtin category also inherit from that builtin (IndexError,
ValueError, LookupError) so generic handlers keep working.
"""


class ComposeTreeError(Exception):
    """Base class for all ComposeTree errors."""
    pass


class CycleError(ComposeTreeError):
    """Raised when attaching a node would make it its own ancestor."""
    pass


class ForeignNodeError(ComposeTreeError):
    """Raised when a node from a different arena is attached."""
    pass


class StaleNodeError(ComposeTreeError, LookupError):
    """Raised when a handle refers to a slot that has been discarded."""
    pass


class CursorBoundsError(ComposeTreeError, IndexError):
    """Raised when a cursor is dereferenced outside its valid range."""
    pass


class UnknownKindError(ComposeTreeError, ValueError):
    """Raised when a factory lookup receives an unrecognized name or tag."""
    pass


class CapabilityMismatchError(ComposeTreeError):
    """Raised when configuration requirements can't be met by adapter."""
    pass
