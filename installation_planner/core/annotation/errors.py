"""
Errors raised by the annotation core.

All of them derive from :class:`AnnotationError` so callers can catch the
whole family at the interaction boundary.
"""


class AnnotationError(Exception):
    """Base class for annotation errors."""


class GeometryError(AnnotationError):
    """No usable image or display rectangle to map coordinates against."""


class ValidationError(AnnotationError):
    """User supplied data was rejected (empty room name, unknown type...)."""


class ToolStateError(AnnotationError):
    """The requested action is not allowed in the current tool mode."""


class PersistenceError(AnnotationError):
    """A save/load/delete call to the project store failed."""


class PersistenceBusyError(PersistenceError):
    """Another persistence operation is still in flight."""
