"""Error taxonomy shared by every tracker backend."""


class TrackerError(Exception):
    """Base class for errors raised by the issue tracker layer."""


class IssueNotFoundError(TrackerError):
    """Raised when an issue cannot be found by the client."""


class TransitionError(TrackerError):
    """Raised when no transition path reaches the requested state."""


class NoSuchLinkTypeError(TrackerError):
    """Raised when a relationship is not declared by the project's link types."""


class UnsupportedOperationError(TrackerError):
    """Raised for operations the backend cannot perform (e.g. multiple assignees)."""


class MalformedInputError(TrackerError, ValueError):
    """Raised when a value does not have one of the accepted shapes."""
