class StatusStoreError(Exception):
    """Raised when the underlying storage fails."""


class IllegalTransitionError(ValueError):
    """Raised for a transition the state machine does not allow."""
