"""
Error types shared by the backend and the dashboard client.
"""


class PMSError(Exception):
    """Base class for all PMS dashboard errors."""


class ValidationFailed(PMSError):
    """Input was rejected before any call or state change was attempted."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.message = message
        self.field = field


class BackendUnavailable(PMSError):
    """The REST backend could not be reached or answered with an error."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
