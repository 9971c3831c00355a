"""
Custom exceptions for Google Photos operations.

Remote API errors (structured error payloads) live in
``gphotospy.core.api.errors``; everything raised locally is defined here.
"""
from typing import Optional


class GooglePhotosException(Exception):
    """Base exception for all gphotospy errors."""

    def __init__(self, message: str, http_status: Optional[int] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            http_status: HTTP status code (if available)
        """
        self.http_status = http_status
        super().__init__(message)


class TransportFailure(GooglePhotosException):
    """Network or connection level failure, raised after transport retries."""

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        url: Optional[str] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            method: HTTP method of the failed request
            url: URL of the failed request
        """
        self.method = method
        self.url = url
        super().__init__(message)


class ProtocolViolation(GooglePhotosException):
    """A required response header is missing or carries an invalid value."""

    def __init__(self, message: str, header: Optional[str] = None) -> None:
        self.header = header
        super().__init__(message)


class ValidationError(GooglePhotosException, ValueError):
    """A precondition failed before any network call was made."""
    pass


class MediaFileNotFoundError(ValidationError, FileNotFoundError):
    """The file handed to an upload does not exist."""
    pass
