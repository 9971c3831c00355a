"""Google Photos API error payloads and exceptions."""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ...exceptions import GooglePhotosException


class ApiErrorStatus:
    """Canonical RPC status names returned in error payloads."""

    DESCRIPTIONS: Dict[str, str] = {
        'CANCELLED': 'The operation was cancelled, typically by the caller.',
        'UNKNOWN': 'Unknown error.',
        'INVALID_ARGUMENT': 'The client specified an invalid argument.',
        'DEADLINE_EXCEEDED': 'The deadline expired before the operation could complete.',
        'NOT_FOUND': 'Some requested entity (e.g. media item or album) was not found.',
        'ALREADY_EXISTS': 'The entity that a client attempted to create already exists.',
        'PERMISSION_DENIED': 'The caller does not have permission to execute the operation.',
        'RESOURCE_EXHAUSTED': 'Some resource has been exhausted, perhaps a per-user quota.',
        'FAILED_PRECONDITION': 'The system is not in a state required for the operation.',
        'ABORTED': 'The operation was aborted, typically due to a concurrency issue.',
        'OUT_OF_RANGE': 'The operation was attempted past the valid range.',
        'UNIMPLEMENTED': 'The operation is not implemented or not supported.',
        'INTERNAL': 'Internal error on the remote side.',
        'UNAVAILABLE': 'The service is currently unavailable.',
        'DATA_LOSS': 'Unrecoverable data loss or corruption.',
        'UNAUTHENTICATED': 'The request does not have valid authentication credentials.',
    }

    # HTTP status -> canonical status, used when the body carries no status
    HTTP_STATUS: Dict[int, str] = {
        400: 'INVALID_ARGUMENT',
        401: 'UNAUTHENTICATED',
        403: 'PERMISSION_DENIED',
        404: 'NOT_FOUND',
        409: 'ABORTED',
        429: 'RESOURCE_EXHAUSTED',
        499: 'CANCELLED',
        500: 'INTERNAL',
        501: 'UNIMPLEMENTED',
        503: 'UNAVAILABLE',
        504: 'DEADLINE_EXCEEDED',
    }

    @classmethod
    def get_message(cls, status: Optional[str]) -> str:
        """Gets description for a status name."""
        if not status:
            return 'Unknown error'
        return cls.DESCRIPTIONS.get(status, f"Unknown error: {status}")

    @classmethod
    def from_http_status(cls, http_status: int) -> str:
        """Maps an HTTP status code to a canonical status name."""
        return cls.HTTP_STATUS.get(http_status, 'UNKNOWN')


@dataclass
class ErrorBody:
    """
    Structured remote error.

    Wire shape::

        {"error": {"code": 400, "message": "...", "status": "INVALID_ARGUMENT"}}
    """
    code: int
    message: str
    status: Optional[str] = None
    details: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional['ErrorBody']:
        """Decode an error payload; returns None when it is not error-shaped."""
        if not isinstance(data, dict):
            return None
        error = data.get('error')
        if not isinstance(error, dict):
            return None
        return cls(
            code=int(error.get('code', 0) or 0),
            message=error.get('message') or '',
            status=error.get('status'),
            details=list(error.get('details') or [])
        )

    @classmethod
    def from_response(cls, http_status: int, text: str) -> 'ErrorBody':
        """
        Build an error from a non-success HTTP response.

        Falls back to a synthesized error when the body is not JSON or not
        error-shaped (e.g. upload endpoints answering in plain text).
        """
        body = None
        if text:
            try:
                body = cls.from_dict(json.loads(text))
            except ValueError:
                body = None
        if body is not None:
            if not body.code:
                body.code = http_status
            return body
        status = ApiErrorStatus.from_http_status(http_status)
        return cls(
            code=http_status,
            message=text.strip() if text else ApiErrorStatus.get_message(status),
            status=status
        )

    def to_dict(self) -> Dict[str, Any]:
        error: Dict[str, Any] = {'code': self.code, 'message': self.message}
        if self.status:
            error['status'] = self.status
        if self.details:
            error['details'] = self.details
        return {'error': error}


class RemoteApiError(GooglePhotosException):
    """Exception raised when the remote service returns an error payload."""

    def __init__(self, error: ErrorBody):
        self.error = error
        self.code = error.code
        self.status = error.status
        self.message = error.message or ApiErrorStatus.get_message(error.status)
        super().__init__(self.message, http_status=error.code)

    def __str__(self) -> str:
        if self.status:
            return f"{self.status} ({self.code}): {self.message}"
        return f"{self.code}: {self.message}"
