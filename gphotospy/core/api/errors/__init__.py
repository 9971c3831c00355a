"""Google Photos API errors and exceptions."""
from .api_errors import ApiErrorStatus, ErrorBody, RemoteApiError

__all__ = [
    'ApiErrorStatus',
    'ErrorBody',
    'RemoteApiError',
]
