"""Google Photos API transport layer."""
from .auth import TokenProvider, StaticTokenProvider, CredentialsTokenProvider
from .config import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig, RetryConfig
from .endpoints import RequestUris
from .errors import ApiErrorStatus, ErrorBody, RemoteApiError
from .events import EventEmitter, PAGING, UPLOAD_PROGRESS
from .transport import AsyncTransport, TransportResponse

__all__ = [
    # Transport
    'AsyncTransport',
    'TransportResponse',
    'RequestUris',

    # Auth
    'TokenProvider',
    'StaticTokenProvider',
    'CredentialsTokenProvider',

    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',

    # Errors
    'ApiErrorStatus',
    'ErrorBody',
    'RemoteApiError',

    # Events
    'EventEmitter',
    'PAGING',
    'UPLOAD_PROGRESS',
]
