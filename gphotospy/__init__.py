"""
gphotospy - Async Python library for the Google Photos Library API.

Usage:
    >>> from gphotospy import GooglePhotosClient
    >>>
    >>> async with GooglePhotosClient(access_token="ya29...") as photos:
    ...     async for album in photos.iter_albums():
    ...         print(album.title)
"""
import logging
from .client import GooglePhotosClient

# Configuration
from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    RetryConfig,
    AsyncTransport,
    TransportResponse,
    TokenProvider,
    StaticTokenProvider,
    CredentialsTokenProvider,
    ErrorBody,
    RemoteApiError,
    EventEmitter,
)
from .core.exceptions import (
    GooglePhotosException,
    TransportFailure,
    ProtocolViolation,
    ValidationError,
    MediaFileNotFoundError,
)
from .core.logging import set_package_level

# Engines
from .core.upload import UploadCoordinator, UploadConfig, UploadMethod, UploadProgress
from .core.paging import PageEnumerator, PageCursor, PagingProgress, normalize_filter
from .core.batching import Batch, split_batches

# Models
from .core.models import (
    Album,
    AlbumPosition,
    MediaItem,
    UploadItem,
    Filter,
    ContentFilter,
    DateFilter,
    Date,
    DateRange,
    MediaTypeFilter,
    FeatureFilter,
    ContentCategory,
    MediaType,
    Feature,
    PositionType,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for gphotospy modules.

    This ensures that all gphotospy loggers are properly configured
    to show log messages at the specified level.

    Args:
        level: Logging level (default: logging.INFO)
    """
    set_package_level(level)


__all__ = [
    'GooglePhotosClient',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',
    'AsyncTransport',
    'TransportResponse',
    'TokenProvider',
    'StaticTokenProvider',
    'CredentialsTokenProvider',
    'ErrorBody',
    'RemoteApiError',
    'EventEmitter',
    'GooglePhotosException',
    'TransportFailure',
    'ProtocolViolation',
    'ValidationError',
    'MediaFileNotFoundError',
    'UploadCoordinator',
    'UploadConfig',
    'UploadMethod',
    'UploadProgress',
    'PageEnumerator',
    'PageCursor',
    'PagingProgress',
    'normalize_filter',
    'Batch',
    'split_batches',
    'Album',
    'AlbumPosition',
    'MediaItem',
    'UploadItem',
    'Filter',
    'ContentFilter',
    'DateFilter',
    'Date',
    'DateRange',
    'MediaTypeFilter',
    'FeatureFilter',
    'ContentCategory',
    'MediaType',
    'Feature',
    'PositionType',
    'setup_logging',
]
