"""
Upload module for Google Photos media uploads.

Provides the resumable upload engine: simple, resumable single-request and
resumable chunked uploads over the shared transport.
"""
from .coordinator import UploadCoordinator
from .models import UploadMethod, UploadConfig, UploadSession, UploadProgress
from .protocols import (
    TransportProtocol,
    ChunkReaderProtocol,
    FileValidatorProtocol
)
from .services import FileValidator, ChunkCursor

__all__ = [
    # Main classes
    'UploadCoordinator',
    'FileValidator',
    'ChunkCursor',

    # Models
    'UploadMethod',
    'UploadConfig',
    'UploadSession',
    'UploadProgress',

    # Protocols
    'TransportProtocol',
    'ChunkReaderProtocol',
    'FileValidatorProtocol',
]
