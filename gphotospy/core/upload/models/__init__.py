"""Upload models."""
from .upload_models import (
    UploadMethod,
    UploadConfig,
    UploadSession,
    UploadProgress,
    MiB,
    GiB
)

__all__ = [
    'UploadMethod',
    'UploadConfig',
    'UploadSession',
    'UploadProgress',
    'MiB',
    'GiB'
]
