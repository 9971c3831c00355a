"""
Data models for upload module.

Uses dataclasses for the per-upload state and progress notifications.
"""
import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from ...media_types import MediaCategory

MiB = 1024 * 1024
GiB = 1024 * MiB


class UploadMethod(str, Enum):
    """
    How file bytes are sent to the upload endpoint.

    SIMPLE sends everything in one raw request. RESUMABLE_SINGLE opens an
    upload session and sends the whole file in one request.
    RESUMABLE_CHUNKED sends the file in server-sized chunks with retry.
    """
    SIMPLE = 'simple'
    RESUMABLE_SINGLE = 'resumable_single'
    RESUMABLE_CHUNKED = 'resumable_chunked'


@dataclass
class UploadConfig:
    """
    Upload policy.

    Attributes:
        retry_limit: Attempts per chunk before the upload is abandoned
        max_image_bytes: Largest accepted image (200 MiB)
        max_video_bytes: Largest accepted video (10 GiB)
    """
    retry_limit: int = 10
    max_image_bytes: int = 200 * MiB
    max_video_bytes: int = 10 * GiB

    def __post_init__(self):
        if self.retry_limit < 1:
            raise ValueError("retry_limit must be >= 1")

    def max_bytes_for(self, category: MediaCategory) -> int:
        if category == MediaCategory.VIDEO:
            return self.max_video_bytes
        return self.max_image_bytes


@dataclass
class UploadSession:
    """
    Mutable state of one upload call.

    Attributes:
        file_path: Source file
        size: Total size in bytes
        mime_type: Resolved mime type, sent as the upload content type
        category: Image or video
        method: Chosen upload method
        session_url: Upload URL handed out by the start handshake
        chunk_granularity: Server-declared chunk size in bytes
        offset: Bytes acknowledged by the server so far
        attempt: Attempts made on the current chunk
        batch_index: Index of the chunk being sent
        upload_token: Token returned once the upload is finalized
    """
    file_path: Path
    size: int
    mime_type: str
    category: MediaCategory
    method: UploadMethod = UploadMethod.RESUMABLE_CHUNKED
    session_url: Optional[str] = None
    chunk_granularity: Optional[int] = None
    offset: int = 0
    attempt: int = 0
    batch_index: int = 0
    upload_token: Optional[str] = None

    @property
    def file_name(self) -> str:
        return self.file_path.name

    @property
    def batch_count(self) -> int:
        if not self.chunk_granularity:
            return 1
        return math.ceil(self.size / self.chunk_granularity)

    @property
    def is_last_chunk(self) -> bool:
        return self.batch_index + 1 >= self.batch_count

    def begin_attempt(self) -> int:
        """Count one more attempt on the current chunk."""
        self.attempt += 1
        return self.attempt

    def acknowledge(self, sent: int) -> None:
        """Record a chunk the server accepted and move to the next one."""
        self.attempt = 0
        self.offset += sent
        self.batch_index += 1


@dataclass(frozen=True)
class UploadProgress:
    """
    Upload progress information, emitted after each accepted chunk.

    Attributes:
        file_name: Name of the file being uploaded
        total_bytes: Total file size
        batch_index: Index of the chunk just accepted
        uploaded_bytes: Bytes acknowledged so far
        batch_size: Bytes sent in this chunk
    """
    file_name: str
    total_bytes: int
    batch_index: int
    uploaded_bytes: int
    batch_size: int

    @property
    def percentage(self) -> float:
        """Returns upload progress as percentage."""
        if self.total_bytes == 0:
            return 0.0
        return (self.uploaded_bytes / self.total_bytes) * 100

    @property
    def is_complete(self) -> bool:
        return self.uploaded_bytes >= self.total_bytes
