"""
File validation and reading services.

Single Responsibility: Each class handles one specific task.
"""
from pathlib import Path
from typing import Tuple, Optional, Union

import aiofiles

from ..models import UploadConfig
from ...exceptions import MediaFileNotFoundError, ValidationError
from ...logging import get_logger
from ...media_types import MediaCategory, classify


class FileValidator:
    """
    Validates files before upload.

    Responsibilities:
    - Check file existence
    - Verify file is not a directory or empty
    - Resolve mime type and category from the extension
    - Enforce the per-category size ceiling
    """

    def __init__(self, config: Optional[UploadConfig] = None):
        self._config = config or UploadConfig()

    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int, str, MediaCategory]:
        """
        Validate a file for upload.

        Args:
            file_path: Path to the file

        Returns:
            Tuple of (validated Path, size in bytes, mime type, category)

        Raises:
            MediaFileNotFoundError: If file doesn't exist
            ValidationError: If the path is not a regular file, is empty,
                has an unsupported extension or is too large
        """
        if file_path is None or str(file_path) == '':
            raise ValidationError("file path cannot be empty")
        path = Path(file_path) if isinstance(file_path, str) else file_path

        if not path.exists():
            raise MediaFileNotFoundError(f"File not found: {path}")

        if not path.is_file():
            raise ValidationError(f"Path is not a file: {path}")

        classified = classify(path)
        if classified is None:
            raise ValidationError(
                f"Unsupported media type for '{path.name}' (extension '{path.suffix or '<none>'}')"
            )
        mime_type, category = classified

        file_size = path.stat().st_size
        self.validate_size(file_size, self._config.max_bytes_for(category), category)

        return path, file_size, mime_type, category

    def validate_size(
        self,
        file_size: int,
        max_size: Optional[int] = None,
        category: Optional[MediaCategory] = None
    ) -> None:
        """
        Validate file size.

        Raises:
            ValidationError: If file is empty or exceeds max size
        """
        if file_size < 1:
            raise ValidationError("Cannot upload empty file")

        if max_size and file_size > max_size:
            kind = category.value if category else 'file'
            raise ValidationError(
                f"{kind} size {file_size} exceeds maximum {max_size}"
            )


class ChunkCursor:
    """
    Forward-only asynchronous file reader.

    Uses aiofiles for non-blocking I/O. The handle is opened lazily on the
    first read and never rewound.

    Example:
        >>> cursor = ChunkCursor(path)
        >>> try:
        ...     chunk = await cursor.read(262144)
        ... finally:
        ...     await cursor.close()
    """

    def __init__(self, file_path: Path):
        self._logger = get_logger('gphotospy.upload.file')
        self._file_path = file_path
        self._file_handle = None
        self._position = 0

    @property
    def position(self) -> int:
        """Bytes consumed so far."""
        return self._position

    async def _open(self):
        if self._file_handle is None:
            self._file_handle = await aiofiles.open(self._file_path, 'rb')
        return self._file_handle

    async def read(self, size: int) -> bytes:
        """
        Read the next chunk.

        Args:
            size: Maximum number of bytes

        Returns:
            Up to ``size`` bytes, empty at end of file
        """
        handle = await self._open()
        data = await handle.read(size)
        self._logger.debug(f"Read chunk: {self._position}-{self._position + len(data)} ({len(data)} bytes)")
        self._position += len(data)
        return data

    async def read_all(self) -> bytes:
        handle = await self._open()
        data = await handle.read()
        self._position += len(data)
        return data

    async def close(self) -> None:
        """Close the file handle if open."""
        if self._file_handle is not None:
            await self._file_handle.close()
            self._file_handle = None

    async def __aenter__(self) -> 'ChunkCursor':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
