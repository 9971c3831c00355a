"""
Protocol definitions for upload module.

Defines the interfaces the coordinator depends on, so tests can hand it
scripted fakes instead of a live transport or real files.
"""
from pathlib import Path
from typing import Any, Mapping, Optional, Protocol, Tuple, Union

from ..media_types import MediaCategory


class TransportProtocol(Protocol):
    """The subset of AsyncTransport used by uploads."""

    async def send(
        self,
        method: str,
        url: str,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        parse: Any = None,
        params: Any = None
    ) -> Any:
        """
        Send one request.

        Returns:
            A TransportResponse-like object (status, headers, result, error)
        """
        ...


class ChunkReaderProtocol(Protocol):
    """Forward-only reader over the file being uploaded."""

    async def read(self, size: int) -> bytes:
        """Read the next ``size`` bytes (fewer at end of file)."""
        ...

    async def read_all(self) -> bytes:
        """Read everything left in the file."""
        ...

    async def close(self) -> None:
        ...


class FileValidatorProtocol(Protocol):
    """Protocol for file validation operations."""

    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int, str, MediaCategory]:
        """
        Validate a file for upload.

        Args:
            file_path: Path to the file

        Returns:
            Tuple of (path, size, mime type, category)

        Raises:
            ValidationError: If the file cannot be uploaded
        """
        ...
