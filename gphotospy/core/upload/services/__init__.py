"""Upload services module."""
from .file_service import FileValidator, ChunkCursor

__all__ = [
    'FileValidator',
    'ChunkCursor',
]
