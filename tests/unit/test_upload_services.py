"""Tests for upload services."""
import os
import tempfile
from pathlib import Path

import pytest

from gphotospy.core.exceptions import MediaFileNotFoundError, ValidationError
from gphotospy.core.media_types import MediaCategory
from gphotospy.core.upload.models import GiB, UploadConfig
from gphotospy.core.upload.services import ChunkCursor, FileValidator


class TestFileValidator:
    """Test suite for FileValidator."""

    @pytest.fixture
    def validator(self):
        """Create validator instance."""
        return FileValidator()

    @pytest.fixture
    def temp_file(self):
        """Create temporary image file for testing."""
        fd, path = tempfile.mkstemp(suffix='.jpg')
        os.write(fd, b"test content")
        os.close(fd)
        yield Path(path)
        os.unlink(path)

    def test_validate_existing_file(self, validator, temp_file):
        """Test validating existing file."""
        path, size, mime_type, category = validator.validate(temp_file)

        assert path == temp_file
        assert size == 12  # "test content"
        assert mime_type == 'image/jpeg'
        assert category == MediaCategory.IMAGE

    def test_validate_string_path(self, validator, temp_file):
        """Test validating string path."""
        path, _, _, _ = validator.validate(str(temp_file))

        assert path == temp_file

    def test_validate_nonexistent_file(self, validator):
        """Missing files raise an error that is both kinds of exception."""
        with pytest.raises(MediaFileNotFoundError) as exc_info:
            validator.validate(Path("/nonexistent/file.jpg"))
        assert isinstance(exc_info.value, FileNotFoundError)
        assert isinstance(exc_info.value, ValidationError)

    def test_validate_directory(self, validator):
        """Test validating directory raises error."""
        with pytest.raises(ValidationError):
            validator.validate(Path(tempfile.gettempdir()))

    def test_validate_empty_file(self, validator, make_media_file):
        path = make_media_file('empty.png', 0)

        with pytest.raises(ValidationError, match="empty"):
            validator.validate(path)

    def test_validate_unknown_extension(self, validator, make_media_file):
        path = make_media_file('notes.txt', 10)

        with pytest.raises(ValidationError, match="Unsupported"):
            validator.validate(path)

    def test_validate_missing_extension(self, validator, make_media_file):
        path = make_media_file('IMG_0001', 10)

        with pytest.raises(ValidationError, match="none"):
            validator.validate(path)

    def test_validate_image_too_large(self, make_media_file):
        validator = FileValidator(UploadConfig(max_image_bytes=100))
        path = make_media_file('big.jpg', 101)

        with pytest.raises(ValidationError, match="exceeds"):
            validator.validate(path)

    def test_validate_video_uses_video_limit(self, make_media_file):
        validator = FileValidator(UploadConfig(max_image_bytes=10, max_video_bytes=1000))
        path = make_media_file('clip.mov', 500)

        _, size, mime_type, category = validator.validate(path)

        assert size == 500
        assert mime_type == 'video/quicktime'
        assert category == MediaCategory.VIDEO

    def test_validate_oversized_video(self, validator, tmp_path):
        """A 15 GiB sparse video is rejected on size alone."""
        path = tmp_path / 'huge.mp4'
        with open(path, 'wb') as f:
            f.truncate(15 * GiB)

        with pytest.raises(ValidationError, match="exceeds"):
            validator.validate(path)

    def test_validate_size_ok(self, validator):
        """Test size validation passes."""
        validator.validate_size(1000, max_size=2000)

    def test_validate_size_empty(self, validator):
        """Test empty file raises error."""
        with pytest.raises(ValueError, match="empty"):
            validator.validate_size(0)


class TestChunkCursor:
    """Test suite for ChunkCursor."""

    @pytest.fixture
    def temp_file(self):
        """Create temporary file with known content."""
        fd, path = tempfile.mkstemp(suffix='.jpg')
        os.write(fd, bytes(range(250)))
        os.close(fd)
        yield Path(path)
        os.unlink(path)

    @pytest.mark.asyncio
    async def test_reads_forward(self, temp_file):
        cursor = ChunkCursor(temp_file)
        try:
            first = await cursor.read(100)
            second = await cursor.read(100)
            third = await cursor.read(100)
            rest = await cursor.read(100)
        finally:
            await cursor.close()

        assert first == bytes(range(100))
        assert second == bytes(range(100, 200))
        assert third == bytes(range(200, 250))
        assert rest == b''
        assert cursor.position == 250

    @pytest.mark.asyncio
    async def test_read_all(self, temp_file):
        async with ChunkCursor(temp_file) as cursor:
            data = await cursor.read_all()

        assert data == bytes(range(250))

    @pytest.mark.asyncio
    async def test_close_without_read(self, temp_file):
        cursor = ChunkCursor(temp_file)

        await cursor.close()

        assert cursor.position == 0
