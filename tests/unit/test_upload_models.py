"""Tests for upload models."""
import pytest
from pathlib import Path

from gphotospy.core.media_types import MediaCategory
from gphotospy.core.upload.models import (
    GiB,
    MiB,
    UploadConfig,
    UploadMethod,
    UploadProgress,
    UploadSession,
)


class TestUploadConfig:
    """Test suite for UploadConfig."""

    def test_defaults(self):
        config = UploadConfig()

        assert config.retry_limit == 10
        assert config.max_image_bytes == 200 * MiB
        assert config.max_video_bytes == 10 * GiB

    def test_max_bytes_for(self):
        config = UploadConfig(max_image_bytes=1, max_video_bytes=2)

        assert config.max_bytes_for(MediaCategory.IMAGE) == 1
        assert config.max_bytes_for(MediaCategory.VIDEO) == 2

    def test_invalid_retry_limit(self):
        with pytest.raises(ValueError):
            UploadConfig(retry_limit=0)


class TestUploadSession:
    """Test suite for UploadSession state transitions."""

    @pytest.fixture
    def session(self):
        return UploadSession(
            file_path=Path('/media/clip.mp4'),
            size=250,
            mime_type='video/mp4',
            category=MediaCategory.VIDEO,
            chunk_granularity=100
        )

    def test_initial_state(self, session):
        assert session.method == UploadMethod.RESUMABLE_CHUNKED
        assert session.offset == 0
        assert session.attempt == 0
        assert session.batch_index == 0
        assert session.file_name == 'clip.mp4'

    def test_batch_count_rounds_up(self, session):
        assert session.batch_count == 3

    def test_batch_count_exact_multiple(self, session):
        session.size = 300
        assert session.batch_count == 3

    def test_begin_attempt_counts(self, session):
        assert session.begin_attempt() == 1
        assert session.begin_attempt() == 2
        assert session.attempt == 2

    def test_acknowledge_advances(self, session):
        session.begin_attempt()
        session.begin_attempt()
        session.acknowledge(100)

        assert session.attempt == 0
        assert session.offset == 100
        assert session.batch_index == 1

    def test_is_last_chunk(self, session):
        assert not session.is_last_chunk
        session.acknowledge(100)
        session.acknowledge(100)
        assert session.is_last_chunk

    def test_without_granularity_single_batch(self, session):
        session.chunk_granularity = None

        assert session.batch_count == 1
        assert session.is_last_chunk


class TestUploadProgress:
    """Test suite for UploadProgress."""

    def test_percentage(self):
        progress = UploadProgress('a.jpg', total_bytes=200, batch_index=0, uploaded_bytes=50, batch_size=50)

        assert progress.percentage == 25.0
        assert not progress.is_complete

    def test_complete(self):
        progress = UploadProgress('a.jpg', total_bytes=200, batch_index=1, uploaded_bytes=200, batch_size=100)

        assert progress.percentage == 100.0
        assert progress.is_complete

    def test_zero_total(self):
        assert UploadProgress('a.jpg', 0, 0, 0, 0).percentage == 0.0

    def test_method_values(self):
        assert UploadMethod('simple') is UploadMethod.SIMPLE
        assert UploadMethod.RESUMABLE_CHUNKED.value == 'resumable_chunked'
