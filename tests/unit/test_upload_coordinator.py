"""Tests for the upload coordinator."""
import pytest

from gphotospy.core.api import RemoteApiError
from gphotospy.core.exceptions import ProtocolViolation, ValidationError
from gphotospy.core.upload import UploadConfig, UploadCoordinator, UploadMethod
from gphotospy.core.upload.models import GiB

SESSION_URL = 'https://photoslibrary.googleapis.com/v1/uploads?upload_id=abc&upload_protocol=resumable'


def start_headers(granularity='100'):
    headers = {
        'X-Goog-Upload-URL': SESSION_URL,
        'X-Goog-Upload-Status': 'active',
    }
    if granularity is not None:
        headers['X-Goog-Upload-Chunk-Granularity'] = granularity
    return headers


class TestChunkedUpload:
    """Resumable chunked uploads."""

    @pytest.mark.asyncio
    async def test_transient_chunk_failure(self, transport, make_media_file):
        """Second chunk fails once, is queried and resent from the same offset."""
        path = make_media_file('photo.jpg', 250)
        transport.queue(200, '', start_headers('100'))
        transport.queue(200, '')                                  # chunk 0
        transport.queue(503, 'try again')                         # chunk 1 fails
        transport.queue(200, '', {'X-Goog-Upload-Status': 'active',
                                  'X-Goog-Upload-Size-Received': '100'})  # query
        transport.queue(200, '')                                  # chunk 1 resent
        transport.queue(200, 'UPLOAD-TOKEN')                      # chunk 2 finalize

        events = []
        coordinator = UploadCoordinator(transport)
        token = await coordinator.upload_media(path, on_progress=events.append)

        assert token == 'UPLOAD-TOKEN'
        assert [(e.batch_index, e.batch_size, e.uploaded_bytes) for e in events] == [
            (0, 100, 100), (1, 100, 200), (2, 50, 250)
        ]
        assert transport.commands() == [
            'start', 'upload', 'upload', 'query', 'upload', 'upload, finalize'
        ]
        assert transport.commands().count('query') == 1

        chunks = [c for c in transport.calls if c.headers.get('X-Goog-Upload-Command', '').startswith('upload')]
        assert [c.headers['X-Goog-Upload-Offset'] for c in chunks] == ['0', '100', '100', '200']
        assert chunks[1].body == chunks[2].body
        data = path.read_bytes()
        assert [c.body for c in chunks] == [data[0:100], data[100:200], data[100:200], data[200:250]]

    @pytest.mark.asyncio
    async def test_start_handshake_headers(self, transport, make_media_file):
        path = make_media_file('my holiday.jpg', 10)
        transport.queue(200, '', start_headers('262144'))
        transport.queue(200, 'TOKEN')

        await UploadCoordinator(transport).upload_media(path)

        start = transport.calls[0]
        assert start.method == 'POST'
        assert start.url == 'uploads'
        assert start.body == b''
        assert start.headers == {
            'X-Goog-Upload-Content-Type': 'image/jpeg',
            'X-Goog-Upload-Command': 'start',
            'X-Goog-Upload-File-Name': 'my%20holiday.jpg',
            'X-Goog-Upload-Protocol': 'resumable',
            'X-Goog-Upload-Raw-Size': '10',
        }
        finalize = transport.calls[1]
        assert finalize.url == SESSION_URL
        assert finalize.headers['X-Goog-Upload-Command'] == 'upload, finalize'

    @pytest.mark.asyncio
    async def test_retry_limit_returns_none(self, scripted_transport, make_media_file):
        """A chunk that never succeeds is tried retry_limit times, then abandoned."""
        path = make_media_file('photo.jpg', 250)

        def handler(request):
            command = request.headers.get('X-Goog-Upload-Command')
            if command == 'start':
                return 200, start_headers('100'), ''
            if command == 'query':
                return 200, {'X-Goog-Upload-Status': 'active'}, ''
            return 500, {}, 'broken'

        transport = scripted_transport(handler)
        token = await UploadCoordinator(transport).upload_media(path)

        assert token is None
        assert transport.commands().count('upload') == 10
        assert transport.commands().count('query') == 10
        offsets = {c.headers['X-Goog-Upload-Offset'] for c in transport.calls if 'X-Goog-Upload-Offset' in c.headers}
        assert offsets == {'0'}

    @pytest.mark.asyncio
    async def test_custom_retry_limit(self, scripted_transport, make_media_file):
        path = make_media_file('photo.jpg', 50)

        def handler(request):
            if request.headers.get('X-Goog-Upload-Command') == 'start':
                return 200, start_headers('100'), ''
            return 500, {}, ''

        transport = scripted_transport(handler)
        token = await UploadCoordinator(transport, UploadConfig(retry_limit=3)).upload_media(path)

        assert token is None
        assert transport.commands().count('upload, finalize') == 3

    @pytest.mark.asyncio
    async def test_progress_callback_and_emitter(self, transport, make_media_file):
        path = make_media_file('photo.jpg', 150)
        transport.queue(200, '', start_headers('100'))
        transport.queue(200, '')
        transport.queue(200, 'TOKEN')
        seen = []

        coordinator = UploadCoordinator(transport, progress_callback=seen.append)
        await coordinator.upload_media(path)

        assert [p.uploaded_bytes for p in seen] == [100, 150]
        assert seen[-1].is_complete

    @pytest.mark.asyncio
    async def test_missing_granularity(self, transport, make_media_file):
        path = make_media_file('photo.jpg', 10)
        transport.queue(200, '', start_headers(None))

        with pytest.raises(ProtocolViolation) as exc_info:
            await UploadCoordinator(transport).upload_media(path)
        assert exc_info.value.header == 'X-Goog-Upload-Chunk-Granularity'

    @pytest.mark.asyncio
    @pytest.mark.parametrize("granularity", ['0', '-5'])
    async def test_non_positive_granularity(self, transport, make_media_file, granularity):
        path = make_media_file('photo.jpg', 10)
        transport.queue(200, '', start_headers(granularity))

        with pytest.raises(ProtocolViolation):
            await UploadCoordinator(transport).upload_media(path)

    @pytest.mark.asyncio
    async def test_missing_upload_url(self, transport, make_media_file):
        path = make_media_file('photo.jpg', 10)
        transport.queue(200, '', {'X-Goog-Upload-Chunk-Granularity': '100'})

        with pytest.raises(ProtocolViolation) as exc_info:
            await UploadCoordinator(transport).upload_media(path)
        assert exc_info.value.header == 'X-Goog-Upload-URL'

    @pytest.mark.asyncio
    async def test_start_remote_error(self, transport, make_media_file):
        path = make_media_file('photo.jpg', 10)
        transport.queue(401, {'error': {'code': 401, 'message': 'bad token', 'status': 'UNAUTHENTICATED'}})

        with pytest.raises(RemoteApiError) as exc_info:
            await UploadCoordinator(transport).upload_media(path)
        assert exc_info.value.status == 'UNAUTHENTICATED'
        assert len(transport.calls) == 1


class TestPreconditions:
    """Validation happens before any request."""

    @pytest.mark.asyncio
    async def test_oversized_video_no_network(self, transport, tmp_path):
        path = tmp_path / 'huge.mp4'
        with open(path, 'wb') as f:
            f.truncate(15 * GiB)

        with pytest.raises(ValidationError):
            await UploadCoordinator(transport).upload_media(path)
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_missing_file(self, transport, tmp_path):
        with pytest.raises(FileNotFoundError):
            await UploadCoordinator(transport).upload_media(tmp_path / 'gone.jpg')
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_empty_file(self, transport, make_media_file):
        with pytest.raises(ValidationError):
            await UploadCoordinator(transport).upload_media(make_media_file('empty.jpg', 0))
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_unsupported_extension(self, transport, make_media_file):
        with pytest.raises(ValidationError):
            await UploadCoordinator(transport).upload_media(make_media_file('doc.pdf', 10))
        assert transport.calls == []


class TestSimpleUpload:

    @pytest.mark.asyncio
    async def test_raw_protocol(self, transport, make_media_file):
        path = make_media_file('clip.mp4', 64)
        transport.queue(200, 'SIMPLE-TOKEN')

        token = await UploadCoordinator(transport).upload_media(path, UploadMethod.SIMPLE)

        assert token == 'SIMPLE-TOKEN'
        call = transport.calls[0]
        assert call.url == 'uploads'
        assert call.body == path.read_bytes()
        assert call.headers == {
            'X-Goog-Upload-Content-Type': 'video/mp4',
            'X-Goog-Upload-Protocol': 'raw',
        }

    @pytest.mark.asyncio
    async def test_remote_error(self, transport, make_media_file):
        transport.queue(400, {'error': {'code': 400, 'message': 'nope', 'status': 'INVALID_ARGUMENT'}})

        with pytest.raises(RemoteApiError):
            await UploadCoordinator(transport).upload_media(make_media_file(), UploadMethod.SIMPLE)


class TestResumableSingleUpload:

    @pytest.mark.asyncio
    async def test_single_request(self, transport, make_media_file):
        path = make_media_file('photo.png', 30)
        transport.queue(200, '', start_headers(None))
        transport.queue(200, 'SINGLE-TOKEN')

        token = await UploadCoordinator(transport).upload_media(path, UploadMethod.RESUMABLE_SINGLE)

        assert token == 'SINGLE-TOKEN'
        upload = transport.calls[1]
        assert upload.body == path.read_bytes()
        assert upload.headers == {
            'X-Goog-Upload-Offset': '0',
            'X-Goog-Upload-Command': 'upload, finalize',
        }

    @pytest.mark.asyncio
    async def test_failure_queries_once(self, transport, make_media_file):
        path = make_media_file('photo.png', 30)
        transport.queue(200, '', start_headers('100'))
        transport.queue(500, 'interrupted')
        transport.queue(200, 'QUERIED-TOKEN', {'X-Goog-Upload-Status': 'final', 'X-Goog-Upload-Size-Received': '30'})

        token = await UploadCoordinator(transport).upload_media(path, UploadMethod.RESUMABLE_SINGLE)

        assert token == 'QUERIED-TOKEN'
        assert transport.commands() == ['start', 'upload, finalize', 'query']
        assert transport.calls[2].body is None

    @pytest.mark.asyncio
    async def test_failed_query_raises(self, transport, make_media_file):
        transport.queue(200, '', start_headers('100'))
        transport.queue(500, 'interrupted')
        transport.queue(404, {'error': {'code': 404, 'message': 'session gone', 'status': 'NOT_FOUND'}})

        with pytest.raises(RemoteApiError):
            await UploadCoordinator(transport).upload_media(make_media_file(), UploadMethod.RESUMABLE_SINGLE)
