"""Tests for the async HTTP transport."""
import json

import aiohttp
import pytest
from unittest.mock import AsyncMock, MagicMock

from gphotospy.core.api import (
    APIConfig,
    AsyncTransport,
    RemoteApiError,
    RetryConfig,
    StaticTokenProvider,
    TransportResponse,
)
from gphotospy.core.exceptions import TransportFailure
from gphotospy.core.models import Album


def make_session(*replies):
    """
    Build a mock aiohttp session.

    Each reply is (status, headers, body bytes) or an exception to raise
    from ``session.request``.
    """
    effects = []
    for reply in replies:
        if isinstance(reply, BaseException):
            effects.append(reply)
            continue
        status, headers, body = reply
        response = MagicMock()
        response.status = status
        response.headers = headers
        response.read = AsyncMock(return_value=body)
        context = MagicMock()
        context.__aenter__ = AsyncMock(return_value=response)
        context.__aexit__ = AsyncMock(return_value=False)
        effects.append(context)

    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()
    session.request = MagicMock(side_effect=effects)
    return session


class TestTransportResponse:

    def test_ok_range(self):
        assert TransportResponse(200, {}).ok
        assert TransportResponse(204, {}).ok
        assert not TransportResponse(308, {}).ok
        assert not TransportResponse(500, {}).ok

    def test_header_case_insensitive(self):
        response = TransportResponse(200, {'X-Goog-Upload-URL': 'https://upload'})

        assert response.header('x-goog-upload-url') == 'https://upload'
        assert response.header('missing') is None


class TestAsyncTransport:

    @pytest.fixture
    def config(self):
        return APIConfig(retry=RetryConfig(max_retries=1, base_delay=0, max_delay=0))

    def test_resolve_url(self):
        transport = AsyncTransport()

        assert transport.resolve_url('albums') == 'https://photoslibrary.googleapis.com/v1/albums'
        assert transport.resolve_url('https://upload.example/x') == 'https://upload.example/x'

    @pytest.mark.asyncio
    async def test_json_body_and_auth_header(self, config):
        session = make_session((200, {}, json.dumps({'id': 'a1', 'title': 'T'}).encode()))
        transport = AsyncTransport(StaticTokenProvider('tok'), config, session=session)

        response = await transport.send('POST', 'albums', body={'album': {'title': 'T'}}, parse=Album.from_dict)

        assert response.ok
        assert response.result == Album(id='a1', title='T')
        args, kwargs = session.request.call_args
        assert args == ('POST', 'https://photoslibrary.googleapis.com/v1/albums')
        assert json.loads(kwargs['data']) == {'album': {'title': 'T'}}
        assert kwargs['headers']['Authorization'] == 'Bearer tok'
        assert kwargs['headers']['Content-Type'] == 'application/json'

    @pytest.mark.asyncio
    async def test_bytes_body(self, config):
        session = make_session((200, {}, b'upload-token'))
        transport = AsyncTransport(config=config, session=session)

        response = await transport.send('POST', 'uploads', body=b'\x00\x01', parse=str)

        assert response.result == 'upload-token'
        _, kwargs = session.request.call_args
        assert kwargs['data'] == b'\x00\x01'
        assert kwargs['headers']['Content-Type'] == 'application/octet-stream'
        assert 'Authorization' not in kwargs['headers']

    @pytest.mark.asyncio
    async def test_empty_success_body(self, config):
        transport = AsyncTransport(config=config, session=make_session((200, {}, b'')))

        response = await transport.send('POST', 'albums/a:batchAddMediaItems', body={'mediaItemIds': ['m']})

        assert response.ok
        assert response.result is None
        assert response.error is None

    @pytest.mark.asyncio
    async def test_unparseable_success_body(self, config):
        transport = AsyncTransport(config=config, session=make_session((200, {}, b'<html>')))

        response = await transport.send('GET', 'albums')

        assert response.result is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [['not', 'an', 'object'], {'title': 'no id'}])
    async def test_wrongly_shaped_success_body(self, config, payload):
        session = make_session((200, {}, json.dumps(payload).encode()))
        transport = AsyncTransport(config=config, session=session)

        response = await transport.send('GET', 'albums/a1', parse=Album.from_dict)

        assert response.ok
        assert response.result is None
        assert response.error is None

    @pytest.mark.asyncio
    async def test_structured_error(self, config):
        body = {'error': {'code': 400, 'message': 'Invalid page size', 'status': 'INVALID_ARGUMENT'}}
        transport = AsyncTransport(config=config, session=make_session((400, {}, json.dumps(body).encode())))

        response = await transport.send('GET', 'albums')

        assert not response.ok
        assert response.error.status == 'INVALID_ARGUMENT'
        with pytest.raises(RemoteApiError) as exc_info:
            response.raise_for_error()
        assert exc_info.value.code == 400
        assert 'Invalid page size' in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_plain_text_error_is_synthesized(self, config):
        transport = AsyncTransport(config=config, session=make_session((503, {}, b'backend unavailable')))

        response = await transport.send('POST', 'https://upload/session', body=b'x', parse=str)

        assert response.error.code == 503
        assert response.error.status == 'UNAVAILABLE'
        assert response.error.message == 'backend unavailable'

    @pytest.mark.asyncio
    async def test_response_headers_case_insensitive(self, config):
        session = make_session((200, {'x-goog-upload-status': 'active'}, b''))
        transport = AsyncTransport(config=config, session=session)

        response = await transport.send('POST', 'uploads', body=b'')

        assert response.header('X-Goog-Upload-Status') == 'active'

    @pytest.mark.asyncio
    async def test_connection_error_retried(self, config):
        session = make_session(aiohttp.ClientConnectionError('reset'), (200, {}, b'{}'))
        transport = AsyncTransport(config=config, session=session)

        response = await transport.send('GET', 'albums')

        assert response.ok
        assert session.request.call_count == 2

    @pytest.mark.asyncio
    async def test_connection_error_raises_transport_failure(self, config):
        error = aiohttp.ClientConnectionError('reset')
        session = make_session(error, aiohttp.ClientConnectionError('reset again'))
        transport = AsyncTransport(config=config, session=session)

        with pytest.raises(TransportFailure) as exc_info:
            await transport.send('GET', 'albums')
        assert isinstance(exc_info.value.__cause__, aiohttp.ClientError)
        assert exc_info.value.method == 'GET'

    @pytest.mark.asyncio
    async def test_external_session_not_closed(self, config):
        session = make_session()
        transport = AsyncTransport(config=config, session=session)

        await transport.close()

        session.close.assert_not_called()
