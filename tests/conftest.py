"""Pytest fixtures for gphotospy tests."""
import json
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
from multidict import CIMultiDict

from gphotospy.core.api.transport import AsyncTransport

Reply = Tuple[int, Dict[str, str], Any]


@dataclass
class SentRequest:
    """One request captured by ScriptedTransport."""
    method: str
    url: str
    body: Any
    headers: Dict[str, str]
    params: Any


class ScriptedTransport:
    """
    Transport double answering from canned replies.

    Replies go through the real AsyncTransport response decoding, so
    ``parse`` behaves exactly as it does against the network.
    """

    def __init__(self, handler: Optional[Callable[[SentRequest], Reply]] = None):
        self.calls: List[SentRequest] = []
        self._replies: deque = deque()
        self._handler = handler
        self._decoder = AsyncTransport()

    def queue(self, status: int = 200, body: Any = b'', headers: Optional[Dict[str, str]] = None) -> 'ScriptedTransport':
        """Append a reply; dict/list bodies are JSON encoded."""
        self._replies.append((status, headers or {}, body))
        return self

    @staticmethod
    def _encode(body: Any) -> bytes:
        if isinstance(body, (dict, list)):
            return json.dumps(body).encode()
        if isinstance(body, str):
            return body.encode()
        return body or b''

    async def send(self, method, url, body=None, headers=None, parse=None, params=None):
        request = SentRequest(method, url, body, dict(headers or {}), params)
        self.calls.append(request)
        if self._handler is not None:
            status, reply_headers, reply_body = self._handler(request)
        elif self._replies:
            status, reply_headers, reply_body = self._replies.popleft()
        else:
            raise AssertionError(f"Unexpected request: {method} {url}")
        return self._decoder._build_response(
            status, CIMultiDict(reply_headers), self._encode(reply_body), parse
        )

    def commands(self) -> List[Optional[str]]:
        """The X-Goog-Upload-Command of every captured request."""
        return [call.headers.get('X-Goog-Upload-Command') for call in self.calls]


@pytest.fixture
def transport():
    """Scripted transport with an empty reply queue."""
    return ScriptedTransport()


@pytest.fixture
def scripted_transport():
    """The ScriptedTransport class, for tests that need a handler."""
    return ScriptedTransport


@pytest.fixture
def make_media_file(tmp_path):
    """Factory creating a file of ``size`` bytes under tmp_path."""
    def _make(name: str = 'photo.jpg', size: int = 250) -> Path:
        path = tmp_path / name
        path.write_bytes(bytes(i % 256 for i in range(size)))
        return path
    return _make


@pytest.fixture
def album_payload():
    """Factory for album wire objects."""
    def _album(album_id: str, title: Optional[str] = None) -> Dict[str, Any]:
        return {
            'id': album_id,
            'title': title or f'Album {album_id}',
            'productUrl': f'https://photos.google.com/lr/album/{album_id}',
            'mediaItemsCount': '3',
            'isWriteable': True,
        }
    return _album


@pytest.fixture
def media_item_payload():
    """Factory for media item wire objects."""
    def _item(item_id: str, created: str = '2021-06-01T10:00:00Z') -> Dict[str, Any]:
        return {
            'id': item_id,
            'filename': f'{item_id}.jpg',
            'mimeType': 'image/jpeg',
            'baseUrl': f'https://lh3.googleusercontent.com/{item_id}',
            'mediaMetadata': {
                'creationTime': created,
                'width': '4032',
                'height': '3024',
                'photo': {'cameraMake': 'Pixel'},
            },
        }
    return _item
