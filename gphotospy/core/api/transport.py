"""
Async HTTP transport.

Issues single requests against the Photos Library API and the upload
endpoints, and hands back status, headers and a decoded body or error.
"""
import json
import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple, Union

import aiohttp
from multidict import CIMultiDict

from .auth import TokenProvider
from .config import APIConfig
from .errors import ErrorBody, RemoteApiError
from ..exceptions import TransportFailure
from ..logging import get_logger

Body = Union[bytes, Dict[str, Any], list, None]
Params = Union[Mapping[str, Any], Sequence[Tuple[str, Any]], None]
Parser = Union[type, Callable[[Any], Any], None]


@dataclass
class TransportResponse:
    """
    Result of one HTTP exchange.

    Attributes:
        status: HTTP status code
        headers: Response headers (case-insensitive)
        result: Decoded body on success, None if absent or unparseable
        error: Decoded remote error on failure
    """
    status: int
    headers: Mapping[str, str]
    result: Any = None
    error: Optional[ErrorBody] = None

    def __post_init__(self):
        if not isinstance(self.headers, CIMultiDict):
            self.headers = CIMultiDict(self.headers)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        return self.headers.get(name)

    def raise_for_error(self) -> None:
        """Raise RemoteApiError if the remote side returned an error payload."""
        if self.error is not None:
            raise RemoteApiError(self.error)


class AsyncTransport:
    """
    Asynchronous HTTP transport.

    Features:
    - JSON or raw byte request bodies
    - Bearer token injection from a TokenProvider
    - Retry with exponential backoff on connection errors
    - Connection pooling, safe to share between concurrent calls

    Example:
        >>> async with AsyncTransport(StaticTokenProvider(token)) as transport:
        ...     response = await transport.send('GET', 'albums')
    """

    def __init__(
        self,
        token_provider: Optional[TokenProvider] = None,
        config: Optional[APIConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize transport.

        Args:
            token_provider: Source of the Authorization header
            config: API configuration (uses defaults if not provided)
            session: Optional shared session; never closed by the transport
        """
        self._config = config or APIConfig.default()
        self._token_provider = token_provider
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger('gphotospy.api')

    @property
    def config(self) -> APIConfig:
        return self._config

    @property
    def token_provider(self) -> Optional[TokenProvider]:
        return self._token_provider

    async def __aenter__(self) -> 'AsyncTransport':
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(**self._config.get_connector_kwargs())
            self._session = aiohttp.ClientSession(
                connector=connector,
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
        return self._session

    async def close(self):
        """Close the session if we own it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    def resolve_url(self, url: str) -> str:
        """Resolve endpoint paths against the base URL; absolute URLs pass through."""
        if url.startswith('http://') or url.startswith('https://'):
            return url
        return f"{self._config.base_url}{url.lstrip('/')}"

    async def _build_headers(
        self,
        body: Body,
        headers: Optional[Mapping[str, str]]
    ) -> Dict[str, str]:
        request_headers: Dict[str, str] = {}
        if self._token_provider is not None:
            request_headers['Authorization'] = await self._token_provider.get_authorization()
        if isinstance(body, (bytes, bytearray)):
            request_headers['Content-Type'] = 'application/octet-stream'
        elif body is not None:
            request_headers['Content-Type'] = 'application/json'
        if headers:
            request_headers.update(headers)
        return request_headers

    async def send(
        self,
        method: str,
        url: str,
        body: Body = None,
        headers: Optional[Mapping[str, str]] = None,
        parse: Parser = None,
        params: Params = None
    ) -> TransportResponse:
        """
        Send a single request.

        Args:
            method: HTTP method ('GET' or 'POST')
            url: Endpoint path or absolute URL
            body: dict/list sent as JSON, bytes sent raw
            headers: Extra request headers
            parse: str for text bodies, bytes for raw bodies, a callable
                applied to decoded JSON, or None for plain JSON
            params: Query parameters (a sequence of pairs allows repeats)

        Returns:
            TransportResponse with either result or error set

        Raises:
            TransportFailure: On connection errors once retries are spent
        """
        session = await self._ensure_session()
        full_url = self.resolve_url(url)
        request_headers = await self._build_headers(body, headers)

        if isinstance(body, (bytes, bytearray)):
            data = bytes(body)
        elif body is not None:
            data = json.dumps(body)
        else:
            data = None

        proxy = self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None
        retry = self._config.retry
        attempt = 0

        while True:
            self._logger.debug(f"{method} {full_url}")
            try:
                async with session.request(
                    method,
                    full_url,
                    data=data,
                    headers=request_headers,
                    params=params,
                    proxy=proxy
                ) as response:
                    raw = await response.read()
                    return self._build_response(
                        response.status,
                        CIMultiDict(response.headers),
                        raw,
                        parse
                    )
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                if attempt < retry.max_retries:
                    delay = retry.calculate_delay(attempt)
                    self._logger.warning(
                        f"Network error on {method} {full_url}: {e!r}, retry {attempt + 1} in {delay:.2f}s"
                    )
                    attempt += 1
                    await asyncio.sleep(delay)
                    continue
                self._logger.error(f"Network error on {method} {full_url}: {e!r}")
                raise TransportFailure(
                    f"{method} {full_url} failed: {e!r}",
                    method=method,
                    url=full_url
                ) from e

    def _build_response(
        self,
        status: int,
        headers: Mapping[str, str],
        raw: bytes,
        parse: Parser
    ) -> TransportResponse:
        text = raw.decode('utf-8', errors='replace') if raw else ''
        self._logger.debug(
            f"Response {status}: {text[:500] if len(text) > 500 else text}"
            if parse is not bytes else f"Response {status}: {len(raw)} bytes"
        )

        if not 200 <= status < 300:
            return TransportResponse(
                status=status,
                headers=headers,
                error=ErrorBody.from_response(status, text)
            )

        if parse is bytes:
            return TransportResponse(status=status, headers=headers, result=raw)
        if parse is str:
            return TransportResponse(status=status, headers=headers, result=text)

        if not text.strip():
            return TransportResponse(status=status, headers=headers)

        try:
            payload = json.loads(text)
        except ValueError:
            self._logger.debug(f"Unparseable response body ({len(raw)} bytes)")
            return TransportResponse(status=status, headers=headers)

        error = ErrorBody.from_dict(payload)
        if error is not None:
            return TransportResponse(status=status, headers=headers, error=error)

        if parse is None:
            return TransportResponse(status=status, headers=headers, result=payload)
        try:
            result = parse(payload)
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            self._logger.debug(f"Response body has an unexpected shape: {e!r}")
            return TransportResponse(status=status, headers=headers)
        return TransportResponse(status=status, headers=headers, result=result)
