"""
Bearer token providers.

Acquiring OAuth credentials is left to the caller (or google-auth); the
transport only asks a provider for the current ``Authorization`` value.
"""
import asyncio
from typing import Optional, Protocol

from google.auth.credentials import Credentials
from google.auth.transport.requests import Request

from ..logging import get_logger

logger = get_logger('gphotospy.api')


class TokenProvider(Protocol):
    """Protocol for objects that hand out a valid access token."""

    async def get_authorization(self) -> str:
        """Returns the full ``Authorization`` header value."""
        ...


class StaticTokenProvider:
    """
    Provider for an access token obtained elsewhere.

    Example:
        >>> provider = StaticTokenProvider("ya29.a0...")
        >>> await provider.get_authorization()
        'Bearer ya29.a0...'
    """

    def __init__(self, access_token: str, token_type: str = 'Bearer'):
        if not access_token or not access_token.strip():
            raise ValueError("access_token cannot be empty")
        self._access_token = access_token
        self._token_type = token_type

    def set_auth(self, token_type: str, access_token: str) -> None:
        """Replace the token, e.g. after an out-of-band refresh."""
        self._token_type = token_type
        self._access_token = access_token

    async def get_authorization(self) -> str:
        return f"{self._token_type} {self._access_token}"


class CredentialsTokenProvider:
    """
    Provider backed by a google-auth credentials object.

    Stale credentials are refreshed in a worker thread, since google-auth
    refreshes over blocking ``requests``.
    """

    def __init__(self, credentials: Credentials, request: Optional[Request] = None):
        self._credentials = credentials
        self._request = request
        self._lock: Optional[asyncio.Lock] = None

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    def _refresh(self) -> None:
        if self._request is None:
            self._request = Request()
        self._credentials.refresh(self._request)

    async def get_authorization(self) -> str:
        # created on first use so it binds to the running loop
        if self._lock is None:
            self._lock = asyncio.Lock()
        async with self._lock:
            if not self._credentials.valid:
                logger.info("Access token is stale, refreshing it")
                await asyncio.to_thread(self._refresh)
                logger.debug("Access token refreshed")
        return f"Bearer {self._credentials.token}"
