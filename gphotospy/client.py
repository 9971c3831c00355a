"""
GooglePhotosClient - High-level async client for the Photos Library API.

Example:
    >>> async with GooglePhotosClient(access_token="ya29...") as photos:
    ...     album = await photos.get_or_create_album("Holidays")
    ...     await photos.upload_single("beach.jpg", album_id=album.id)
"""
from pathlib import Path
from typing import AsyncIterator, Callable, List, Optional, Sequence, Union

import aiohttp
from google.auth.credentials import Credentials

from .core.api import (
    APIConfig,
    AsyncTransport,
    CredentialsTokenProvider,
    EventEmitter,
    PAGING,
    ProxyConfig,
    RequestUris,
    RetryConfig,
    SSLConfig,
    StaticTokenProvider,
    TimeoutConfig,
    TokenProvider,
    UPLOAD_PROGRESS,
)
from .core.batching import distinct, split_batches
from .core.exceptions import ValidationError
from .core.logging import get_logger
from .core.media_types import is_uploadable
from .core.models import (
    Album,
    AlbumPosition,
    BatchCreateResult,
    Filter,
    MediaItem,
    NewMediaItemResult,
    PositionType,
    UploadItem,
)
from .core.paging import DEFAULT_BATCH_SIZE_MEDIA_ITEMS, PageEnumerator
from .core.upload import UploadConfig, UploadCoordinator, UploadMethod, UploadProgress

logger = get_logger('gphotospy.client')


class GooglePhotosClient:
    """
    High-level async client for Google Photos.

    Composes the upload engine and the page enumerator over one shared
    transport, and adds the album and media item REST calls around them.

    Authentication can be given as:

    1. A ready access token:
        >>> client = GooglePhotosClient(access_token="ya29...")

    2. google-auth credentials (refreshed when stale):
        >>> client = GooglePhotosClient(credentials=creds)

    3. Any object with ``async get_authorization()``:
        >>> client = GooglePhotosClient(token_provider=my_provider)

    Progress of every upload and enumeration is also re-emitted on the
    client's event emitter:
        >>> client.on('upload_progress', lambda p: print(p.percentage))
    """

    def __init__(
        self,
        token_provider: Optional[TokenProvider] = None,
        *,
        access_token: Optional[str] = None,
        credentials: Optional[Credentials] = None,
        config: Optional[APIConfig] = None,
        upload_config: Optional[UploadConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
        transport: Optional[AsyncTransport] = None
    ):
        """
        Initialize the client.

        Args:
            token_provider: Source of the Authorization header
            access_token: Shortcut for StaticTokenProvider(access_token)
            credentials: Shortcut for CredentialsTokenProvider(credentials)
            config: API configuration
            upload_config: Upload policy (retry limit, size ceilings)
            session: Optional shared aiohttp session
            transport: Prebuilt transport (takes precedence over the above)
        """
        if token_provider is None:
            if access_token is not None:
                token_provider = StaticTokenProvider(access_token)
            elif credentials is not None:
                token_provider = CredentialsTokenProvider(credentials)

        self._config = config or APIConfig.default()
        self._transport = transport or AsyncTransport(token_provider, self._config, session=session)
        self._events = EventEmitter()
        self._uploader = UploadCoordinator(
            self._transport,
            upload_config,
            progress_callback=self._events.bind(UPLOAD_PROGRESS)
        )
        self._enumerator = PageEnumerator(
            self._transport,
            progress_callback=self._events.bind(PAGING)
        )

    # =========================================================================
    # Configuration helpers
    # =========================================================================

    @staticmethod
    def create_config(
        proxy: Optional[str] = None,
        proxy_user: Optional[str] = None,
        proxy_pass: Optional[str] = None,
        timeout: float = 600,
        max_retries: int = 2,
        verify_ssl: bool = True,
        user_agent: Optional[str] = None
    ) -> APIConfig:
        """
        Create API configuration with common options.

        Args:
            proxy: Proxy URL (e.g., "http://proxy:8080")
            proxy_user: Proxy username
            proxy_pass: Proxy password
            timeout: Request timeout in seconds
            max_retries: Retries on connection errors
            verify_ssl: Whether to verify SSL certificates
            user_agent: Custom user agent string

        Returns:
            APIConfig instance
        """
        proxy_config = None
        if proxy:
            proxy_config = ProxyConfig(
                url=proxy,
                username=proxy_user,
                password=proxy_pass
            )

        return APIConfig(
            proxy=proxy_config,
            timeout=TimeoutConfig(total=timeout),
            retry=RetryConfig(max_retries=max_retries),
            ssl=SSLConfig(verify=verify_ssl),
            user_agent=user_agent or 'gphotospy/1.0.0'
        )

    @property
    def transport(self) -> AsyncTransport:
        return self._transport

    @property
    def uploader(self) -> UploadCoordinator:
        return self._uploader

    @property
    def enumerator(self) -> PageEnumerator:
        return self._enumerator

    # =========================================================================
    # Context manager
    # =========================================================================

    async def __aenter__(self) -> 'GooglePhotosClient':
        await self._transport.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the client and release resources."""
        await self._transport.close()

    # =========================================================================
    # Events
    # =========================================================================

    def on(self, event: str, callback: Callable) -> 'GooglePhotosClient':
        """Register a handler for 'upload_progress' or 'paging'."""
        self._events.on(event, callback)
        return self

    def off(self, event: str, callback: Optional[Callable] = None) -> 'GooglePhotosClient':
        self._events.off(event, callback)
        return self

    # =========================================================================
    # Albums
    # =========================================================================

    async def get_album(self, album_id: str) -> Optional[Album]:
        response = await self._transport.send(
            'GET', RequestUris.ALBUM.format(album_id=album_id), parse=Album.from_dict
        )
        response.raise_for_error()
        return response.result

    async def create_album(self, title: str) -> Optional[Album]:
        """Create an album. Titles need not be unique."""
        if not title or not title.strip():
            raise ValidationError("album title cannot be empty")
        response = await self._transport.send(
            'POST', RequestUris.ALBUMS, body={'album': {'title': title}}, parse=Album.from_dict
        )
        response.raise_for_error()
        logger.info(f"Album created: {title}")
        return response.result

    async def get_albums(
        self,
        page_size: int = 50,
        exclude_non_app_created: bool = False
    ) -> List[Album]:
        """Every album of the user, as a list."""
        return [
            album async for album in self._enumerator.enumerate_albums(
                page_size=page_size,
                exclude_non_app_created=exclude_non_app_created
            )
        ]

    async def get_album_by_title(self, title: str, case_sensitive: bool = False) -> Optional[Album]:
        """First album whose title matches (case-insensitive by default)."""
        wanted = title if case_sensitive else title.casefold()
        async for album in self._enumerator.enumerate_albums():
            current = album.title if case_sensitive else album.title.casefold()
            if current == wanted:
                return album
        return None

    async def get_or_create_album(self, title: str, case_sensitive: bool = False) -> Optional[Album]:
        album = await self.get_album_by_title(title, case_sensitive)
        if album is None:
            album = await self.create_album(title)
        return album

    def iter_albums(self, **kwargs) -> AsyncIterator[Album]:
        """Lazy album listing; see PageEnumerator.enumerate_albums."""
        return self._enumerator.enumerate_albums(**kwargs)

    def iter_shared_albums(self, **kwargs) -> AsyncIterator[Album]:
        return self._enumerator.enumerate_shared_albums(**kwargs)

    async def add_media_items_to_album(self, album_id: str, media_item_ids: Sequence[str]) -> bool:
        """
        Add existing media items to an album.

        Ids are deduplicated and sent in requests of 50.
        """
        for batch in split_batches(distinct(media_item_ids), DEFAULT_BATCH_SIZE_MEDIA_ITEMS):
            response = await self._transport.send(
                'POST',
                RequestUris.ALBUM_BATCH_ADD.format(album_id=album_id),
                body={'mediaItemIds': batch.items}
            )
            response.raise_for_error()
            logger.debug(f"Added batch {batch.index} ({len(batch.items)} items) to album {album_id}")
        return True

    async def remove_media_items_from_album(self, album_id: str, media_item_ids: Sequence[str]) -> bool:
        for batch in split_batches(list(media_item_ids), DEFAULT_BATCH_SIZE_MEDIA_ITEMS):
            response = await self._transport.send(
                'POST',
                RequestUris.ALBUM_BATCH_REMOVE.format(album_id=album_id),
                body={'mediaItemIds': batch.items}
            )
            response.raise_for_error()
        return True

    # =========================================================================
    # Media items
    # =========================================================================

    async def get_media_item(self, media_item_id: str) -> Optional[MediaItem]:
        response = await self._transport.send(
            'GET', RequestUris.MEDIA_ITEM.format(media_item_id=media_item_id), parse=MediaItem.from_dict
        )
        response.raise_for_error()
        return response.result

    def iter_media_items(self, **kwargs) -> AsyncIterator[MediaItem]:
        return self._enumerator.enumerate_media_items(**kwargs)

    def iter_media_items_by_album(self, album_id: str, **kwargs) -> AsyncIterator[MediaItem]:
        return self._enumerator.enumerate_media_items_by_album(album_id, **kwargs)

    def iter_media_items_by_filter(self, filter: Filter, **kwargs) -> AsyncIterator[MediaItem]:
        return self._enumerator.enumerate_media_items_by_filter(filter, **kwargs)

    def iter_media_items_by_ids(self, ids: Sequence[str], **kwargs) -> AsyncIterator[MediaItem]:
        return self._enumerator.enumerate_media_items_by_ids(ids, **kwargs)

    async def add_media_items(
        self,
        items: Sequence[UploadItem],
        album_id: Optional[str] = None,
        position_type: PositionType = PositionType.LAST_IN_ALBUM,
        relative_media_item_id: Optional[str] = None,
        relative_enrichment_item_id: Optional[str] = None
    ) -> Optional[BatchCreateResult]:
        """
        Turn upload tokens into media items (mediaItems:batchCreate).

        Args:
            items: Upload tokens with file names and captions
            album_id: Album to add the new items to
            position_type: Where in the album they go
            relative_media_item_id: Anchor for AFTER_MEDIA_ITEM
            relative_enrichment_item_id: Anchor for AFTER_ENRICHMENT_ITEM

        Returns:
            Per-item results, in request order

        Raises:
            ValidationError: If no items are given or the position
                arguments conflict
            RemoteApiError: If a request fails
        """
        if not items:
            raise ValidationError("items must contain at least one upload token")
        position = AlbumPosition.build(
            album_id, position_type, relative_media_item_id, relative_enrichment_item_id
        )

        results: List[NewMediaItemResult] = []
        for batch in split_batches(list(items), DEFAULT_BATCH_SIZE_MEDIA_ITEMS):
            body = {'newMediaItems': [item.to_new_media_item() for item in batch.items]}
            if album_id:
                body['albumId'] = album_id
            if position is not None:
                body['albumPosition'] = position.to_dict()
            response = await self._transport.send(
                'POST', RequestUris.MEDIA_ITEMS_BATCH_CREATE, body=body, parse=BatchCreateResult.from_dict
            )
            response.raise_for_error()
            if response.result is None:
                continue
            results.extend(response.result.new_media_item_results)

            # later batches go right after the last item created so far
            if position is not None:
                created = [r.media_item.id for r in response.result.new_media_item_results if r.media_item]
                if created:
                    position = AlbumPosition(
                        position=PositionType.AFTER_MEDIA_ITEM,
                        relative_media_item_id=created[-1]
                    )
        return BatchCreateResult(new_media_item_results=results)

    async def add_media_item(
        self,
        upload_token: str,
        file_name: Optional[str] = None,
        description: Optional[str] = None,
        album_id: Optional[str] = None,
        position_type: PositionType = PositionType.LAST_IN_ALBUM,
        relative_media_item_id: Optional[str] = None,
        relative_enrichment_item_id: Optional[str] = None
    ) -> Optional[NewMediaItemResult]:
        result = await self.add_media_items(
            [UploadItem(upload_token, file_name, description)],
            album_id,
            position_type,
            relative_media_item_id,
            relative_enrichment_item_id
        )
        if result is None or not result.new_media_item_results:
            logger.error(f"No media item created for '{file_name}'")
            return None
        return result.new_media_item_results[0]

    # =========================================================================
    # Upload
    # =========================================================================

    async def upload_media(
        self,
        path: Union[str, Path],
        method: UploadMethod = UploadMethod.RESUMABLE_CHUNKED,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> Optional[str]:
        """Upload bytes only; returns the upload token (None if abandoned)."""
        return await self._uploader.upload_media(path, method, on_progress=progress_callback)

    async def upload_single(
        self,
        path: Union[str, Path],
        album_id: Optional[str] = None,
        description: Optional[str] = None,
        method: UploadMethod = UploadMethod.RESUMABLE_CHUNKED,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> Optional[NewMediaItemResult]:
        """
        Upload a file and create its media item.

        Example:
            >>> result = await photos.upload_single("beach.jpg", description="Day one")
            >>> result.media_item.product_url
        """
        token = await self.upload_media(path, method, progress_callback)
        if not token:
            return None
        return await self.add_media_item(token, Path(path).name, description, album_id)

    async def upload_multiple(
        self,
        paths: Union[str, Path, Sequence[Union[str, Path]]],
        pattern: Optional[str] = None,
        album_id: Optional[str] = None,
        method: UploadMethod = UploadMethod.RESUMABLE_CHUNKED
    ) -> Optional[BatchCreateResult]:
        """
        Upload several files, then create all media items in one go.

        Args:
            paths: A list of files, or a folder
            pattern: Glob applied when ``paths`` is a folder
            album_id: Album to add the new items to
            method: Upload method for every file

        Returns:
            Creation results, or None if no file produced a token
        """
        if isinstance(paths, (str, Path)) and Path(paths).is_dir():
            folder = Path(paths)
            files = sorted(p for p in folder.glob(pattern or '*') if p.is_file() and is_uploadable(p))
        elif isinstance(paths, (str, Path)):
            files = [Path(paths)]
        else:
            files = [Path(p) for p in paths]

        items: List[UploadItem] = []
        for file_path in files:
            token = await self.upload_media(file_path, method)
            if token:
                items.append(UploadItem(token, file_path.name))
            else:
                logger.warning(f"Skipping {file_path.name}: upload returned no token")

        if not items:
            return None
        return await self.add_media_items(items, album_id)

    # =========================================================================
    # Download
    # =========================================================================

    async def download_bytes(
        self,
        media_item: Union[MediaItem, str],
        max_width: Optional[int] = None,
        max_height: Optional[int] = None,
        crop: bool = False,
        include_exif: bool = False,
        video: bool = False
    ) -> Optional[bytes]:
        """
        Download the bytes behind a base URL.

        For a video media item without ``video=True`` this returns a
        thumbnail image, as the Photos API does.

        Args:
            media_item: MediaItem or a base URL
            max_width: Scale to at most this width
            max_height: Scale to at most this height
            crop: Crop to exactly max_width x max_height
            include_exif: Keep EXIF metadata (photos only)
            video: Fetch the video bytes (videos only)
        """
        if isinstance(media_item, MediaItem):
            base_url = media_item.base_url
            include_exif = include_exif and media_item.is_photo
            video = video and media_item.is_video
        else:
            base_url = media_item
        if not base_url:
            raise ValidationError("base_url is required to download bytes")

        options = []
        if max_width is not None or max_height is not None:
            if max_width is not None:
                options.append(f"w{max_width}")
            if max_height is not None:
                options.append(f"h{max_height}")
            if crop:
                options.append('c')
        if include_exif:
            options.append('d')
        if video:
            options.append('dv')
        url = f"{base_url}={'-'.join(options)}" if options else base_url

        response = await self._transport.send('GET', url, parse=bytes)
        response.raise_for_error()
        return response.result
