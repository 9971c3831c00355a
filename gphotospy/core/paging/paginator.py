"""
Paginated enumeration.

Turns the token-based listing and search endpoints into lazy async
sequences. Records are deduplicated by id for the lifetime of one
enumeration, since the server may deliver a record on more than one page.
"""
import asyncio
import datetime as _dt
from typing import (
    Any, AsyncIterator, Awaitable, Callable, Dict, Iterable, List,
    Optional, Sequence, Set, Tuple
)

from .cursor import PageCursor, has_token
from .filters import normalize_filter
from .models import PagingProgress
from ..api.endpoints import RequestUris
from ..batching import split_batches
from ..exceptions import ValidationError
from ..logging import get_logger
from ..models import (
    Album,
    AlbumPage,
    ContentCategory,
    Filter,
    MediaItem,
    MediaItemPage,
    MediaItemResults,
)
from ..upload.protocols import TransportProtocol

logger = get_logger('gphotospy.paging')

MIN_PAGE_SIZE_ALBUMS = 1
DEFAULT_PAGE_SIZE_ALBUMS = 50
MAX_PAGE_SIZE_ALBUMS = 50

MIN_PAGE_SIZE_MEDIA_ITEMS = 1
DEFAULT_PAGE_SIZE_MEDIA_ITEMS = 100
MAX_PAGE_SIZE_MEDIA_ITEMS = 100

DEFAULT_BATCH_SIZE_MEDIA_ITEMS = 50

ProgressCallback = Callable[[PagingProgress], None]
PageFetcher = Callable[[PageCursor], Awaitable[Any]]


def _check_page_size(page_size: int, minimum: int, maximum: int) -> None:
    if not minimum <= page_size <= maximum:
        raise ValidationError(f"page_size must be between {minimum} and {maximum}, got {page_size}")


def _check_max_page_count(max_page_count: Optional[int]) -> None:
    if max_page_count is not None and max_page_count < 1:
        raise ValidationError(f"max_page_count must be >= 1, got {max_page_count}")


def _cancelled(cancel_event: Optional[asyncio.Event]) -> bool:
    return cancel_event is not None and cancel_event.is_set()


def _date_span(items: Sequence[MediaItem]) -> Tuple[Optional[_dt.datetime], Optional[_dt.datetime]]:
    dates = [item.creation_time for item in items if item.creation_time is not None]
    if not dates:
        return None, None
    return min(dates), max(dates)


class PageEnumerator:
    """
    Enumerates albums and media items page by page.

    Every ``enumerate_*`` method is an async generator. Pages are fetched
    only as the caller iterates, so breaking out early skips the rest.

    Example:
        >>> enumerator = PageEnumerator(transport)
        >>> async for album in enumerator.enumerate_albums():
        ...     print(album.title)
    """

    def __init__(
        self,
        transport: TransportProtocol,
        progress_callback: Optional[ProgressCallback] = None
    ):
        """
        Initialize enumerator.

        Args:
            transport: Transport used for every request
            progress_callback: Called with PagingProgress for every page
                that has a continuation
        """
        self._transport = transport
        self._progress_callback = progress_callback

    def _emit(self, progress: PagingProgress, on_progress: Optional[ProgressCallback]) -> None:
        logger.debug(
            f"Page {progress.page_number}: {progress.page_size} records, {progress.record_count} total"
        )
        if on_progress:
            on_progress(progress)
        if self._progress_callback:
            self._progress_callback(progress)

    async def _page_loop(
        self,
        fetch_page: PageFetcher,
        items_of: Callable[[Any], List[Any]],
        max_page_count: Optional[int],
        cancel_event: Optional[asyncio.Event],
        on_progress: Optional[ProgressCallback],
        with_dates: bool
    ) -> AsyncIterator[Any]:
        seen: Set[str] = set()
        cursor: Optional[PageCursor] = PageCursor.first()
        page_number = 1

        while cursor is not None:
            if _cancelled(cancel_event):
                logger.debug(f"Enumeration cancelled before page {page_number}")
                break
            if max_page_count is not None and page_number > max_page_count:
                break

            response = await fetch_page(cursor)
            response.raise_for_error()
            page = response.result
            if page is None:
                logger.debug(f"Page {page_number} had no body, stopping")
                break

            batch = items_of(page)
            for record in batch:
                if record.id in seen:
                    continue
                seen.add(record.id)
                yield record

            # a short page size can give an empty batch that still has a token
            if has_token(page.next_page_token) and batch:
                min_date, max_date = _date_span(batch) if with_dates else (None, None)
                self._emit(PagingProgress(
                    page_size=len(batch),
                    page_number=page_number,
                    record_count=len(seen),
                    min_date=min_date,
                    max_date=max_date
                ), on_progress)

            cursor = cursor.advance(page.next_page_token)
            page_number += 1

    def _get_fetcher(
        self,
        url: str,
        parse: Callable[[Dict[str, Any]], Any],
        page_size: int,
        default_page_size: int,
        exclude_non_app_created: bool
    ) -> PageFetcher:
        async def fetch(cursor: PageCursor):
            params: List[Tuple[str, str]] = []
            if page_size != default_page_size:
                params.append(('pageSize', str(page_size)))
            if exclude_non_app_created:
                params.append(('excludeNonAppCreatedData', 'true'))
            if not cursor.is_first:
                params.append(('pageToken', cursor.token))
            logger.debug(f"GET {url} {params}")
            return await self._transport.send('GET', url, params=params or None, parse=parse)
        return fetch

    def _search_fetcher(
        self,
        page_size: int,
        album_id: Optional[str] = None,
        filter: Optional[Filter] = None
    ) -> PageFetcher:
        async def fetch(cursor: PageCursor):
            body: Dict[str, Any] = {'pageSize': page_size}
            if album_id is not None:
                body['albumId'] = album_id
            if not cursor.is_first:
                body['pageToken'] = cursor.token
            if filter is not None:
                body['filters'] = filter.to_dict()
            logger.debug(f"POST {RequestUris.MEDIA_ITEMS_SEARCH} {body}")
            return await self._transport.send(
                'POST', RequestUris.MEDIA_ITEMS_SEARCH, body=body, parse=MediaItemPage.from_dict
            )
        return fetch

    # Albums

    def enumerate_albums(
        self,
        page_size: int = DEFAULT_PAGE_SIZE_ALBUMS,
        exclude_non_app_created: bool = False,
        max_page_count: Optional[int] = None,
        cancel_event: Optional[asyncio.Event] = None,
        on_progress: Optional[ProgressCallback] = None
    ) -> AsyncIterator[Album]:
        """
        Enumerate the user's albums.

        Args:
            page_size: Albums per page, 1 to 50
            exclude_non_app_created: Only albums created by this app
            max_page_count: Stop after this many pages (None for all)
            cancel_event: Checked before every page fetch
            on_progress: Called for every page with a continuation

        Raises:
            ValidationError: If page_size or max_page_count is out of range
            RemoteApiError: If a page request fails
        """
        return self._enumerate_albums(
            RequestUris.ALBUMS, page_size, exclude_non_app_created,
            max_page_count, cancel_event, on_progress
        )

    def enumerate_shared_albums(
        self,
        page_size: int = DEFAULT_PAGE_SIZE_ALBUMS,
        exclude_non_app_created: bool = False,
        max_page_count: Optional[int] = None,
        cancel_event: Optional[asyncio.Event] = None,
        on_progress: Optional[ProgressCallback] = None
    ) -> AsyncIterator[Album]:
        """Enumerate albums shared with the user. Same arguments as enumerate_albums."""
        return self._enumerate_albums(
            RequestUris.SHARED_ALBUMS, page_size, exclude_non_app_created,
            max_page_count, cancel_event, on_progress
        )

    def _enumerate_albums(
        self,
        url: str,
        page_size: int,
        exclude_non_app_created: bool,
        max_page_count: Optional[int],
        cancel_event: Optional[asyncio.Event],
        on_progress: Optional[ProgressCallback]
    ) -> AsyncIterator[Album]:
        # validated eagerly, before the generator is first iterated
        _check_page_size(page_size, MIN_PAGE_SIZE_ALBUMS, MAX_PAGE_SIZE_ALBUMS)
        _check_max_page_count(max_page_count)
        fetch = self._get_fetcher(
            url, AlbumPage.from_dict, page_size, DEFAULT_PAGE_SIZE_ALBUMS, exclude_non_app_created
        )
        return self._page_loop(
            fetch, lambda page: page.albums, max_page_count, cancel_event, on_progress, with_dates=False
        )

    # Media items

    def enumerate_media_items(
        self,
        page_size: int = DEFAULT_PAGE_SIZE_MEDIA_ITEMS,
        max_page_count: Optional[int] = None,
        exclude_non_app_created: bool = False,
        cancel_event: Optional[asyncio.Event] = None,
        on_progress: Optional[ProgressCallback] = None
    ) -> AsyncIterator[MediaItem]:
        """
        Enumerate every media item in the library.

        Args:
            page_size: Items per page, 1 to 100
            max_page_count: Stop after this many pages (None for all)
            exclude_non_app_created: Only items created by this app
            cancel_event: Checked before every page fetch
            on_progress: Called for every page with a continuation

        Raises:
            ValidationError: If page_size or max_page_count is out of range
            RemoteApiError: If a page request fails
        """
        _check_page_size(page_size, MIN_PAGE_SIZE_MEDIA_ITEMS, MAX_PAGE_SIZE_MEDIA_ITEMS)
        _check_max_page_count(max_page_count)
        fetch = self._get_fetcher(
            RequestUris.MEDIA_ITEMS, MediaItemPage.from_dict, page_size,
            DEFAULT_PAGE_SIZE_MEDIA_ITEMS, exclude_non_app_created
        )
        return self._page_loop(
            fetch, lambda page: page.media_items, max_page_count, cancel_event, on_progress, with_dates=True
        )

    def enumerate_media_items_by_album(
        self,
        album_id: str,
        page_size: int = DEFAULT_PAGE_SIZE_MEDIA_ITEMS,
        max_page_count: Optional[int] = None,
        cancel_event: Optional[asyncio.Event] = None,
        on_progress: Optional[ProgressCallback] = None
    ) -> AsyncIterator[MediaItem]:
        """Enumerate the media items of one album via search."""
        if not album_id:
            raise ValidationError("album_id cannot be empty")
        _check_page_size(page_size, MIN_PAGE_SIZE_MEDIA_ITEMS, MAX_PAGE_SIZE_MEDIA_ITEMS)
        _check_max_page_count(max_page_count)
        fetch = self._search_fetcher(page_size, album_id=album_id)
        return self._page_loop(
            fetch, lambda page: page.media_items, max_page_count, cancel_event, on_progress, with_dates=True
        )

    def enumerate_media_items_by_filter(
        self,
        filter: Filter,
        max_page_count: Optional[int] = None,
        exclude_non_app_created: bool = False,
        page_size: int = DEFAULT_PAGE_SIZE_MEDIA_ITEMS,
        cancel_event: Optional[asyncio.Event] = None,
        on_progress: Optional[ProgressCallback] = None
    ) -> AsyncIterator[MediaItem]:
        """
        Search media items with a filter.

        Empty sub-filters are removed before the request is sent; the
        caller's Filter is left untouched.
        """
        if filter is None:
            raise ValidationError("filter cannot be None")
        _check_page_size(page_size, MIN_PAGE_SIZE_MEDIA_ITEMS, MAX_PAGE_SIZE_MEDIA_ITEMS)
        _check_max_page_count(max_page_count)
        tidy = normalize_filter(filter, exclude_non_app_created)
        fetch = self._search_fetcher(page_size, filter=tidy)
        return self._page_loop(
            fetch, lambda page: page.media_items, max_page_count, cancel_event, on_progress, with_dates=True
        )

    def enumerate_media_items_by_date_range(
        self,
        start: _dt.date,
        end: _dt.date,
        max_page_count: Optional[int] = None,
        cancel_event: Optional[asyncio.Event] = None,
        on_progress: Optional[ProgressCallback] = None
    ) -> AsyncIterator[MediaItem]:
        return self.enumerate_media_items_by_filter(
            Filter.for_date_range(start, end),
            max_page_count=max_page_count,
            cancel_event=cancel_event,
            on_progress=on_progress
        )

    def enumerate_media_items_by_categories(
        self,
        *categories: ContentCategory,
        max_page_count: Optional[int] = None,
        cancel_event: Optional[asyncio.Event] = None,
        on_progress: Optional[ProgressCallback] = None
    ) -> AsyncIterator[MediaItem]:
        return self.enumerate_media_items_by_filter(
            Filter.for_categories(*categories),
            max_page_count=max_page_count,
            cancel_event=cancel_event,
            on_progress=on_progress
        )

    def enumerate_media_items_by_ids(
        self,
        ids: Iterable[str],
        batch_size: int = DEFAULT_BATCH_SIZE_MEDIA_ITEMS,
        cancel_event: Optional[asyncio.Event] = None,
        on_progress: Optional[ProgressCallback] = None
    ) -> AsyncIterator[MediaItem]:
        """
        Fetch media items by id with mediaItems:batchGet.

        Ids are requested ``batch_size`` at a time. An id the server could
        not resolve comes back with a status; it is logged and skipped.

        Raises:
            ValidationError: If batch_size is out of range
            RemoteApiError: If a batch request fails as a whole
        """
        if not 1 <= batch_size <= DEFAULT_BATCH_SIZE_MEDIA_ITEMS:
            raise ValidationError(
                f"batch_size must be between 1 and {DEFAULT_BATCH_SIZE_MEDIA_ITEMS}, got {batch_size}"
            )
        return self._batch_get(list(ids), batch_size, cancel_event, on_progress)

    async def _batch_get(
        self,
        ids: List[str],
        batch_size: int,
        cancel_event: Optional[asyncio.Event],
        on_progress: Optional[ProgressCallback]
    ) -> AsyncIterator[MediaItem]:
        seen: Set[str] = set()
        batches = split_batches(ids, batch_size)

        for batch in batches:
            if _cancelled(cancel_event):
                logger.debug(f"Batch get cancelled before batch {batch.index}")
                break

            params = [('mediaItemIds', media_item_id) for media_item_id in batch.items]
            response = await self._transport.send(
                'GET', RequestUris.MEDIA_ITEMS_BATCH_GET, params=params, parse=MediaItemResults.from_dict
            )
            response.raise_for_error()
            if response.result is None:
                continue

            results = response.result.results
            for position, result in enumerate(results):
                if result.status is not None or result.media_item is None:
                    requested = batch.items[position] if position < len(batch.items) else '?'
                    logger.warning(f"Skipping media item {requested}: status={result.status}")
                    continue
                if result.media_item.id in seen:
                    continue
                seen.add(result.media_item.id)
                yield result.media_item

            if batch.index + 1 != len(batches):
                self._emit(PagingProgress(
                    page_size=len(results),
                    page_number=batch.index + 1,
                    record_count=len(seen)
                ), on_progress)
