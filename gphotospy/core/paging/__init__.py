"""Paginated enumeration of albums and media items."""
from .cursor import PageCursor
from .filters import normalize_filter
from .models import PagingProgress
from .paginator import (
    PageEnumerator,
    DEFAULT_PAGE_SIZE_ALBUMS,
    DEFAULT_PAGE_SIZE_MEDIA_ITEMS,
    DEFAULT_BATCH_SIZE_MEDIA_ITEMS,
)

__all__ = [
    'PageEnumerator',
    'PageCursor',
    'PagingProgress',
    'normalize_filter',
    'DEFAULT_PAGE_SIZE_ALBUMS',
    'DEFAULT_PAGE_SIZE_MEDIA_ITEMS',
    'DEFAULT_BATCH_SIZE_MEDIA_ITEMS',
]
