"""Wire models for the Photos Library API."""
from .enums import ContentCategory, MediaType, Feature, PositionType
from .albums import Album, AlbumPage, AlbumPosition
from .media_items import (
    MediaMetadata,
    ContributorInfo,
    MediaItem,
    MediaItemPage,
    Status,
    MediaItemResult,
    MediaItemResults,
    UploadItem,
    NewMediaItemResult,
    BatchCreateResult,
    parse_timestamp,
)
from .filters import (
    Filter,
    ContentFilter,
    DateFilter,
    Date,
    DateRange,
    MediaTypeFilter,
    FeatureFilter,
)

__all__ = [
    'ContentCategory',
    'MediaType',
    'Feature',
    'PositionType',
    'Album',
    'AlbumPage',
    'AlbumPosition',
    'MediaMetadata',
    'ContributorInfo',
    'MediaItem',
    'MediaItemPage',
    'Status',
    'MediaItemResult',
    'MediaItemResults',
    'UploadItem',
    'NewMediaItemResult',
    'BatchCreateResult',
    'parse_timestamp',
    'Filter',
    'ContentFilter',
    'DateFilter',
    'Date',
    'DateRange',
    'MediaTypeFilter',
    'FeatureFilter',
]
