"""
Album models.

Uses dataclasses mirroring the camelCase wire objects.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .enums import PositionType
from ..exceptions import ValidationError


def _optional_int(value: Any) -> Optional[int]:
    # int64 fields arrive as JSON strings
    if value is None or value == '':
        return None
    return int(value)


@dataclass
class Album:
    """
    A Google Photos album.

    Attributes:
        id: Album identifier
        title: Album title
        product_url: Link to the album in the Photos UI
        is_writeable: Whether the app may add media items
        media_items_count: Number of media items in the album
        cover_photo_base_url: Base URL of the cover photo
        cover_photo_media_item_id: Id of the cover media item
        share_info: Raw share info, present for shared albums
    """
    id: str
    title: str = ''
    product_url: Optional[str] = None
    is_writeable: bool = False
    media_items_count: Optional[int] = None
    cover_photo_base_url: Optional[str] = None
    cover_photo_media_item_id: Optional[str] = None
    share_info: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Album':
        return cls(
            id=data['id'],
            title=data.get('title', ''),
            product_url=data.get('productUrl'),
            is_writeable=bool(data.get('isWriteable', False)),
            media_items_count=_optional_int(data.get('mediaItemsCount')),
            cover_photo_base_url=data.get('coverPhotoBaseUrl'),
            cover_photo_media_item_id=data.get('coverPhotoMediaItemId'),
            share_info=data.get('shareInfo')
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'id': self.id, 'title': self.title}
        if self.product_url is not None:
            result['productUrl'] = self.product_url
        if self.is_writeable:
            result['isWriteable'] = True
        if self.media_items_count is not None:
            result['mediaItemsCount'] = str(self.media_items_count)
        if self.cover_photo_base_url is not None:
            result['coverPhotoBaseUrl'] = self.cover_photo_base_url
        if self.cover_photo_media_item_id is not None:
            result['coverPhotoMediaItemId'] = self.cover_photo_media_item_id
        if self.share_info is not None:
            result['shareInfo'] = self.share_info
        return result


@dataclass
class AlbumPage:
    """One page of the albums / sharedAlbums listing."""
    albums: List[Album]
    next_page_token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AlbumPage':
        # sharedAlbums answers with 'sharedAlbums' instead of 'albums'
        raw = data.get('albums') or data.get('sharedAlbums') or []
        return cls(
            albums=[Album.from_dict(item) for item in raw],
            next_page_token=data.get('nextPageToken')
        )


@dataclass(frozen=True)
class AlbumPosition:
    """Position of newly created media items inside an album."""
    position: PositionType
    relative_media_item_id: Optional[str] = None
    relative_enrichment_item_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'position': self.position.value}
        if self.relative_media_item_id:
            result['relativeMediaItemId'] = self.relative_media_item_id
        if self.relative_enrichment_item_id:
            result['relativeEnrichmentItemId'] = self.relative_enrichment_item_id
        return result

    @classmethod
    def build(
        cls,
        album_id: Optional[str],
        position_type: PositionType = PositionType.LAST_IN_ALBUM,
        relative_media_item_id: Optional[str] = None,
        relative_enrichment_item_id: Optional[str] = None
    ) -> Optional['AlbumPosition']:
        """
        Validate position arguments and build the wire object.

        Returns None for the server default (last in album).

        Raises:
            ValidationError: If a position is given without an album, both
                relative ids are given, or the position type needs a
                relative id that is missing
        """
        if not album_id and (
            position_type != PositionType.LAST_IN_ALBUM
            or relative_media_item_id
            or relative_enrichment_item_id
        ):
            raise ValidationError("cannot specify a position without an album_id")
        if relative_media_item_id and relative_enrichment_item_id:
            raise ValidationError(
                "cannot specify relative_media_item_id and relative_enrichment_item_id at the same time"
            )

        if position_type in (PositionType.LAST_IN_ALBUM, PositionType.POSITION_TYPE_UNSPECIFIED):
            return None
        if position_type == PositionType.FIRST_IN_ALBUM:
            return cls(position=position_type)
        if relative_media_item_id:
            return cls(position=position_type, relative_media_item_id=relative_media_item_id)
        if relative_enrichment_item_id:
            return cls(position=position_type, relative_enrichment_item_id=relative_enrichment_item_id)
        raise ValidationError(f"unexpected position_type '{position_type.value}' without a relative item id")
