"""
Media item models.

Covers listing/search pages, batchGet results and batchCreate payloads.
"""
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

_FRACTION = re.compile(r'\.(\d+)')


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an RFC 3339 timestamp such as '2014-10-02T15:01:23.045123456Z'.

    Fractions are cut to microseconds; 'Z' is read as UTC.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith('Z') or text.endswith('z'):
        text = text[:-1] + '+00:00'
    text = _FRACTION.sub(lambda m: '.' + m.group(1)[:6].ljust(6, '0'), text, count=1)
    return datetime.fromisoformat(text)


def format_timestamp(value: datetime) -> str:
    text = value.isoformat()
    if text.endswith('+00:00'):
        text = text[:-6] + 'Z'
    return text


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == '':
        return None
    return int(value)


@dataclass
class MediaMetadata:
    """
    Metadata of a media item.

    Attributes:
        creation_time: When the media was first created
        width: Original width in pixels
        height: Original height in pixels
        photo: Raw photo metadata (camera, exposure, ...)
        video: Raw video metadata (fps, processing status, ...)
    """
    creation_time: Optional[datetime] = None
    width: Optional[int] = None
    height: Optional[int] = None
    photo: Optional[Dict[str, Any]] = None
    video: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MediaMetadata':
        return cls(
            creation_time=parse_timestamp(data.get('creationTime')),
            width=_optional_int(data.get('width')),
            height=_optional_int(data.get('height')),
            photo=data.get('photo'),
            video=data.get('video')
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.creation_time is not None:
            result['creationTime'] = format_timestamp(self.creation_time)
        if self.width is not None:
            result['width'] = str(self.width)
        if self.height is not None:
            result['height'] = str(self.height)
        if self.photo is not None:
            result['photo'] = self.photo
        if self.video is not None:
            result['video'] = self.video
        return result


@dataclass
class ContributorInfo:
    """Who added a media item to a shared album."""
    display_name: Optional[str] = None
    profile_picture_base_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ContributorInfo':
        return cls(
            display_name=data.get('displayName'),
            profile_picture_base_url=data.get('profilePictureBaseUrl')
        )


@dataclass
class MediaItem:
    """
    A photo or video in the library.

    Attributes:
        id: Media item identifier
        filename: Original file name
        mime_type: Mime type of the item
        description: Caption
        product_url: Link to the item in the Photos UI
        base_url: Base URL for downloading bytes (expires after ~60 minutes)
        media_metadata: Creation time, dimensions, photo/video details
        contributor_info: Present for items in shared albums
    """
    id: str
    filename: str = ''
    mime_type: Optional[str] = None
    description: Optional[str] = None
    product_url: Optional[str] = None
    base_url: Optional[str] = None
    media_metadata: MediaMetadata = field(default_factory=MediaMetadata)
    contributor_info: Optional[ContributorInfo] = None

    @property
    def creation_time(self) -> Optional[datetime]:
        return self.media_metadata.creation_time

    @property
    def is_photo(self) -> bool:
        return self.media_metadata.photo is not None

    @property
    def is_video(self) -> bool:
        return self.media_metadata.video is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MediaItem':
        contributor = data.get('contributorInfo')
        return cls(
            id=data['id'],
            filename=data.get('filename', ''),
            mime_type=data.get('mimeType'),
            description=data.get('description'),
            product_url=data.get('productUrl'),
            base_url=data.get('baseUrl'),
            media_metadata=MediaMetadata.from_dict(data.get('mediaMetadata') or {}),
            contributor_info=ContributorInfo.from_dict(contributor) if contributor else None
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'id': self.id, 'filename': self.filename}
        for key, value in (
            ('mimeType', self.mime_type),
            ('description', self.description),
            ('productUrl', self.product_url),
            ('baseUrl', self.base_url),
        ):
            if value is not None:
                result[key] = value
        metadata = self.media_metadata.to_dict()
        if metadata:
            result['mediaMetadata'] = metadata
        return result


@dataclass
class MediaItemPage:
    """One page of mediaItems list or mediaItems:search."""
    media_items: List[MediaItem]
    next_page_token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MediaItemPage':
        return cls(
            media_items=[MediaItem.from_dict(item) for item in data.get('mediaItems') or []],
            next_page_token=data.get('nextPageToken')
        )


@dataclass(frozen=True)
class Status:
    """Per-item status attached to batch results."""
    code: int = 0
    message: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Status':
        return cls(code=int(data.get('code', 0) or 0), message=data.get('message', ''))

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


@dataclass
class MediaItemResult:
    """One entry of mediaItems:batchGet; ``status`` is set when the id failed."""
    media_item: Optional[MediaItem] = None
    status: Optional[Status] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MediaItemResult':
        item = data.get('mediaItem')
        status = data.get('status')
        return cls(
            media_item=MediaItem.from_dict(item) if item else None,
            status=Status.from_dict(status) if status is not None else None
        )


@dataclass
class MediaItemResults:
    """Response of mediaItems:batchGet."""
    results: List[MediaItemResult]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MediaItemResults':
        return cls(results=[MediaItemResult.from_dict(r) for r in data.get('mediaItemResults') or []])


@dataclass(frozen=True)
class UploadItem:
    """An upload token paired with the file name and caption to create it with."""
    upload_token: str
    file_name: Optional[str] = None
    description: Optional[str] = None

    def to_new_media_item(self) -> Dict[str, Any]:
        simple: Dict[str, Any] = {'uploadToken': self.upload_token}
        if self.file_name:
            simple['fileName'] = self.file_name
        result: Dict[str, Any] = {'simpleMediaItem': simple}
        if self.description:
            result['description'] = self.description
        return result


@dataclass
class NewMediaItemResult:
    """One entry of mediaItems:batchCreate."""
    upload_token: Optional[str] = None
    status: Optional[Status] = None
    media_item: Optional[MediaItem] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NewMediaItemResult':
        item = data.get('mediaItem')
        status = data.get('status')
        return cls(
            upload_token=data.get('uploadToken'),
            status=Status.from_dict(status) if status is not None else None,
            media_item=MediaItem.from_dict(item) if item else None
        )


@dataclass
class BatchCreateResult:
    """Response of mediaItems:batchCreate."""
    new_media_item_results: List[NewMediaItemResult]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BatchCreateResult':
        return cls(new_media_item_results=[
            NewMediaItemResult.from_dict(r) for r in data.get('newMediaItemResults') or []
        ])
