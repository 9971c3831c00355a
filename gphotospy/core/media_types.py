"""
Media type classification.

Maps file extensions to the image and video mime types the Photos Library
accepts for upload.
"""
import mimetypes
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Union


class MediaCategory(str, Enum):
    IMAGE = 'image'
    VIDEO = 'video'


ACCEPTED_IMAGE_TYPES = frozenset({
    'image/avif',
    'image/bmp',
    'image/gif',
    'image/heic',
    'image/vnd.microsoft.icon',
    'image/jpg',
    'image/jpeg',
    'image/png',
    'image/tiff',
    'image/webp',
    'image/x-panasonic-raw',
    'image/x-panasonic-rw2',
})

ACCEPTED_VIDEO_TYPES = frozenset({
    'video/3gpp',
    'video/3gpp2',
    'video/x-ms-asf',
    'video/x-msvideo',
    'video/divx',
    'video/mpeg',
    'video/mp4',
    'video/mp2t',
    'video/x-m4v',
    'video/x-matroska',
    'video/mmv',
    'video/mod',
    'video/quicktime',
    'video/x-ms-wmv',
})

# Extensions the platform mimetypes tables may lack or map differently
_EXTRA_TYPES = {
    '.avif': 'image/avif',
    '.bmp': 'image/bmp',
    '.gif': 'image/gif',
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png': 'image/png',
    '.tif': 'image/tiff',
    '.tiff': 'image/tiff',
    '.mpg': 'video/mpeg',
    '.mpeg': 'video/mpeg',
    '.heic': 'image/heic',
    '.ico': 'image/vnd.microsoft.icon',
    '.raw': 'image/x-panasonic-raw',
    '.rw2': 'image/x-panasonic-rw2',
    '.webp': 'image/webp',
    '.3gp': 'video/3gpp',
    '.3g2': 'video/3gpp2',
    '.asf': 'video/x-ms-asf',
    '.avi': 'video/x-msvideo',
    '.divx': 'video/divx',
    '.m2t': 'video/mp2t',
    '.m2ts': 'video/mp2t',
    '.mts': 'video/mp2t',
    '.ts': 'video/mp2t',
    '.m4v': 'video/x-m4v',
    '.mkv': 'video/x-matroska',
    '.mmv': 'video/mmv',
    '.mod': 'video/mod',
    '.mov': 'video/quicktime',
    '.mp4': 'video/mp4',
    '.wmv': 'video/x-ms-wmv',
}

_types = mimetypes.MimeTypes()
for _ext, _mime in _EXTRA_TYPES.items():
    _types.add_type(_mime, _ext)


def get_mime_type(extension: str) -> Optional[str]:
    """Mime type for an extension ('.jpg' or 'jpg'), or None if unknown."""
    if not extension:
        return None
    ext = extension.lower()
    if not ext.startswith('.'):
        ext = f'.{ext}'
    return _EXTRA_TYPES.get(ext) or _types.guess_type(f'file{ext}')[0]


def is_image(extension: str) -> bool:
    return get_mime_type(extension) in ACCEPTED_IMAGE_TYPES


def is_video(extension: str) -> bool:
    return get_mime_type(extension) in ACCEPTED_VIDEO_TYPES


def classify(path: Union[str, Path]) -> Optional[Tuple[str, MediaCategory]]:
    """
    Resolve (mime_type, category) for a file path.

    Returns None when the extension is missing or not an accepted image
    or video type.
    """
    extension = Path(path).suffix
    mime_type = get_mime_type(extension)
    if mime_type in ACCEPTED_IMAGE_TYPES:
        return mime_type, MediaCategory.IMAGE
    if mime_type in ACCEPTED_VIDEO_TYPES:
        return mime_type, MediaCategory.VIDEO
    return None


def is_uploadable(path: Union[str, Path]) -> bool:
    return classify(path) is not None
