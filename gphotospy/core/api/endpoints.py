"""Request URIs, relative to ``APIConfig.base_url``."""


class RequestUris:
    """Photos Library REST endpoints."""

    ALBUMS = 'albums'
    ALBUM = 'albums/{album_id}'
    ALBUM_BATCH_ADD = 'albums/{album_id}:batchAddMediaItems'
    ALBUM_BATCH_REMOVE = 'albums/{album_id}:batchRemoveMediaItems'
    SHARED_ALBUMS = 'sharedAlbums'

    MEDIA_ITEMS = 'mediaItems'
    MEDIA_ITEM = 'mediaItems/{media_item_id}'
    MEDIA_ITEMS_BATCH_GET = 'mediaItems:batchGet'
    MEDIA_ITEMS_SEARCH = 'mediaItems:search'
    MEDIA_ITEMS_BATCH_CREATE = 'mediaItems:batchCreate'

    UPLOADS = 'uploads'
