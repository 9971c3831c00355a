"""
Download bytes of media items
"""
import asyncio
import os
from pathlib import Path

from gphotospy import GooglePhotosClient


async def main():
    out = Path("downloads")
    out.mkdir(exist_ok=True)

    async with GooglePhotosClient(access_token=os.environ["GPHOTOS_TOKEN"]) as photos:
        album = await photos.get_album_by_title("Holidays 2024")
        if album is None:
            return

        async for item in photos.iter_media_items_by_album(album.id):
            if item.is_video:
                data = await photos.download_bytes(item, video=True)
            else:
                # Original size with EXIF kept
                data = await photos.download_bytes(
                    item,
                    max_width=item.media_metadata.width,
                    max_height=item.media_metadata.height,
                    include_exif=True
                )
            (out / item.filename).write_bytes(data)
            print(f"Saved {item.filename} ({len(data)} bytes)")


if __name__ == "__main__":
    asyncio.run(main())
