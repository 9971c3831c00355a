"""
List albums and create one
"""
import asyncio
import os

from gphotospy import GooglePhotosClient


async def main():
    async with GooglePhotosClient(access_token=os.environ["GPHOTOS_TOKEN"]) as photos:

        # Lazy listing, one page at a time
        async for album in photos.iter_albums():
            print(f"  {album.title} ({album.media_items_count} items)")

        # Shared albums use the same model
        async for album in photos.iter_shared_albums(max_page_count=1):
            print(f"  shared: {album.title}")

        # Reuse an album by title, or create it
        album = await photos.get_or_create_album("Holidays 2024")
        print(f"Album: {album.id} {album.product_url}")


if __name__ == "__main__":
    asyncio.run(main())
