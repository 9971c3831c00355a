"""
Search media items with filters and stop early
"""
import asyncio
import os
from datetime import date

from google.oauth2.credentials import Credentials

from gphotospy import GooglePhotosClient, setup_logging
from gphotospy.core.models import ContentCategory, Filter, MediaType, MediaTypeFilter


async def main():
    setup_logging()

    # Refreshable credentials from an earlier OAuth flow
    credentials = Credentials.from_authorized_user_file(os.environ["GPHOTOS_CREDENTIALS"])

    async with GooglePhotosClient(credentials=credentials) as photos:
        photos.on('paging', lambda p: print(f"page {p.page_number}: {p.record_count} so far"))

        # Everything from January
        enumerator = photos.enumerator
        async for item in enumerator.enumerate_media_items_by_date_range(date(2024, 1, 1), date(2024, 1, 31)):
            print(f"  {item.filename} {item.creation_time}")

        # Only videos, stop after a few pages
        videos = Filter(media_type_filter=MediaTypeFilter([MediaType.VIDEO]))
        async for item in photos.iter_media_items_by_filter(videos, max_page_count=3):
            print(f"  video: {item.filename}")

        # Pets, cancelled from another task
        stop = asyncio.Event()
        asyncio.get_running_loop().call_later(5, stop.set)
        async for item in enumerator.enumerate_media_items_by_categories(ContentCategory.PETS, cancel_event=stop):
            print(f"  pet: {item.filename}")


if __name__ == "__main__":
    asyncio.run(main())
