"""
Upload photos and videos to Google Photos
"""
import asyncio
import os

from gphotospy import GooglePhotosClient, UploadMethod


async def main():
    async with GooglePhotosClient(access_token=os.environ["GPHOTOS_TOKEN"]) as photos:

        # Upload and create the media item
        result = await photos.upload_single("beach.jpg", description="First day")
        print(f"Uploaded: {result.media_item.product_url}")

        # Upload with progress callback
        def on_progress(progress):
            print(f"{progress.file_name}: {progress.percentage:.1f}%")

        result = await photos.upload_single("clip.mp4", progress_callback=on_progress)

        # Small files can go in one request
        token = await photos.upload_media("icon.png", UploadMethod.SIMPLE)
        print(f"Upload token: {token}")

        # A whole folder into an album
        album = await photos.get_or_create_album("Trip")
        results = await photos.upload_multiple("./trip", pattern="*.jpg", album_id=album.id)
        if results:
            for item in results.new_media_item_results:
                print(f"  {item.upload_token[:12]}... {item.status}")


if __name__ == "__main__":
    asyncio.run(main())
