"""
Find and remove photo files that no photo row references.

Deleting a photo leaves its file on disk unless
DELETE_BLOB_ON_PHOTO_DELETE is enabled. Run this to reclaim that space:

    python -m photo_service.scripts.cleanup_orphans            # dry run
    python -m photo_service.scripts.cleanup_orphans --confirm  # delete

An upload writes its file before the photo row is committed, so files
younger than --min-age-seconds are never treated as orphans.
"""
import argparse
import asyncio
import logging
import os
import time
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from photo_service.core.config import settings
from photo_service.core.database import AsyncSessionLocal
from photo_service.models.photo import Photo
from photo_service.services.storage_factory import get_storage_service
from photo_service.services.storage_interface import StorageInterface

logger = logging.getLogger(__name__)

DEFAULT_MIN_AGE_SECONDS = 3600


async def find_orphans(
    db: AsyncSession,
    storage: StorageInterface,
    prefix: str,
    min_age_seconds: int = 0
) -> List[str]:
    """Return the keys under prefix that no photo row points to and are older than min_age_seconds."""
    result = await db.execute(select(Photo.file_path).where(Photo.file_path.is_not(None)))
    referenced = {os.path.normpath(path) for path in result.scalars().all()}
    logger.info(f"Found {len(referenced)} referenced photo files in database.")

    all_files = storage.list_files(prefix, max_files=100000)
    logger.info(f"Found {len(all_files)} files in storage under '{prefix}'")

    # Timestamps are in milliseconds
    cutoff = (time.time() - min_age_seconds) * 1000

    orphans = []
    for file_info in all_files:
        key = file_info["file_id"]
        if os.path.normpath(key) in referenced:
            continue
        if file_info.get("upload_timestamp", 0) > cutoff:
            logger.info(f"Skipping recent unreferenced file: {key}")
            continue
        logger.warning(f"Orphaned file found: {key}")
        orphans.append(key)
    return orphans


async def cleanup(
    db: AsyncSession,
    storage: StorageInterface,
    prefix: str,
    dry_run: bool = True,
    min_age_seconds: int = 0
) -> List[str]:
    """Delete orphaned files unless dry_run. Returns the keys actually removed."""
    orphans = await find_orphans(db, storage, prefix, min_age_seconds=min_age_seconds)

    if not orphans:
        logger.info("No orphans found.")
        return []

    logger.info(f"Summary: Found {len(orphans)} orphaned files.")
    if dry_run:
        logger.info("Dry run complete. No files were deleted.")
        return []

    deleted = []
    for key in orphans:
        try:
            storage.delete_file(key)
        except OSError as e:
            logger.error(f"Failed to delete {key}: {e}")
            continue
        logger.info(f"Deleted: {key}")
        deleted.append(key)
    return deleted


async def main(dry_run: bool = True, min_age_seconds: int = DEFAULT_MIN_AGE_SECONDS):
    mode = "DRY RUN" if dry_run else "LIVE DELETE"
    logger.info(f"Starting cleanup in {mode} mode (ignoring files newer than {min_age_seconds}s).")

    storage = get_storage_service(settings.STORAGE_PROVIDER)
    async with AsyncSessionLocal() as db:
        await cleanup(db, storage, settings.WRITE_DIR, dry_run=dry_run, min_age_seconds=min_age_seconds)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    parser = argparse.ArgumentParser(description="Cleanup orphaned photo files.")
    parser.add_argument("--confirm", action="store_true", help="Perform actual deletion (default is dry run).")
    parser.add_argument(
        "--min-age-seconds",
        type=int,
        default=DEFAULT_MIN_AGE_SECONDS,
        help=f"Ignore files modified more recently than this (default {DEFAULT_MIN_AGE_SECONDS})."
    )
    args = parser.parse_args()

    asyncio.run(main(dry_run=not args.confirm, min_age_seconds=args.min_age_seconds))
