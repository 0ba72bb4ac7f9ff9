"""
Photo operations scoped under categories.

Rows live in the relational store, file content in the blob store
returned by get_storage_service(). Each public method maps to one HTTP
route in photo_service.api.photos and raises HTTPException on failure.
"""
import logging
import os
from typing import List, Optional, Tuple

from fastapi import HTTPException, UploadFile, status
from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from photo_service.core.config import settings
from photo_service.models import Category, Comment, Opinion, OpinionValue, Photo
from photo_service.schemas.photo import PhotoView
from photo_service.services.storage_factory import get_storage_service
from photo_service.services.storage_interface import BlobNotFoundError, StorageInterface
from photo_service.utils.upload import read_upload

logger = logging.getLogger(__name__)


def photo_file_path(photo_id: int) -> str:
    """Storage location of a photo file. Always '.jpg', whatever the MIME type."""
    return os.path.join(settings.WRITE_DIR, f"{photo_id}.jpg")


def photo_url(photo_id: int) -> str:
    return f"/photo/{photo_id}"


def _opinion_count(value: OpinionValue):
    return (
        select(func.count(Opinion.id))
        .where(Opinion.photo_id == Photo.id, Opinion.opinion == value)
        .correlate(Photo)
        .scalar_subquery()
    )


def _select_photos_with_counts():
    return select(
        Photo,
        _opinion_count(OpinionValue.LIKE).label("total_likes"),
        _opinion_count(OpinionValue.DISLIKE).label("total_dislikes"),
    )


def to_photo_view(
    photo: Photo,
    total_likes: int = 0,
    total_dislikes: int = 0,
    current_user_id: Optional[int] = None
) -> PhotoView:
    return PhotoView(
        id=photo.id,
        title=photo.title,
        description=photo.description,
        category_id=photo.category_id,
        user_id=photo.user_id,
        mime_type=photo.mime_type,
        created_at=photo.created_at,
        updated_at=photo.updated_at,
        url=photo_url(photo.id),
        total_likes=total_likes or 0,
        total_dislikes=total_dislikes or 0,
        belongToUser=current_user_id is not None and photo.user_id == current_user_id,
    )


class PhotoService:
    """Photo CRUD over the database session and a blob storage provider."""

    def __init__(self, db: AsyncSession, storage: StorageInterface = None):
        self.db = db
        self.storage = storage or get_storage_service()

    async def _ensure_category(self, category_id: int) -> Category:
        result = await self.db.execute(
            select(Category).where(Category.id == category_id)
        )
        category = result.scalar_one_or_none()
        if not category:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Category with id '{category_id}' does not exist"
            )
        return category

    async def _get_photo(self, photo_id: int) -> Photo:
        result = await self.db.execute(
            select(Photo).where(Photo.id == photo_id)
        )
        photo = result.scalar_one_or_none()
        if not photo:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Photo with id '{photo_id}' does not exist"
            )
        return photo

    async def list_photos_by_category(
        self,
        category_id: int,
        current_user_id: Optional[int] = None
    ) -> List[PhotoView]:
        """List every photo of a category with its like / dislike totals."""
        await self._ensure_category(category_id)

        result = await self.db.execute(
            _select_photos_with_counts()
            .where(Photo.category_id == category_id)
            .order_by(Photo.id)
        )
        return [
            to_photo_view(photo, likes, dislikes, current_user_id)
            for photo, likes, dislikes in result.all()
        ]

    async def add_photo_to_category(
        self,
        category_id: int,
        title: str,
        description: str,
        file: Optional[UploadFile],
        uploader_id: int
    ) -> PhotoView:
        """
        Store a new photo in a category.

        The row is inserted first to obtain its id, which determines the
        file location. The file is written before the transaction commits,
        so a failed write leaves no row behind.
        """
        await self._ensure_category(category_id)

        if file is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="You must provide a file in the request"
            )

        content = await read_upload(
            file,
            max_bytes=settings.max_upload_size_bytes,
            chunk_size=settings.UPLOAD_CHUNK_SIZE
        )

        photo = Photo(
            title=title,
            description=description,
            file_path=None,
            category_id=category_id,
            user_id=uploader_id,
            mime_type=file.content_type,
        )
        self.db.add(photo)
        await self.db.flush()

        photo.file_path = photo_file_path(photo.id)
        await self.db.flush()

        try:
            await run_in_threadpool(
                self.storage.upload_bytes, content, photo.file_path, photo.mime_type
            )
        except OSError as e:
            await self.db.rollback()
            logger.error(f"Failed to write file for new photo in category {category_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Photo file could not be stored"
            )

        await self.db.commit()
        await self.db.refresh(photo)

        logger.info(f"Created photo {photo.id} in category {category_id} for user {uploader_id} ({len(content)} bytes)")
        return to_photo_view(photo, 0, 0, uploader_id)

    async def read_photo_file(self, photo_id: int) -> Tuple[bytes, str]:
        """Return the stored file content and its MIME type."""
        photo = await self._get_photo(photo_id)

        if not photo.file_path:
            raise HTTPException(
                status_code=status.HTTP_410_GONE,
                detail=f"Photo with id {photo.id} exist but corresponding file could not be found"
            )

        try:
            content = await run_in_threadpool(self.storage.download_file_bytes, photo.file_path)
        except BlobNotFoundError:
            logger.warning(f"File missing for photo {photo.id} at {photo.file_path}")
            raise HTTPException(
                status_code=status.HTTP_410_GONE,
                detail=f"Photo with id {photo.id} exist but corresponding file could not be found"
            )
        except OSError:
            logger.exception(f"Failed to read file for photo {photo.id}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Photo with id {photo.id} exist but file could not be read"
            )

        return content, photo.mime_type

    async def delete_photo(self, photo_id: int) -> None:
        """
        Delete a photo with its opinions and comments.

        Children go first, then the photo row, in a single transaction.
        """
        photo = await self._get_photo(photo_id)
        file_path = photo.file_path

        opinions = await self.db.execute(
            delete(Opinion).where(Opinion.photo_id == photo_id)
        )
        comments = await self.db.execute(
            delete(Comment).where(Comment.photo_id == photo_id)
        )
        await self.db.execute(
            delete(Photo).where(Photo.id == photo_id)
        )
        await self.db.commit()

        logger.info(
            f"Deleted photo {photo_id} with {opinions.rowcount} opinions and {comments.rowcount} comments"
        )

        if settings.DELETE_BLOB_ON_PHOTO_DELETE and file_path:
            try:
                await run_in_threadpool(self.storage.delete_file, file_path)
            except BlobNotFoundError:
                logger.warning(f"No file to remove for deleted photo {photo_id} at {file_path}")
            except OSError as e:
                logger.error(f"Failed to remove file of deleted photo {photo_id}: {e}")

    async def get_photo_info(
        self,
        photo_id: int,
        current_user_id: Optional[int] = None
    ) -> PhotoView:
        """Single photo metadata with like / dislike totals."""
        result = await self.db.execute(
            _select_photos_with_counts().where(Photo.id == photo_id)
        )
        row = result.one_or_none()
        if not row:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Photo with id '{photo_id}' does not exist"
            )

        photo, likes, dislikes = row
        return to_photo_view(photo, likes, dislikes, current_user_id)
