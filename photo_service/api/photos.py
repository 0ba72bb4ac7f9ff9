"""
Photo API endpoints scoped under categories.
"""
from fastapi import APIRouter, Depends, HTTPException, status, Path, Form, UploadFile, File, Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from photo_service.core.database import get_db
from photo_service.api.auth import get_current_user
from photo_service.models.user import User
from photo_service.models.photo import ALLOWED_MIME_TYPES
from photo_service.schemas.photo import PhotoResponse, PhotoListResponse, MessageResponse
from photo_service.services.photo_service import PhotoService

router = APIRouter()


def get_photo_service(db: AsyncSession = Depends(get_db)) -> PhotoService:
    return PhotoService(db)


@router.get("/category/{category_id}/photos", response_model=PhotoListResponse)
async def get_photos(
    category_id: int = Path(..., ge=1),
    current_user: User = Depends(get_current_user),
    service: PhotoService = Depends(get_photo_service)
):
    """Get the photos of a category with their like / dislike totals."""
    photos = await service.list_photos_by_category(category_id, current_user.id)
    return PhotoListResponse(data=photos)


@router.get("/photo/{photo_id}/info", response_model=PhotoResponse)
async def get_photo_info(
    photo_id: int = Path(..., ge=1),
    current_user: User = Depends(get_current_user),
    service: PhotoService = Depends(get_photo_service)
):
    """Get single photo info."""
    photo = await service.get_photo_info(photo_id, current_user.id)
    return PhotoResponse(data=photo)


@router.get(
    "/photo/{id}",
    response_class=Response,
    responses={200: {"content": {"image/jpeg": {}, "image/png": {}}}}
)
async def read_photo(
    id: int = Path(..., ge=1),
    service: PhotoService = Depends(get_photo_service)
):
    """
    Get the picture in itself.
    Open to anonymous callers so the url can be used directly in <img> tags.
    """
    content, mime_type = await service.read_photo_file(id)
    return Response(content=content, media_type=mime_type, status_code=status.HTTP_200_OK)


@router.delete("/photo/{id}", response_model=MessageResponse, status_code=status.HTTP_202_ACCEPTED)
async def delete_photo(
    id: int = Path(..., ge=1),
    current_user: User = Depends(get_current_user),
    service: PhotoService = Depends(get_photo_service)
):
    """Delete the photo together with its opinions and comments."""
    await service.delete_photo(id)
    return MessageResponse(message="Photo and associated ressources deleted")


@router.post("/category/{category_id}/photo", response_model=PhotoResponse, status_code=status.HTTP_201_CREATED)
async def add_photo(
    category_id: int = Path(..., ge=1),
    title: str = Form(..., min_length=1, max_length=255),
    description: str = Form(..., min_length=1),
    file: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    service: PhotoService = Depends(get_photo_service)
):
    """
    Add a photo to a category.

    Must be sent as multipart/form-data with title, description and
    file (image/jpeg or image/png, 10 MB max).
    """
    # Browsers send an empty filename part when no file was chosen
    if file is not None and not file.filename:
        file = None

    if file is not None and file.content_type not in ALLOWED_MIME_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File content type must be one of: {', '.join(ALLOWED_MIME_TYPES)}"
        )

    photo = await service.add_photo_to_category(
        category_id=category_id,
        title=title,
        description=description,
        file=file,
        uploader_id=current_user.id,
    )
    return PhotoResponse(data=photo)
