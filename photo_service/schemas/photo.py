from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class PhotoView(BaseModel):
    """
    Public projection of a photo row.
    The storage location is not part of this schema.
    """
    id: int
    title: str
    description: str
    category_id: int
    user_id: int
    mime_type: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    url: str
    total_likes: int = 0
    total_dislikes: int = 0
    belongToUser: bool = False


class PhotoResponse(BaseModel):
    status: str = "success"
    message: Optional[str] = None
    data: PhotoView


class PhotoListResponse(BaseModel):
    status: str = "success"
    message: Optional[str] = None
    data: List[PhotoView]


class MessageResponse(BaseModel):
    status: str = "success"
    message: Optional[str] = None
    data: None = None
