from photo_service.schemas.photo import (
    PhotoView,
    PhotoResponse,
    PhotoListResponse,
    MessageResponse
)

__all__ = [
    "PhotoView",
    "PhotoResponse",
    "PhotoListResponse",
    "MessageResponse"
]
