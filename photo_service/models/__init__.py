"""Models module initialization - import all models here."""
from photo_service.models.user import User
from photo_service.models.category import Category
from photo_service.models.photo import Photo, ALLOWED_MIME_TYPES
from photo_service.models.opinion import Opinion, OpinionValue
from photo_service.models.comment import Comment

__all__ = ["User", "Category", "Photo", "ALLOWED_MIME_TYPES", "Opinion", "OpinionValue", "Comment"]
