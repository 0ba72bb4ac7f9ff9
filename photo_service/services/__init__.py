from photo_service.services.storage_interface import StorageInterface, BlobNotFoundError
from photo_service.services.storage_factory import get_storage_service
from photo_service.services.photo_service import PhotoService

__all__ = [
    "StorageInterface", "BlobNotFoundError",
    "get_storage_service",
    "PhotoService"
]
