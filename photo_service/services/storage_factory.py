import logging

from photo_service.core.config import settings
from photo_service.services.storage_interface import StorageInterface
from photo_service.services.storage_providers.local_service import LocalStorageService

logger = logging.getLogger(__name__)

_storage_instances = {}


def get_storage_service(provider: str = None) -> StorageInterface:
    """
    Get storage provider instance.
    If provider is not specified, uses the default from settings.
    """
    if not provider:
        provider = settings.STORAGE_PROVIDER.lower()

    if provider in _storage_instances:
        return _storage_instances[provider]

    logger.info(f"Initializing Storage Provider: {provider}")

    if provider != "local":
        logger.warning(f"Unknown storage provider '{provider}', defaulting to local")
    instance = LocalStorageService()

    _storage_instances[provider] = instance
    return instance
