"""Utilities module."""
from photo_service.utils.upload import read_upload

__all__ = ["read_upload"]
