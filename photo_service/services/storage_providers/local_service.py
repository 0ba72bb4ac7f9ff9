import os
from typing import Dict, Any, List

from photo_service.services.storage_interface import BlobNotFoundError


class LocalStorageService:
    """
    Filesystem storage provider.
    Implements StorageInterface. Keys are filesystem paths.
    """

    def upload_bytes(
        self,
        data_bytes: bytes,
        key: str,
        content_type: str = "application/octet-stream"
    ) -> Dict[str, Any]:
        directory = os.path.dirname(key)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(key, "wb") as f:
            f.write(data_bytes)

        return {
            "file_id": key,
            "size_bytes": len(data_bytes),
            "content_type": content_type,
        }

    def download_file_bytes(self, key: str) -> bytes:
        try:
            with open(key, "rb") as f:
                return f.read()
        except FileNotFoundError as e:
            raise BlobNotFoundError(e.errno, e.strerror, key) from e

    def delete_file(self, key: str):
        try:
            os.remove(key)
        except FileNotFoundError as e:
            raise BlobNotFoundError(e.errno, e.strerror, key) from e

    def list_files(self, prefix: str, max_files: int = 1000) -> List[Dict[str, Any]]:
        """Walk the directory tree under prefix."""
        files = []
        if not os.path.isdir(prefix):
            return files

        for root, _, names in os.walk(prefix):
            for name in sorted(names):
                path = os.path.join(root, name)
                files.append({
                    "file_id": path,
                    "file_name": name,
                    "size": os.path.getsize(path),
                    "upload_timestamp": int(os.path.getmtime(path) * 1000),
                })
                if len(files) >= max_files:
                    return files
        return files

    def file_exists(self, key: str) -> bool:
        return os.path.isfile(key)
