from typing import Protocol, Dict, Any, List


class BlobNotFoundError(FileNotFoundError):
    """Raised when no blob exists at the requested key."""


class StorageInterface(Protocol):
    """
    Interface for blob storage providers.
    Keys are the storage locations recorded on photo rows.
    Methods are blocking; callers run them in a threadpool.
    """

    def upload_bytes(
        self,
        data_bytes: bytes,
        key: str,
        content_type: str = "application/octet-stream"
    ) -> Dict[str, Any]:
        """Write the whole payload at key, replacing any previous content."""
        ...

    def download_file_bytes(self, key: str) -> bytes:
        """
        Read the whole blob at key.
        Raises BlobNotFoundError when nothing is stored there.
        """
        ...

    def delete_file(self, key: str):
        """Delete file at key."""
        ...

    def list_files(self, prefix: str, max_files: int = 1000) -> List[Dict[str, Any]]:
        """List files with prefix."""
        ...

    def file_exists(self, key: str) -> bool:
        """Check if file exists in storage."""
        ...
