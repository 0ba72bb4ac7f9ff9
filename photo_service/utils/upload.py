"""
Helpers for reading multipart uploads.
"""
from fastapi import HTTPException, UploadFile, status


async def read_upload(file: UploadFile, max_bytes: int, chunk_size: int = 64 * 1024) -> bytes:
    """
    Drain an uploaded file into a single buffer.

    Args:
        file: Incoming multipart file
        max_bytes: Upper bound on the total payload size
        chunk_size: Bytes requested per read

    Returns:
        The complete file content

    Raises:
        HTTPException 413 when the payload exceeds max_bytes
    """
    chunks = []
    total = 0
    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"Uploaded file exceeds the {max_bytes // (1024 * 1024)} MB limit"
            )
        chunks.append(chunk)
    return b"".join(chunks)
