"""
DetaKit - Drive Result Models

Result models returned by Drive operations.

Author: DetaKit Project
"""

import logging
from typing import Dict, Iterator, List

import requests
from pydantic import BaseModel, Field

# Configure logging
logger = logging.getLogger(__name__)


DOWNLOAD_CHUNK_SIZE = 1024 * 1024


class DeleteManyOutput(BaseModel):
    """Response model for a bulk delete; failures map name to reason"""
    deleted: List[str] = Field(default_factory=list)
    failed: Dict[str, str] = Field(default_factory=dict)


class DriveFile:
    """
    Streamed file content returned by Drive.get.

    The caller owns the stream and should close it, either explicitly
    or by using the object as a context manager.
    """

    def __init__(self, name: str, response: requests.Response):
        self.name = name
        self.response = response
        self.content_type = response.headers.get("Content-Type")
        self._stream = response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE)
        self._buffer = bytearray()

    def read(self, size: int = -1) -> bytes:
        """Read up to size bytes, or everything left when size is negative."""
        if size is None or size < 0:
            return b"".join(self.iter_chunks())
        while len(self._buffer) < size:
            chunk = next(self._stream, None)
            if chunk is None:
                break
            self._buffer.extend(chunk)
        data = bytes(self._buffer[:size])
        del self._buffer[:size]
        return data

    def iter_chunks(self) -> Iterator[bytes]:
        """Iterate over the remaining content in chunks."""
        if self._buffer:
            data = bytes(self._buffer)
            self._buffer.clear()
            yield data
        for chunk in self._stream:
            if chunk:
                yield chunk

    def close(self):
        """Release the underlying connection."""
        self.response.close()
        logger.debug(f"Closed download stream for {self.name}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
