"""
DetaKit - Upload Operations Module

Implements chunked uploads to Drive.
Splits a byte stream into parts, uploads them one after another against a
server-assigned upload session, and finishes or aborts the session.

Author: DetaKit Project
"""

import logging
from typing import Optional, Callable, IO

from ..api import DetaClient
from ..exceptions import ErrorKind, DetaValidationError
from ..models import UploadSession, UploadState

# Configure logging
logger = logging.getLogger(__name__)


UPLOAD_CHUNK_SIZE = 1024 * 1024 * 10


class UploadOrchestrator:
    """
    Drives the chunked upload state machine for one Drive.

    Responsibilities:
    - Start an upload session and keep its upload id
    - Upload parts strictly in order, numbered from 1 without gaps
    - Finish the session once the stream is exhausted
    - Abort the session when reading or a part upload fails, surfacing the original error
    - Refuse any call on a finished or aborted session
    """

    def __init__(self, client: DetaClient, chunk_size: int = UPLOAD_CHUNK_SIZE):
        """
        Initialize upload orchestrator.

        Args:
            client: DetaClient bound to the Drive root endpoint
            chunk_size: Maximum number of bytes read per part
        """
        self.client = client
        self.chunk_size = chunk_size

    def start(self, name: str) -> UploadSession:
        """
        Create an upload session on the server.

        Args:
            name: Name of the file being uploaded

        Returns:
            An open UploadSession
        """
        output = self.client.request("POST", "/uploads", params={"name": name})
        upload_id = output.json()["upload_id"]
        logger.debug(f"Started upload {upload_id} for {name}")
        return UploadSession(name=name, upload_id=upload_id)

    def upload_part(self, session: UploadSession, chunk: bytes,
                    content_type: Optional[str] = None) -> int:
        """
        Upload the next part of an open session.

        The part counter advances whether or not the upload succeeds, so a
        part number is never reused.

        Args:
            session: Open upload session
            chunk: Part content
            content_type: Content type of the file

        Returns:
            The part number that was sent
        """
        self._check_open(session)
        part = session.next_part
        session.next_part += 1
        logger.debug(f"Uploading part {part} ({len(chunk)} bytes) of {session.name}")
        self.client.request(
            "POST",
            f"/uploads/{session.upload_id}/parts",
            params={"name": session.name, "part": str(part)},
            raw_body=chunk,
            content_type=content_type
        )
        return part

    def finish(self, session: UploadSession):
        """Complete an open session."""
        self._check_open(session)
        self.client.request(
            "PATCH",
            f"/uploads/{session.upload_id}",
            params={"name": session.name}
        )
        session.state = UploadState.FINISHED
        logger.debug(f"Finished upload {session.upload_id} for {session.name}")

    def abort(self, session: UploadSession):
        """
        Abort an open session.

        The session is marked aborted even if the abort request fails;
        no further calls are made for it either way.
        """
        self._check_open(session)
        session.state = UploadState.ABORTED
        self.client.request(
            "DELETE",
            f"/uploads/{session.upload_id}",
            params={"name": session.name}
        )
        logger.warning(f"Aborted upload {session.upload_id} for {session.name}")

    def run(self, name: str, stream: IO, content_type: Optional[str] = None,
            progress_callback: Optional[Callable] = None) -> str:
        """
        Upload a whole stream as one file.

        Process:
        1. Start an upload session
        2. Read from the stream; upload the bytes in parts of at most chunk_size
        3. On an empty read, finish the session
        4. If reading or a part upload fails or is interrupted, abort and
           re-raise that error

        The stream is only read, never closed.

        Args:
            name: Name of the file
            stream: Readable binary (or text) stream
            content_type: Content type sent with every part
            progress_callback: Optional callback for progress updates
                             Called with (name: str, part: int, bytes_sent: int)

        Returns:
            The file name
        """
        session = self.start(name)
        bytes_sent = 0
        # Encoded text can exceed chunk_size bytes; the rest waits here for the next part
        pending = b""

        while True:
            try:
                if not pending:
                    pending = self._read_bytes(stream)
                chunk, pending = pending[:self.chunk_size], pending[self.chunk_size:]
                if chunk:
                    part = self.upload_part(session, chunk, content_type)
                    bytes_sent += len(chunk)
                    if progress_callback:
                        progress_callback(name, part, bytes_sent)
            except BaseException as e:
                self._abort_after_failure(session, e)
                raise

            if not chunk:
                self.finish(session)
                logger.info(f"Uploaded {name} in {session.next_part - 1} part(s), {bytes_sent} bytes")
                return name

    def _read_bytes(self, stream: IO) -> bytes:
        data = stream.read(self.chunk_size)
        if isinstance(data, str):
            return data.encode("utf-8")
        return bytes(data) if data else b""

    def _abort_after_failure(self, session: UploadSession, error: BaseException):
        # The triggering error stays primary; an abort failure is attached to it
        logger.error(f"Upload of {session.name} failed: {error}")
        try:
            self.abort(session)
        except Exception as abort_error:
            logger.error(f"Abort of upload {session.upload_id} also failed: {abort_error}")
            error.abort_error = abort_error

    def _check_open(self, session: UploadSession):
        if session.is_terminal:
            raise DetaValidationError(
                ErrorKind.UPLOAD_CLOSED,
                f"upload {session.upload_id} is {session.state.value}"
            )
