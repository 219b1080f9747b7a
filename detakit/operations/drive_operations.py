"""
DetaKit - Drive Operations Module

Implements the Deta Drive service: put, get, list, delete and delete_many.

Author: DetaKit Project
"""

import io
import logging
from pathlib import Path
from typing import Optional, Callable, List, Union, IO

from ..api import DetaClient
from ..exceptions import ErrorKind, DetaValidationError, DetaDeleteError
from ..models import ListOutput, DeleteManyOutput, DriveFile
from .upload_operations import UploadOrchestrator

# Configure logging
logger = logging.getLogger(__name__)


MAX_DELETE_NAMES = 1000
DEFAULT_LIST_LIMIT = 1000


class Drive:
    """
    Client for one Deta Drive.

    Responsibilities:
    - Upload files through the chunked upload orchestrator
    - Stream file downloads
    - List file names page by page
    - Delete files singly or in bulk
    """

    def __init__(self, client: DetaClient, name: str):
        """
        Initialize Drive handle.

        Args:
            client: DetaClient bound to "{endpoint}/{project_id}/{drive_name}"
            name: Drive name
        """
        self.client = client
        self.name = name
        self.uploads = UploadOrchestrator(client)

    def put(self, name: str, data: Union[bytes, str, IO, None] = None, *,
            path: Union[str, Path, None] = None,
            content_type: Optional[str] = None,
            progress_callback: Optional[Callable] = None) -> str:
        """
        Upload a file, replacing any file with the same name.

        Exactly one of data or path supplies the content. A stream passed as
        data is read but not closed; a file opened from path is closed.

        Args:
            name: File name
            data: bytes, str, or a readable stream
            path: Local file to upload
            content_type: Content type of the file
            progress_callback: Optional callback, called with (name, part, bytes_sent)

        Returns:
            The file name

        Raises:
            DetaValidationError: EMPTY_NAME, EMPTY_DATA (also when both data and path are given)
        """
        if not name:
            raise DetaValidationError(ErrorKind.EMPTY_NAME)

        if path is not None and data is not None:
            raise DetaValidationError(ErrorKind.EMPTY_DATA, "pass either data or path, not both")

        if path is not None:
            logger.debug(f"Uploading {name} from {path}")
            with open(path, "rb") as f:
                return self.uploads.run(name, f, content_type, progress_callback)

        if data is None:
            raise DetaValidationError(ErrorKind.EMPTY_DATA)
        if isinstance(data, str):
            data = data.encode("utf-8")
        if isinstance(data, (bytes, bytearray)):
            data = io.BytesIO(data)
        if not hasattr(data, "read"):
            raise DetaValidationError(
                ErrorKind.EMPTY_DATA,
                f"data must be bytes, str or a readable stream, got {type(data).__name__}"
            )
        return self.uploads.run(name, data, content_type, progress_callback)

    def get(self, name: str) -> DriveFile:
        """
        Download a file.

        Args:
            name: File name

        Returns:
            DriveFile streaming the content; the caller must close it

        Raises:
            DetaAPIError: NOT_FOUND if the file does not exist
        """
        if not name:
            raise DetaValidationError(ErrorKind.EMPTY_NAME)
        output = self.client.request(
            "GET",
            "/files/download",
            params={"name": name},
            stream=True
        )
        return DriveFile(name, output.response)

    def list(self, limit: int = DEFAULT_LIST_LIMIT, prefix: Optional[str] = None,
             last: Optional[str] = None) -> ListOutput:
        """
        List one page of file names.

        Pass `result.last` as `last` to get the next page; a None cursor
        means no further pages exist.

        Args:
            limit: Maximum number of names in the page
            prefix: Only list names starting with this prefix
            last: Cursor returned by the previous page

        Returns:
            ListOutput with names and paging metadata
        """
        params = {"limit": str(limit)}
        if prefix:
            params["prefix"] = prefix
        if last:
            params["last"] = last
        output = self.client.request("GET", "/files", params=params)
        return ListOutput.model_validate(output.json())

    def delete_many(self, names: List[str]) -> DeleteManyOutput:
        """
        Delete up to 1000 files in one request.

        Failures are reported per name in the result, not raised.

        Args:
            names: File names

        Returns:
            DeleteManyOutput with deleted names and failed name -> reason

        Raises:
            DetaValidationError: EMPTY_NAMES, TOO_MANY_NAMES
        """
        if not names:
            raise DetaValidationError(ErrorKind.EMPTY_NAMES)
        if len(names) > MAX_DELETE_NAMES:
            raise DetaValidationError(
                ErrorKind.TOO_MANY_NAMES,
                f"at most {MAX_DELETE_NAMES} names per request, got {len(names)}"
            )
        output = self.client.request("DELETE", "/files", json_body={"names": list(names)})
        result = DeleteManyOutput.model_validate(output.json())
        for failed_name, reason in result.failed.items():
            logger.warning(f"Failed to delete {failed_name} from drive {self.name}: {reason}")
        logger.info(f"Deleted {len(result.deleted)} file(s) from drive {self.name}")
        return result

    def delete(self, name: str) -> str:
        """
        Delete a single file.

        Returns the name even if the file did not exist.

        Raises:
            DetaDeleteError: DELETE_FAILED if the service reports a failure for the name
        """
        if not name:
            raise DetaValidationError(ErrorKind.EMPTY_NAME)
        result = self.delete_many([name])
        if name in result.failed:
            raise DetaDeleteError(name, result.failed[name])
        return name
