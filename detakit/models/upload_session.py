"""
DetaKit - Upload Session Model

Contains the UploadState enum and the UploadSession record tracked by the
upload orchestrator for one chunked upload.

Author: DetaKit Project
"""

from dataclasses import dataclass
from enum import Enum


class UploadState(Enum):
    """
    Enum representing the states of a chunked upload session.

    States:
    - OPEN: Session created on the server, parts may be uploaded
    - FINISHED: Upload completed; terminal
    - ABORTED: Upload abandoned; terminal
    """
    OPEN = "open"
    FINISHED = "finished"
    ABORTED = "aborted"


@dataclass
class UploadSession:
    """Server-assigned upload session and the next part number to send."""
    name: str
    upload_id: str
    next_part: int = 1
    state: UploadState = UploadState.OPEN

    @property
    def is_terminal(self) -> bool:
        return self.state is not UploadState.OPEN
