"""
DetaKit - Delete Error Exception

Exception raised when a single-file delete is reported as failed
inside an otherwise successful bulk delete response.

Author: DetaKit Project
"""

from .deta_error import DetaError
from .error_kind import ErrorKind


class DetaDeleteError(DetaError):
    """Exception for a file the service refused to delete."""

    def __init__(self, name: str, reason: str):
        super().__init__(ErrorKind.DELETE_FAILED, f"failed to delete {name}: {reason}")
        self.name = name
        self.reason = reason
