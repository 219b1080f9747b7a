"""
DetaKit - API Error Exception

Exception raised when the remote service answers with an error status.

Author: DetaKit Project
"""

from typing import Optional

from .deta_error import DetaError
from .error_kind import ErrorKind


class DetaAPIError(DetaError):
    """Exception for error responses, carrying the HTTP status code."""

    def __init__(self, kind: ErrorKind, status_code: int, message: Optional[str] = None):
        super().__init__(kind, message)
        self.status_code = status_code
