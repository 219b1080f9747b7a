"""
DetaKit - Put Error Exception

Exception raised when the service stores only part of a put batch and
reports the remaining items as failed.

Author: DetaKit Project
"""

from typing import Any, Dict, List

from .api_error import DetaAPIError
from .error_kind import ErrorKind


class DetaPutError(DetaAPIError):
    """Exception for items the service refused to store."""

    def __init__(self, status_code: int, keys: List[str], failed: List[Dict[str, Any]]):
        super().__init__(
            ErrorKind.BAD_ITEM,
            status_code,
            f"{len(failed)} item(s) were not stored"
        )
        self.keys = keys
        self.failed = failed
