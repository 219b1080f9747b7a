"""
DetaKit - Base Error Exception

Base exception class for all DetaKit errors.

Author: DetaKit Project
"""

from typing import Optional

from .error_kind import ErrorKind


class DetaError(Exception):
    """Base exception for DetaKit errors, tagged with an ErrorKind."""

    def __init__(self, kind: ErrorKind, message: Optional[str] = None):
        self.kind = kind
        self.message = message
        if message:
            super().__init__(f"{kind.value}: {message}")
        else:
            super().__init__(kind.value)
