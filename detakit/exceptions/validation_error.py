"""
DetaKit - Validation Error Exception

Exception raised for invalid input detected before any network call.

Author: DetaKit Project
"""

from .deta_error import DetaError


class DetaValidationError(DetaError):
    """Exception for local validation errors."""
    pass
