"""
DetaKit - Authentication Error Exception

Exception raised when the service rejects the project key.

Author: DetaKit Project
"""

from .api_error import DetaAPIError


class DetaAuthError(DetaAPIError):
    """Exception for authentication errors."""
    pass
