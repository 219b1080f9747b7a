"""
DetaKit - Server Error Exception

Exception raised for server-side failures and unexpected status codes.

Author: DetaKit Project
"""

from .api_error import DetaAPIError


class DetaServerError(DetaAPIError):
    """Exception for server errors."""
    pass
