"""
DetaKit - Error Kind Enumeration

Every failure raised by the library carries one of these kinds.
Callers compare kinds, never exception identity.

Author: DetaKit Project
"""

from enum import Enum


class ErrorKind(Enum):
    """
    Enum of every error kind raised by DetaKit.

    Local validation kinds are raised before any network call.
    Protocol kinds are derived from the HTTP status of a response.
    """
    # Local validation
    BAD_PROJECT_KEY = "bad project key"
    BAD_BASE_NAME = "bad base name"
    BAD_DRIVE_NAME = "bad drive name"
    BAD_ITEM = "bad item/items"
    BAD_QUERY = "bad query"
    BAD_UPDATE = "bad update"
    BAD_DESTINATION = "bad destination"
    EMPTY_KEY = "key is empty"
    EMPTY_NAME = "name is empty"
    EMPTY_NAMES = "names is empty"
    EMPTY_DATA = "no data provided"
    TOO_MANY_ITEMS = "too many items"
    TOO_MANY_NAMES = "too many names"
    UPLOAD_CLOSED = "upload session is closed"

    # Protocol
    BAD_REQUEST = "bad request"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not found"
    CONFLICT = "conflict"
    INTERNAL_SERVER_ERROR = "internal server error"

    # Partial failure translated into an error
    DELETE_FAILED = "delete failed"
