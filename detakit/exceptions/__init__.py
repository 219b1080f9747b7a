"""
DetaKit - Exceptions Package

Contains the error kind enumeration and all exception classes.

Author: DetaKit Project
"""

from .error_kind import ErrorKind
from .deta_error import DetaError
from .validation_error import DetaValidationError
from .api_error import DetaAPIError
from .auth_error import DetaAuthError
from .server_error import DetaServerError
from .delete_error import DetaDeleteError
from .put_error import DetaPutError

__all__ = [
    'ErrorKind',
    'DetaError',
    'DetaValidationError',
    'DetaAPIError',
    'DetaAuthError',
    'DetaServerError',
    'DetaDeleteError',
    'DetaPutError'
]
