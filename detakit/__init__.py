"""
DetaKit - Client Library for Deta Base and Drive

Typed access to the Deta key-value store (Base) and blob store (Drive).

Author: DetaKit Project
"""

from .deta import Deta
from .operations import Base, Drive
from .models import (
    item_field,
    Condition,
    Increment,
    AppendOne,
    AppendMany,
    PrependOne,
    PrependMany,
    Trim,
    FetchOutput,
    ListOutput,
    DeleteManyOutput,
    DriveFile
)
from .exceptions import (
    ErrorKind,
    DetaError,
    DetaValidationError,
    DetaAPIError,
    DetaAuthError,
    DetaServerError,
    DetaDeleteError,
    DetaPutError
)

__version__ = "1.0.0"

__all__ = [
    'Deta',
    'Base',
    'Drive',
    'item_field',
    'Condition',
    'Increment',
    'AppendOne',
    'AppendMany',
    'PrependOne',
    'PrependMany',
    'Trim',
    'FetchOutput',
    'ListOutput',
    'DeleteManyOutput',
    'DriveFile',
    'ErrorKind',
    'DetaError',
    'DetaValidationError',
    'DetaAPIError',
    'DetaAuthError',
    'DetaServerError',
    'DetaDeleteError',
    'DetaPutError'
]
