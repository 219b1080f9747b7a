"""
DetaKit - Models Package

Contains the item, query and update models, response models and
enumerations used by the client.

Author: DetaKit Project
"""

from .item import (
    item_field,
    normalize_item,
    normalize_value,
    decode_item,
    is_record,
    is_record_type
)
from .query import Condition, compile_query, split_operator, OPERATORS
from .updates import (
    Increment,
    AppendOne,
    AppendMany,
    PrependOne,
    PrependMany,
    Trim,
    compile_updates
)
from .paging import Paging, FetchOutput, ListOutput
from .drive_results import DeleteManyOutput, DriveFile
from .upload_session import UploadState, UploadSession

__all__ = [
    'item_field',
    'normalize_item',
    'normalize_value',
    'decode_item',
    'is_record',
    'is_record_type',
    'Condition',
    'compile_query',
    'split_operator',
    'OPERATORS',
    'Increment',
    'AppendOne',
    'AppendMany',
    'PrependOne',
    'PrependMany',
    'Trim',
    'compile_updates',
    'Paging',
    'FetchOutput',
    'ListOutput',
    'DeleteManyOutput',
    'DriveFile',
    'UploadState',
    'UploadSession'
]
