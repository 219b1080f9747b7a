"""
DetaKit - Operations Package

This package contains the Base, Drive and upload operation classes.
"""

from .base_operations import Base, MAX_PUT_ITEMS
from .drive_operations import Drive, MAX_DELETE_NAMES
from .upload_operations import UploadOrchestrator, UPLOAD_CHUNK_SIZE

__all__ = [
    'Base',
    'Drive',
    'UploadOrchestrator',
    'MAX_PUT_ITEMS',
    'MAX_DELETE_NAMES',
    'UPLOAD_CHUNK_SIZE'
]
