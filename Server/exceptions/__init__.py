"""
FileDepot Server - Exceptions Package

Contains all exception classes raised by the file storage layer.
"""

from .file_depot_error import FileDepotError
from .model_persist_error import ModelPersistError, ValidationError
from .directory_create_failed import DirectoryCreateFailed
from .file_write_failed import FileWriteFailed
from .file_read_failed import FileReadFailed
from .file_delete_failed import FileDeleteFailed
from .record_errors import RecordDeleteFailed, RecordNotFound
from .invalid_model_class_error import InvalidModelClassError

__all__ = [
    'FileDepotError',
    'ModelPersistError',
    'ValidationError',
    'DirectoryCreateFailed',
    'FileWriteFailed',
    'FileReadFailed',
    'FileDeleteFailed',
    'RecordDeleteFailed',
    'RecordNotFound',
    'InvalidModelClassError'
]
