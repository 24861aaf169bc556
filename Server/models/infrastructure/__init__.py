"""
FileDepot Server - Infrastructure Models Package

This package contains dataclass models for infrastructure components
like storage configuration, the file record interface and consistency reports.
"""

from models.infrastructure.storage_config import StorageConfig
from models.infrastructure.file_record_like import FileRecordLike, FILE_RECORD_ATTRIBUTES
from models.infrastructure.file_state import FileState
from models.infrastructure.inconsistency_report import InconsistencyReport
from models.infrastructure.search_result import SearchResult

__all__ = [
    'StorageConfig',
    'FileRecordLike',
    'FILE_RECORD_ATTRIBUTES',
    'FileState',
    'InconsistencyReport',
    'SearchResult',
]
