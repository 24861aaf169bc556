"""
FileDepot Server - API Models Package

This package contains Pydantic models for all API endpoints.
"""

from models.api.file_metadata import FileMetadata
from models.api.file_operations import (
    FileListResponse,
    FileDeleteResponse,
    ConsistencyReportResponse
)

__all__ = [
    'FileMetadata',
    'FileListResponse',
    'FileDeleteResponse',
    'ConsistencyReportResponse',
]
