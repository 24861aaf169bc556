"""
FileDepot Server - File Operations API Models

Pydantic models for file listing, delete and consistency responses.
"""

from typing import List
from pydantic import BaseModel

from models.api.file_metadata import FileMetadata


class FileListResponse(BaseModel):
    data: List[FileMetadata]
    total: int
    page: int
    page_size: int
    has_more: bool


class FileDeleteResponse(BaseModel):
    success: bool
    id: int


class ConsistencyReportResponse(BaseModel):
    consistent: bool
    missing_files: List[int]
    unverified_files: List[int]
    hash_mismatches: List[int]
    orphaned_files: List[str]
