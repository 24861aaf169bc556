"""
FileDepot Server - File Record Capability Interface

Protocol describing what the storage layer needs from a file record.
Any configured model class must provide all of these attributes.
"""

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class FileRecordLike(Protocol):
    """Attributes every stored file record exposes"""
    id: Optional[int]
    name: str
    extension: str
    path: Optional[str]
    filename: str
    mime_type: str
    byte_size: int
    created_at: datetime
    hash: Optional[str]


# Attribute names checked when validating a configured model class
FILE_RECORD_ATTRIBUTES = (
    'id', 'name', 'extension', 'path', 'filename',
    'mime_type', 'byte_size', 'created_at', 'hash'
)
