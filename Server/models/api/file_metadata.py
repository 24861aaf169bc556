"""
FileDepot Server - File Metadata API Model

Pydantic model for file metadata responses.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class FileMetadata(BaseModel):
    """Response model for file metadata"""
    id: int
    name: str
    extension: str
    path: Optional[str]
    filename: str
    mime_type: str
    byte_size: int
    created_at: datetime
    hash: Optional[str]
    state: str
    url: str

    model_config = {"from_attributes": True}
