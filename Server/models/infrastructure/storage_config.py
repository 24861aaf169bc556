"""
FileDepot Server - Storage Configuration Model

Immutable dataclass holding the storage settings a FileManager is built with.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StorageConfig:
    """
    Storage settings for a FileManager

    Read once at construction; a FileManager never mutates its config.
    """
    file_dir: str = "files"  # Name of the files directory under base_path
    base_path: str = "webroot"  # Directory the files directory lives in
    base_url: Optional[str] = None  # None means the request base url is used
    model_class: Optional[type] = None  # None means models.database.File
    database_path: str = "database/filedepot.db"
    use_x_sendfile: bool = False
