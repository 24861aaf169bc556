"""
FileDepot Server - Model Persist Error Exceptions

Exceptions raised when a file record cannot be written to the metadata index.
Both are raised before anything touches the filesystem.
"""

from typing import List, Optional

from .file_depot_error import FileDepotError


class ModelPersistError(FileDepotError):
    """Exception raised when the metadata store rejects a file record."""
    pass


class ValidationError(ModelPersistError):
    """
    Exception raised when a file record fails validation

    Attributes:
        errors: List of human readable validation messages
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []

    def __str__(self) -> str:
        if not self.errors:
            return super().__str__()
        return f"{super().__str__()}: {'; '.join(self.errors)}"
