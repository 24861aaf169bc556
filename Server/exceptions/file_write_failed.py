"""
FileDepot Server - File Write Failed Exception

Exception raised when resource bytes cannot be written to storage.
"""

from .file_depot_error import FileDepotError


class FileWriteFailed(FileDepotError):
    """Exception raised when a resource cannot be written to disk."""
    pass
