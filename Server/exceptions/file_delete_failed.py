"""
FileDepot Server - File Delete Failed Exception

Exception raised when an existing stored file cannot be removed.
"""

from .file_depot_error import FileDepotError


class FileDeleteFailed(FileDepotError):
    """Exception raised when an existing file cannot be removed."""
    pass
