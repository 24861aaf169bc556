"""
FileDepot Server - File Read Failed Exception

Exception raised when a stored file cannot be read.
"""

from .file_depot_error import FileDepotError


class FileReadFailed(FileDepotError):
    """Exception raised when a stored file cannot be read."""
    pass
