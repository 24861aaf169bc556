"""
FileDepot Server - Directory Create Failed Exception

Exception raised when a storage directory cannot be created.
"""

from .file_depot_error import FileDepotError


class DirectoryCreateFailed(FileDepotError):
    """Exception raised when a storage directory cannot be created."""
    pass
