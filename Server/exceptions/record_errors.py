"""
FileDepot Server - Record Exceptions

Exceptions raised for file record lookup and removal failures.
"""

from .file_depot_error import FileDepotError


class RecordNotFound(FileDepotError):
    """Exception raised when no file record exists for an id."""

    def __init__(self, record_id):
        super().__init__(f"Failed to locate file model with id \"{record_id}\"")
        self.record_id = record_id


class RecordDeleteFailed(FileDepotError):
    """Exception raised when a file record cannot be removed from the index."""
    pass
