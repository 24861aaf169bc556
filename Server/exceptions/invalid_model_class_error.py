"""
FileDepot Server - Invalid Model Class Exception

Exception raised when the configured file model class cannot be used.
"""

from .file_depot_error import FileDepotError


class InvalidModelClassError(FileDepotError):
    """Exception raised when the configured model class is not a file model."""
    pass
