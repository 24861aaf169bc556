"""
FileDepot Server - Base Exception

Base exception class for all file storage errors.
"""


class FileDepotError(Exception):
    """Base exception for file storage errors."""
    pass
