"""
FileDepot Server - File State Model

Stages a file record moves through while it is being saved.
"""

from enum import Enum


class FileState(str, Enum):
    """
    Save stages of a file record

    PENDING:  row persisted, bytes not on disk yet
    WRITTEN:  bytes on disk, checksum not stamped yet
    VERIFIED: checksum stamped on the row

    SaveModel only ever returns VERIFIED records. PENDING and WRITTEN rows are
    visible through LoadModel and search while a save is running, or after a
    save failed part way.
    """
    PENDING = "pending"
    WRITTEN = "written"
    VERIFIED = "verified"
