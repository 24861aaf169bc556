"""
FileDepot Server - Inconsistency Report Model

Dataclass describing mismatches between the file index and the storage tree.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class InconsistencyReport:
    """
    Result of comparing file records against files on disk
    """
    missing_files: List[int] = field(default_factory=list)  # Row ids with no file on disk
    unverified_files: List[int] = field(default_factory=list)  # Row ids with a file but no hash
    hash_mismatches: List[int] = field(default_factory=list)  # Row ids whose file hash differs
    orphaned_files: List[str] = field(default_factory=list)  # Paths no row resolves to

    def IsConsistent(self) -> bool:
        """Check if no inconsistency was found"""
        return not (self.missing_files or self.unverified_files
                    or self.hash_mismatches or self.orphaned_files)
