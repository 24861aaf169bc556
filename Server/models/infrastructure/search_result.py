"""
FileDepot Server - Search Result Model

Dataclass for one page of file record search results.
"""

from dataclasses import dataclass
from typing import List


@dataclass
class SearchResult:
    """
    One page of records matching a search
    """
    items: List  # File records on this page
    total: int  # Number of matching records over all pages
    page: int  # 1-based page number
    page_size: int

    @property
    def page_count(self) -> int:
        """Number of pages needed for all matching records"""
        if self.page_size <= 0:
            return 0
        return (self.total + self.page_size - 1) // self.page_size

    def HasMore(self) -> bool:
        """Check if pages follow this one"""
        return self.page < self.page_count
