"""
FileDepot Server - Managers Package

This package contains manager classes for the database, the file record
index and configuration.
"""

from managers.database_manager import DatabaseManager

__all__ = ['DatabaseManager']
