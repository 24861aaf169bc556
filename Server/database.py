"""
FileDepot Server - Database Module

This module exports the shared db_manager and file_manager instances for use
across the application.
"""

from managers.database_manager import DatabaseManager
from file_manager import FileManager

# Global instances
# Initialized in server.py lifespan handler
db_manager: DatabaseManager = None
file_manager: FileManager = None
