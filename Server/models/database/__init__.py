"""
FileDepot Server - Database Models Package

This package contains the SQLAlchemy database model definitions.
All models share a common declarative base.
"""

# Import Base first
from models.database.base import Base

# Import all models
from models.database.file import File

# Export all models and Base
__all__ = [
    'Base',
    'File',
]
