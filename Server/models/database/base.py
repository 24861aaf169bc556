"""
FileDepot Server - Database Base

Shared declarative base for all SQLAlchemy models.
Custom file model classes must derive from a model built on this base.
"""

from sqlalchemy.orm import declarative_base

# Create the shared declarative base
Base = declarative_base()
