"""
FileDepot Server - Models Package

This package contains all data models for the FileDepot server:
- database: SQLAlchemy database models
- api: API endpoint Pydantic models
- infrastructure: Dataclass models for configuration and storage bookkeeping
"""
