"""
FileDepot Server - Database Manager

This module manages the database connection, table creation and sessions.
"""

import logging
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from models.database import Base

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Manages database connection, initialization, and sessions
    """

    def __init__(self, db_path: str = "database/filedepot.db", url: str = None):
        """
        Initialize database manager

        Args:
            db_path: Path to SQLite database file
            url: Full SQLAlchemy url, overrides db_path when given
        """
        self.db_path = db_path

        if url is None:
            # Ensure database directory exists
            db_dir = Path(db_path).parent
            if db_dir and str(db_dir) != '.':
                db_dir.mkdir(parents=True, exist_ok=True)
            url = f"sqlite:///{db_path}"

        self.engine = create_engine(url, echo=False)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine, expire_on_commit=False)

    def InitializeDatabase(self) -> None:
        """
        Initialize the database
        Creates tables if they don't exist, including tables of custom file
        model classes sharing the declarative base.
        """
        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Database ready: {self.engine.url}")

    def GetSession(self):
        """
        Get a new database session

        Returns:
            Session: SQLAlchemy session
        """
        return self.SessionLocal()

    def Dispose(self) -> None:
        """Close all pooled connections"""
        self.engine.dispose()
