"""
FileDepot Server - Main FastAPI Application

This module contains the main FastAPI application for the FileDepot server.
It exposes REST API endpoints for storing, retrieving and deleting files.
"""

import logging
from logging.handlers import RotatingFileHandler
from datetime import datetime
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from managers.config_manager import ConfigManager
from managers.database_manager import DatabaseManager
from file_manager import FileManager
from version import VERSION


logger = logging.getLogger(__name__)

# Import database module for shared db_manager and file_manager instances
import database


def ConfigureLogging(log_level: str = "INFO") -> None:
    """
    Configure logging to write to both console and a rotating file

    Args:
        log_level: Name of the root log level
    """
    # Create logs directory if it doesn't exist
    logs_dir = Path("logs")
    logs_dir.mkdir(exist_ok=True)

    # Create log filename with timestamp
    log_filename = logs_dir / f"filedepot-server-{datetime.now().strftime('%Y-%m-%d')}.log"

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            # Console handler
            logging.StreamHandler(),
            # File handler with rotation (max 10MB per file, keep 10 backup files)
            RotatingFileHandler(
                log_filename,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=10,
                encoding='utf-8'
            )
        ]
    )


# ==================== Lifespan Events ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan event handler for startup and shutdown
    Manages database and file storage initialization
    """
    # Startup
    logger.info("FileDepot Server starting up...")

    config_manager = ConfigManager()
    config_manager.load_config()
    storage_config = config_manager.get_storage_config()

    # Initialize database manager in database module
    database.db_manager = DatabaseManager(storage_config.database_path)

    # Validates the configured model class before any table is created
    database.file_manager = FileManager(database.db_manager, storage_config)

    database.db_manager.InitializeDatabase()
    logger.info("Database initialized successfully")

    logger.info(f"Storing files in {database.file_manager.GetBasePath(absolute=True)}")
    logger.info("Server startup complete")

    yield

    # Shutdown
    logger.info("FileDepot Server shutting down...")
    database.db_manager.Dispose()
    database.file_manager = None
    database.db_manager = None
    logger.info("Shutdown complete")


# ==================== FastAPI Application ====================

app = FastAPI(
    title="FileDepot Server",
    description="Managed file storage with a metadata index",
    version=VERSION,
    lifespan=lifespan
)

# ==================== CORS Middleware ====================

# Allow all origins for development
# In production, this should be restricted to specific client URLs
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==================== Import Routers ====================

from routes import status, files


# ==================== Include Routers ====================

app.include_router(status.router)
app.include_router(files.router)


# ==================== Main Entry Point ====================

def main():
    """
    Run the server using uvicorn
    """
    config_manager = ConfigManager()
    config_manager.load_config()
    ConfigureLogging(config_manager.get("log_level", "INFO"))

    logger.info("Starting FileDepot Server...")

    # host="0.0.0.0" allows connections from other machines on the network
    uvicorn.run(
        "server:app",
        host="0.0.0.0",
        port=8000,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
