"""
Shared fixtures for FileDepot Server tests
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from file_manager import FileManager
from managers.database_manager import DatabaseManager
from models.infrastructure import StorageConfig
from resources import UploadedFileResource


@pytest.fixture
def db_manager(tmp_path):
    """Database manager backed by a fresh SQLite file"""
    manager = DatabaseManager(str(tmp_path / "database" / "test.db"))
    manager.InitializeDatabase()
    yield manager
    manager.Dispose()


@pytest.fixture
def storage_config(tmp_path):
    """Storage configuration rooted in the test's temporary directory"""
    return StorageConfig(base_path=str(tmp_path / "webroot"), base_url="http://cdn.example.com/")


@pytest.fixture
def file_manager(db_manager, storage_config):
    """File manager over the temporary database and storage root"""
    return FileManager(db_manager, storage_config)


@pytest.fixture
def files_root(tmp_path):
    """Resolved files directory used by storage_config"""
    return (tmp_path / "webroot" / "files").resolve()


@pytest.fixture
def make_resource():
    """Factory for in-memory resources"""
    def factory(filename="report.pdf", content=b"%PDF-1.4 test", mime_type=None):
        return UploadedFileResource(filename, content, mime_type)
    return factory
