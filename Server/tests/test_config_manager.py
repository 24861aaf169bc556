"""
Tests for configuration loading in FileDepot Server
"""

import json
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from exceptions import InvalidModelClassError
from managers.config_manager import ConfigManager, ResolveModelClass, DEFAULT_CONFIG
from models.database import File


def test_defaults_when_file_missing(tmp_path):
    """A missing configuration file yields the defaults"""
    config_manager = ConfigManager(str(tmp_path / "missing.json"))
    assert config_manager.load_config() == DEFAULT_CONFIG

    storage_config = config_manager.get_storage_config()
    assert storage_config.file_dir == "files"
    assert storage_config.base_path == "webroot"
    assert storage_config.base_url is None
    assert storage_config.model_class is None


def test_loads_values(tmp_path):
    """Values from the file override defaults, unknown keys are ignored"""
    config_file = tmp_path / "filedepot.json"
    config_file.write_text(json.dumps({
        "file_dir": "uploads",
        "base_url": "https://cdn.example.com",
        "model_class": "models.database:File",
        "use_x_sendfile": True,
        "colour": "blue"
    }))

    config_manager = ConfigManager(str(config_file))
    config_manager.load_config()
    storage_config = config_manager.get_storage_config()

    assert storage_config.file_dir == "uploads"
    assert storage_config.base_path == "webroot"
    assert storage_config.base_url == "https://cdn.example.com"
    assert storage_config.model_class is File
    assert storage_config.use_x_sendfile
    assert config_manager.get("colour") is None


def test_config_file_from_environment(tmp_path, monkeypatch):
    """The FILEDEPOT_CONFIG variable selects the configuration file"""
    config_file = tmp_path / "custom.json"
    config_file.write_text(json.dumps({"file_dir": "media"}))
    monkeypatch.setenv("FILEDEPOT_CONFIG", str(config_file))

    config_manager = ConfigManager()
    config_manager.load_config()
    assert config_manager.get("file_dir") == "media"


def test_storage_config_is_immutable(tmp_path):
    """StorageConfig cannot be changed after construction"""
    storage_config = ConfigManager(str(tmp_path / "missing.json")).get_storage_config()
    with pytest.raises(AttributeError):
        storage_config.file_dir = "elsewhere"


def test_resolve_model_class_errors():
    """Malformed or unknown model class references are rejected"""
    assert ResolveModelClass(None) is None
    with pytest.raises(InvalidModelClassError):
        ResolveModelClass("File")
    with pytest.raises(InvalidModelClassError):
        ResolveModelClass("no_such_module:File")
    with pytest.raises(InvalidModelClassError):
        ResolveModelClass("models.database:Missing")
