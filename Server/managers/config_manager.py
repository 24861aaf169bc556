"""
FileDepot Server - Configuration Manager

Handles loading server configuration from filedepot.json and turning it into
the immutable StorageConfig a FileManager is built with.
"""

import importlib
import json
import logging
import os
from pathlib import Path
from typing import Optional, Dict, Any

from exceptions import InvalidModelClassError
from models.infrastructure.storage_config import StorageConfig

# Configure logging
logger = logging.getLogger(__name__)


# Environment variable naming an alternative configuration file
CONFIG_ENV_VAR = "FILEDEPOT_CONFIG"

# Default configuration values
DEFAULT_CONFIG = {
    "file_dir": "files",
    "base_path": "webroot",
    "base_url": None,  # None means use the request base url
    "model_class": None,  # "module:ClassName", None means models.database:File
    "database_path": "database/filedepot.db",
    "use_x_sendfile": False,
    "log_level": "INFO"
}


def ResolveModelClass(reference: Optional[str]) -> Optional[type]:
    """
    Import a model class from a "module:ClassName" reference

    Args:
        reference: Class reference, or None for the default model

    Returns:
        type: The referenced class, or None when no reference is given

    Raises:
        InvalidModelClassError: If the reference is malformed or cannot be imported
    """
    if not reference:
        return None

    module_name, _, class_name = reference.partition(':')
    if not module_name or not class_name:
        raise InvalidModelClassError(
            f"Model class \"{reference}\" must be given as \"module:ClassName\""
        )

    try:
        module = importlib.import_module(module_name)
        return getattr(module, class_name)
    except (ImportError, AttributeError) as e:
        raise InvalidModelClassError(f"Failed to import model class \"{reference}\": {e}") from e


class ConfigManager:
    """
    Manages server configuration.

    Responsibilities:
    - Load filedepot.json, merged over DEFAULT_CONFIG
    - Provide configuration values to other modules
    - Build the StorageConfig used by FileManager
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Path to the configuration file. Defaults to the
                         FILEDEPOT_CONFIG environment variable, then
                         filedepot.json in the working directory.
        """
        if config_file is None:
            config_file = os.environ.get(CONFIG_ENV_VAR, "filedepot.json")

        self.config_file = Path(config_file)
        self.config: Dict[str, Any] = {}

    def load_config(self) -> Dict[str, Any]:
        """
        Load configuration from the configuration file.
        Uses the defaults if the file doesn't exist.

        Returns:
            Configuration dictionary
        """
        self.config = DEFAULT_CONFIG.copy()

        if self.config_file.exists():
            logger.debug(f"Loading configuration from {self.config_file}")
            with open(self.config_file, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
            unknown = set(loaded) - set(DEFAULT_CONFIG)
            if unknown:
                logger.warning(f"Ignoring unknown configuration keys: {', '.join(sorted(unknown))}")
            for key in DEFAULT_CONFIG:
                if key in loaded:
                    self.config[key] = loaded[key]
            logger.info("Configuration loaded successfully")
        else:
            logger.info(f"Configuration file not found, using defaults ({self.config_file})")

        return self.config

    def get(self, key: str, default=None) -> Any:
        """
        Get configuration value.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        return self.config.get(key, default)

    def get_storage_config(self) -> StorageConfig:
        """
        Build the storage configuration from the loaded values.

        Returns:
            StorageConfig

        Raises:
            InvalidModelClassError: If model_class cannot be imported
        """
        if not self.config:
            self.load_config()

        return StorageConfig(
            file_dir=self.config["file_dir"],
            base_path=self.config["base_path"],
            base_url=self.config["base_url"],
            model_class=ResolveModelClass(self.config["model_class"]),
            database_path=self.config["database_path"],
            use_x_sendfile=bool(self.config["use_x_sendfile"])
        )
