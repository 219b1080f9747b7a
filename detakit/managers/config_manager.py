"""
DetaKit - Configuration Manager

Handles loading and saving client configuration from/to detakit.json.
Manages OS credential store integration for project key storage.

Author: DetaKit Project
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Dict, Any, Union

# Configure logging
logger = logging.getLogger(__name__)


CONFIG_FILE_NAME = "detakit.json"
CONFIG_PATH_ENV = "DETAKIT_CONFIG"
KEYRING_SERVICE = "DetaKit"

# Default configuration values
DEFAULT_CONFIG = {
    "base_endpoint": "https://database.deta.sh/v1",
    "drive_endpoint": "https://drive.deta.sh/v1",
    "project_id": None,  # Project id stored in config, project key in OS credential store
    "log_level": "INFO"
}

# Environment variables overriding config values
ENV_OVERRIDES = {
    "base_endpoint": "DETA_BASE_ROOT_ENDPOINT",
    "drive_endpoint": "DETA_DRIVE_ROOT_ENDPOINT"
}


class ConfigManager:
    """
    Manages client configuration and credentials.

    Responsibilities:
    - Load/save detakit.json (working directory, or DETAKIT_CONFIG)
    - Apply environment overrides for service endpoints
    - Store/retrieve the project key from the OS credential store via keyring
    """

    def __init__(self, config_file: Union[str, Path, None] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Explicit config file path; defaults to $DETAKIT_CONFIG
                         or detakit.json in the working directory
        """
        if config_file is None:
            config_file = os.environ.get(CONFIG_PATH_ENV) or Path.cwd() / CONFIG_FILE_NAME
        self.config_file = Path(config_file)
        self.config: Dict[str, Any] = DEFAULT_CONFIG.copy()

    def load_config(self) -> Dict[str, Any]:
        """
        Load configuration from the config file.

        A missing file is not an error; defaults are used and nothing is written.

        Returns:
            Configuration dictionary
        """
        self.config = DEFAULT_CONFIG.copy()
        if self.config_file.exists():
            logger.debug(f"Loading configuration from {self.config_file}")
            with open(self.config_file, 'r') as f:
                self.config.update(json.load(f))
            logger.debug("Configuration loaded successfully")
        else:
            logger.debug(f"Configuration file not found at {self.config_file}, using defaults")
        return self.config

    def save_config(self):
        """Save current configuration to the config file."""
        logger.debug(f"Saving configuration to {self.config_file}")
        with open(self.config_file, 'w') as f:
            json.dump(self.config, f, indent=2)
        logger.debug("Configuration saved successfully")

    def get(self, key: str, default=None) -> Any:
        """
        Get configuration value; environment overrides win over the file.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        env_name = ENV_OVERRIDES.get(key)
        if env_name and os.environ.get(env_name):
            return os.environ[env_name]
        value = self.config.get(key)
        return default if value is None else value

    def set(self, key: str, value: Any):
        """
        Set configuration value and save to file.

        Args:
            key: Configuration key
            value: Configuration value
        """
        self.config[key] = value
        self.save_config()

    def store_project_key(self, project_key: str):
        """
        Store a project key in the OS credential store.

        The project id part is kept in the config file so the key can be
        found again.

        Args:
            project_key: Key of the form "{project_id}_{secret}"
        """
        import keyring

        project_id = project_key.split("_")[0]
        logger.info(f"Storing project key for project: {project_id}")

        self.set("project_id", project_id)
        keyring.set_password(KEYRING_SERVICE, project_id, project_key)

        logger.debug("Project key stored successfully")

    def get_project_key(self) -> Optional[str]:
        """
        Retrieve the project key from the OS credential store.

        Returns:
            The project key or None if not found
        """
        import keyring

        project_id = self.get("project_id")
        if not project_id:
            logger.debug("No project id found in configuration")
            return None

        project_key = keyring.get_password(KEYRING_SERVICE, project_id)
        if not project_key:
            logger.warning(f"No project key found in credential store for project: {project_id}")
            return None

        logger.debug(f"Project key retrieved for project: {project_id}")
        return project_key
