"""
DetaKit - Deta Entry Point

The Deta object validates a project key and hands out Base and Drive
handles bound to the resolved service endpoints.

    deta = Deta("project_key")
    users = deta.Base("users")
    users.put({"key": "jimmy", "age": 20})

Author: DetaKit Project
"""

import logging
import os
from typing import Optional

from .api import DetaClient
from .exceptions import ErrorKind, DetaValidationError
from .managers import ConfigManager
from .operations import Base, Drive

# Configure logging
logger = logging.getLogger(__name__)


PROJECT_KEY_ENV = "DETA_PROJECT_KEY"


class Deta:
    """
    Top-level Deta service instance.

    Immutable after construction: holds the project key and the
    configuration used to resolve service endpoints.
    """

    def __init__(self, project_key: Optional[str] = None,
                 config_manager: Optional[ConfigManager] = None):
        """
        Initialize Deta instance.

        The project key is taken from the argument, then DETA_PROJECT_KEY,
        then the OS credential store.

        Args:
            project_key: Key of the form "{project_id}_{secret}"
            config_manager: Configuration source; a default one is loaded if omitted

        Raises:
            DetaValidationError: BAD_PROJECT_KEY if no valid key is found
        """
        if config_manager is None:
            config_manager = ConfigManager()
            config_manager.load_config()
        self.config = config_manager

        if not project_key:
            project_key = os.environ.get(PROJECT_KEY_ENV)
        if not project_key:
            project_key = self.config.get_project_key()
        if not project_key or len(project_key.split("_")) != 2:
            raise DetaValidationError(ErrorKind.BAD_PROJECT_KEY)

        self.project_key = project_key
        self.project_id = project_key.split("_")[0]
        logger.debug(f"Initialized Deta instance for project {self.project_id}")

    def Base(self, name: str) -> Base:
        """
        Get a handle on a Base.

        Raises:
            DetaValidationError: BAD_BASE_NAME if name is empty
        """
        if not name:
            raise DetaValidationError(ErrorKind.BAD_BASE_NAME, "base name is empty")
        endpoint = self.config.get("base_endpoint")
        client = DetaClient(f"{endpoint}/{self.project_id}/{name}", self.project_key)
        return Base(client, name)

    def Drive(self, name: str) -> Drive:
        """
        Get a handle on a Drive.

        Raises:
            DetaValidationError: BAD_DRIVE_NAME if name is empty
        """
        if not name:
            raise DetaValidationError(ErrorKind.BAD_DRIVE_NAME, "drive name is empty")
        endpoint = self.config.get("drive_endpoint")
        client = DetaClient(f"{endpoint}/{self.project_id}/{name}", self.project_key)
        return Drive(client, name)
