"""
DetaKit - Managers Package

Contains the configuration manager.

Author: DetaKit Project
"""

from .config_manager import ConfigManager, DEFAULT_CONFIG

__all__ = [
    'ConfigManager',
    'DEFAULT_CONFIG'
]
