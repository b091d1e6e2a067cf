"""
Configuration module for SFTP artifact repositories.

This module provides the Pydantic model describing a repository
and YAML/environment loading utilities for it.
"""

from sftp_artifacts.config.models import RepositoryConfig
from sftp_artifacts.config.loader import (
    ConfigError,
    load_repository_config,
    load_config_from_dict,
    load_config_from_env,
    list_available_configs,
)

__all__ = [
    # Models
    "RepositoryConfig",
    # Loader
    "ConfigError",
    "load_repository_config",
    "load_config_from_dict",
    "load_config_from_env",
    "list_available_configs",
]
