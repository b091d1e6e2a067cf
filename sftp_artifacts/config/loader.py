"""
YAML and environment loaders for repository settings.

This module provides functions to load and validate repository
configuration files from the config/ directory, or from environment
variables (a .env file is honoured).
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from sftp_artifacts.config.models import RepositoryConfig

logger = logging.getLogger(__name__)

# Default config directory relative to the working directory
DEFAULT_CONFIG_DIR = "config"

# Environment variables read by load_config_from_env()
ENV_ARTIFACT_URI = "SFTP_ARTIFACT_URI"
ENV_RUN_ID = "MLFLOW_RUN_ID"
ENV_KEY_PATH = "SFTP_KEY_PATH"
ENV_VERIFY_HOST_KEY = "SFTP_VERIFY_HOST_KEY"
ENV_KNOWN_HOSTS = "SFTP_KNOWN_HOSTS"


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""
    pass


def _format_validation_error(e: ValidationError) -> str:
    error_messages = []
    for error in e.errors():
        location = " -> ".join(str(loc) for loc in error["loc"])
        error_messages.append(f"  {location}: {error['msg']}")
    return "\n".join(error_messages)


def _config_dir(config_dir: Optional[str]) -> Path:
    return Path(config_dir or os.getenv("ARTIFACT_CONFIG_DIR", DEFAULT_CONFIG_DIR))


def get_config_path(name: str, config_dir: Optional[str] = None) -> Path:
    """
    Get the path to a repository configuration file.

    Args:
        name: Name of the configuration (without .yaml extension)
        config_dir: Optional custom config directory path

    Returns:
        Path to the configuration file

    Raises:
        ConfigError: If config file doesn't exist
    """
    config_path = _config_dir(config_dir) / f"{name}.yaml"

    if not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}. "
            f"Please create {name}.yaml in the config directory."
        )

    return config_path


def load_yaml_file(file_path: Path) -> dict:
    """Parse a YAML file that must hold a non-empty mapping of settings."""
    try:
        text = Path(file_path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {file_path}: {e}") from e

    try:
        settings = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse {file_path} as YAML: {e}") from e

    if settings is None:
        raise ConfigError(f"Empty config file: {file_path}")
    if not isinstance(settings, dict):
        raise ConfigError(
            f"{file_path} must hold a mapping of settings, not {type(settings).__name__}"
        )
    return settings


def load_repository_config(
    name: str,
    config_dir: Optional[str] = None
) -> RepositoryConfig:
    """
    Load and validate a repository configuration.

    Args:
        name: Name of the configuration (matches filename without .yaml)
        config_dir: Optional custom config directory path

    Returns:
        Validated RepositoryConfig object

    Raises:
        ConfigError: If file not found, invalid YAML, or validation fails

    Example:
        >>> config = load_repository_config("training")
        >>> config.host
        'sftp.example.com'
    """
    config_path = get_config_path(name, config_dir)
    logger.info(f"Loading configuration from: {config_path}")

    raw_config = load_yaml_file(config_path)

    try:
        config = RepositoryConfig(**raw_config)
        logger.info(f"Loaded repository for run '{config.run_id}' at {config.safe_uri}")
        return config

    except ValidationError as e:
        raise ConfigError(
            f"Invalid configuration in {config_path}:\n" + _format_validation_error(e)
        ) from e


def load_config_from_dict(config_dict: dict) -> RepositoryConfig:
    """
    Create a RepositoryConfig from a dictionary.

    Useful for testing or when configuration is provided
    programmatically.

    Raises:
        ConfigError: If validation fails
    """
    try:
        return RepositoryConfig(**config_dict)
    except ValidationError as e:
        raise ConfigError(
            "Invalid configuration:\n" + _format_validation_error(e)
        ) from e


def load_config_from_env() -> RepositoryConfig:
    """
    Build a RepositoryConfig from environment variables.

    Reads SFTP_ARTIFACT_URI and MLFLOW_RUN_ID (required), and
    SFTP_KEY_PATH, SFTP_VERIFY_HOST_KEY, SFTP_KNOWN_HOSTS (optional).
    Values from a .env file are loaded first without overriding the
    process environment.

    Raises:
        ConfigError: If a required variable is missing or validation fails
    """
    load_dotenv()

    artifact_uri = os.getenv(ENV_ARTIFACT_URI)
    run_id = os.getenv(ENV_RUN_ID)
    missing = [
        var for var, value in ((ENV_ARTIFACT_URI, artifact_uri), (ENV_RUN_ID, run_id))
        if not value
    ]
    if missing:
        raise ConfigError(
            f"Missing environment variable(s): {', '.join(missing)}. "
            "Please set them in your environment or .env file."
        )

    config_dict = {"artifact_uri": artifact_uri, "run_id": run_id}
    if os.getenv(ENV_KEY_PATH):
        config_dict["key_path"] = os.getenv(ENV_KEY_PATH)
    if os.getenv(ENV_VERIFY_HOST_KEY):
        config_dict["verify_host_key"] = os.getenv(ENV_VERIFY_HOST_KEY).lower() in ("1", "true", "yes")
    if os.getenv(ENV_KNOWN_HOSTS):
        config_dict["known_hosts_path"] = os.getenv(ENV_KNOWN_HOSTS)

    return load_config_from_dict(config_dict)


def list_available_configs(config_dir: Optional[str] = None) -> list[str]:
    """Sorted names of the ``*.yaml`` configurations in the config directory."""
    directory = _config_dir(config_dir)
    if not directory.is_dir():
        logger.warning(f"No config directory at {directory}")
        return []
    return sorted(p.stem for p in directory.glob("*.yaml") if p.is_file())
