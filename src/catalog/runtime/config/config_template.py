"""Configuration template substitution utilities."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.catalog.runtime.config.config_data import DEV_API_KEY, ConfigData

_PLACEHOLDER = re.compile(
    r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)"
    r"(?::(?P<op>[-?])(?P<arg>[^}]*))?\}"
)


def substitute_env_vars(text: str) -> str:
    """Fill ``${...}`` placeholders in ``text`` from the environment.

    ``${VAR}`` must be set, ``${VAR:-default}`` falls back to ``default`` and
    ``${VAR:?message}`` fails with ``message`` when ``VAR`` is unset.
    """

    def _resolve(match: re.Match[str]) -> str:
        name, op, arg = match.group("name", "op", "arg")
        value = os.environ.get(name)
        if value is not None:
            return value
        if op == "-":
            return arg
        if op == "?":
            raise ValueError(f"Required environment variable {name}: {arg}")
        raise ValueError(f"Required environment variable {name} not set")

    return _PLACEHOLDER.sub(_resolve, text)


def _environment_overrides(env_mode: str) -> dict[str, str]:
    """Collect ``<ENV>_``-prefixed variables with the prefix stripped."""
    prefix = f"{env_mode.upper()}_"
    return {
        var[len(prefix):]: value
        for var, value in os.environ.items()
        if var.startswith(prefix) and len(var) > len(prefix)
    }


def load_templated_yaml(file_path: Path) -> ConfigData:
    """
    Load a YAML file with environment variable substitution.

    Args:
        file_path: Path to the YAML file

    Returns:
        Parsed YAML with environment variables substituted

    Raises:
        ValueError: If required environment variables are missing or the
            result is not a valid configuration
        FileNotFoundError: If the YAML file doesn't exist
    """
    with open(file_path) as f:
        content = f.read()

    env_mode = os.getenv("APP_ENVIRONMENT", "development")
    logger.info("Loading configuration for environment: {}", env_mode)

    overrides = _environment_overrides(env_mode)
    if overrides:
        logger.info("Applying environment-specific overrides: {}", sorted(overrides))
    for var_name, var_value in overrides.items():
        os.environ[var_name] = var_value

    substituted_content = substitute_env_vars(content)

    try:
        loaded = yaml.safe_load(substituted_content)
        if not loaded:
            raise ValueError("Failed to parse YAML")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e

    try:
        config = ConfigData(**(loaded.get("config") or {}))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    validate_security(config)
    return config


def validate_security(config: ConfigData) -> None:
    """Refuse to run production with a missing or development API key."""
    if config.app.environment != "production":
        if config.security.api_key == DEV_API_KEY:
            logger.warning("Using the development API key; set API_KEY before deploying")
        return

    if not config.security.api_key or config.security.api_key == DEV_API_KEY:
        raise ValueError("An explicit API_KEY is required in production")
