"""Application context holding the active configuration.

The configuration is loaded once at import and stored in a ``ContextVar`` so
tests and scripts can swap it for the duration of a block with
:func:`with_context`.
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel

from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.config.config_template import (
    load_templated_yaml,
    validate_security,
)
from src.catalog.runtime.config.settings import EnvironmentVariables

CONFIG_PATH = Path("config.yaml")


@dataclass
class AppContext:
    config: ConfigData


def load_config(path: Path = CONFIG_PATH) -> ConfigData:
    """Load config.yaml when present, otherwise read plain environment variables."""
    if path.exists():
        return load_templated_yaml(path)
    logger.info("{} not found; configuring from environment variables", path)
    config = EnvironmentVariables().to_config()
    validate_security(config)
    return config


_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=AppContext(config=load_config())
)


def get_context() -> AppContext:
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    return _app_context.set(context)


def _overlay_set_fields(base: dict[str, Any], override: BaseModel) -> dict[str, Any]:
    """Copy the fields explicitly assigned on ``override`` onto ``base``.

    Nested models are walked field by field, so ``override.app.port = 9000``
    changes the port and keeps the inherited host.
    """
    merged = dict(base)
    for name in type(override).model_fields:
        value = getattr(override, name)
        if isinstance(value, BaseModel) and isinstance(merged.get(name), dict):
            merged[name] = _overlay_set_fields(merged[name], value)
        elif name in override.model_fields_set:
            merged[name] = value.model_dump() if isinstance(value, BaseModel) else value
    return merged


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily apply ``config_override`` on top of the current configuration.

    Example:
        override = ConfigData()
        override.database.backend = "memory"
        with with_context(override):
            assert get_config().database.backend == "memory"
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    current = get_context()
    merged = ConfigData.model_validate(
        _overlay_set_fields(current.config.model_dump(), config_override)
    )
    token = set_context(replace(current, config=merged))
    try:
        yield
    finally:
        _app_context.reset(token)


def set_config(config: ConfigData) -> None:
    """Replace the entire current configuration with the provided one."""
    set_context(replace(get_context(), config=config))


def get_config() -> ConfigData:
    return get_context().config
