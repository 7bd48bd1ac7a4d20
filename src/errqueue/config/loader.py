"""errqueue configuration loader."""

import logging
import os
import re
from dataclasses import fields, replace
from pathlib import Path
from typing import Any

import yaml

from errqueue.exceptions import ConfigError

from .models import ErrQueueConfig, LogLevel

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "ERRQUEUE_CONFIG_PATH"
ENV_OVERRIDES = {
    "ERRQUEUE_CAPTURE_STACKTRACE": "capture_stacktrace",
    "ERRQUEUE_STACKTRACE_DEPTH": "stacktrace_depth",
    "ERRQUEUE_LOG_LEVEL": "log_level",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def resolve_env_vars(value: str) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references

    Returns:
        String with env vars resolved

    Raises:
        ConfigError: If required var not set
    """
    pattern = r"\$\{([^}:]+)(?::([?-])([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)  # '-' or '?' or None
        operand = match.group(3)  # default value or error message

        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        if operator == "?":
            raise ConfigError(operand or f"Required environment variable {var_name} not set")
        raise ConfigError(f"Required environment variable {var_name} not set")

    return re.sub(pattern, replacer, value)


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _TRUE | _FALSE:
        return value.strip().lower() in _TRUE
    raise ConfigError(f"{key} must be a boolean, got {value!r}")


def _parse_depth(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a positive integer, got {value!r}")
    try:
        depth = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key} must be a positive integer, got {value!r}") from e
    if depth <= 0:
        raise ConfigError(f"{key} must be a positive integer, got {value!r}")
    return depth


def _parse_level(key: str, value: Any) -> LogLevel:
    try:
        return LogLevel(str(value).upper())
    except ValueError as e:
        choices = ", ".join(level.value for level in LogLevel)
        raise ConfigError(f"{key} must be one of {choices}, got {value!r}") from e


_PARSERS = {
    "capture_stacktrace": _parse_bool,
    "stacktrace_depth": _parse_depth,
    "log_level": _parse_level,
}


def load_from_dict(data: dict[str, Any], base: ErrQueueConfig | None = None) -> ErrQueueConfig:
    """Build a configuration from a mapping.

    Accepts either a bare mapping of fields or one nested under an
    ``errqueue`` key. String values have env var references resolved.

    Args:
        data: Configuration dictionary
        base: Configuration to start from (defaults to ErrQueueConfig())

    Returns:
        Loaded ErrQueueConfig instance

    Raises:
        ConfigError: If the mapping has unknown keys or invalid values
    """
    if not isinstance(data, dict):
        raise ConfigError(f"configuration must be a mapping, got {type(data).__name__}")
    section = data.get("errqueue", data)
    if section is None:
        section = {}
    if not isinstance(section, dict):
        raise ConfigError("errqueue must be a mapping")

    known = {f.name for f in fields(ErrQueueConfig)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")

    values: dict[str, Any] = {}
    for key, value in section.items():
        if isinstance(value, str):
            value = resolve_env_vars(value)
        values[key] = _PARSERS[key](key, value)

    return replace(base or ErrQueueConfig(), **values)


def apply_env_overrides(config: ErrQueueConfig) -> ErrQueueConfig:
    """Apply single-field overrides from ERRQUEUE_* environment variables."""
    values: dict[str, Any] = {}
    for env_name, key in ENV_OVERRIDES.items():
        raw = os.environ.get(env_name)
        if raw is None or raw == "":
            continue
        values[key] = _PARSERS[key](env_name, raw)
    return replace(config, **values) if values else config


def load_config(path: str | Path | None = None) -> ErrQueueConfig:
    """Load configuration from a YAML file.

    Resolution order if path not specified:
    1. ERRQUEUE_CONFIG_PATH environment variable
    2. Defaults

    Environment overrides are applied last in both cases.

    Args:
        path: Optional path to config file

    Returns:
        Loaded ErrQueueConfig instance

    Raises:
        ConfigError: If the file is missing or invalid
    """
    if path is None:
        path = os.environ.get(CONFIG_PATH_ENV) or None

    if path is None:
        return apply_env_overrides(ErrQueueConfig())

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}") from e

    config = apply_env_overrides(load_from_dict(data))
    logger.debug("errqueue configuration loaded from %s", config_path)
    return config


_config: ErrQueueConfig | None = None


def get_config() -> ErrQueueConfig:
    """Get the process-wide configuration, loading it on first use.

    Returns:
        Current ErrQueueConfig instance
    """
    global _config  # noqa: PLW0603
    if _config is None:
        configure(load_config())
    assert _config is not None
    return _config


def configure(config: ErrQueueConfig) -> None:
    """Install a configuration and apply its log level, when one is set.

    Args:
        config: New configuration
    """
    global _config  # noqa: PLW0603
    _config = config
    if config.log_level is not None:
        logging.getLogger("errqueue").setLevel(config.log_level.to_logging())


def reset_config() -> None:
    """Forget the installed configuration (for testing)."""
    global _config  # noqa: PLW0603
    _config = None
