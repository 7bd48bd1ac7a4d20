"""errqueue configuration - Config loading and management."""

from .loader import (
    apply_env_overrides,
    configure,
    get_config,
    load_config,
    load_from_dict,
    reset_config,
    resolve_env_vars,
)
from .models import ErrQueueConfig, LogLevel

__all__ = [
    # Config models
    "ErrQueueConfig",
    "LogLevel",
    # Loader
    "apply_env_overrides",
    "configure",
    "get_config",
    "load_config",
    "load_from_dict",
    "reset_config",
    "resolve_env_vars",
]
