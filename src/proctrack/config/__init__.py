"""Shared configuration helpers and dataclasses."""

from .errors import ConfigurationError
from .runtime import env_bool, env_float, env_int, env_list, env_str, reset_default_values
from .settings import DEFAULT_WRAPPER_EXCLUDES, SupervisorSettings

__all__ = [
    "ConfigurationError",
    "DEFAULT_WRAPPER_EXCLUDES",
    "SupervisorSettings",
    "env_bool",
    "env_float",
    "env_int",
    "env_list",
    "env_str",
    "reset_default_values",
]
