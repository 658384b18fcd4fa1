"""Helper modules for the spawn coordinator."""

from .error_mapping import map_spawn_error
from .platform_flags import PlatformCapabilities, creation_kwargs

__all__ = [
    "PlatformCapabilities",
    "creation_kwargs",
    "map_spawn_error",
]
