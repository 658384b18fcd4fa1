"""Supervisor settings resolved from the environment."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import ConfigurationError
from .runtime import env_float, env_int, env_list

# Shell interpreters, console hosts and JS package-manager front-ends that
# commonly sit between the launched command and the real worker.
DEFAULT_WRAPPER_EXCLUDES: tuple[str, ...] = (
    "powershell",
    "cmd",
    "conhost",
    "bash",
    "sh",
    "x-terminal-emulator",
    "npm",
    "npx",
    "yarn",
    "pnpm",
)

DEFAULT_RESOLVE_MAX_WAIT_MS = 2000
DEFAULT_RESOLVE_POLL_INTERVAL_MS = 100
GRACEFUL_SHUTDOWN_TIMEOUT_SECONDS = 3.0
FORCE_KILL_TIMEOUT_SECONDS = 2.0


@dataclass(frozen=True)
class SupervisorSettings:
    """Tunables shared by the resolver and the tree terminator."""

    resolve_max_wait_ms: int = DEFAULT_RESOLVE_MAX_WAIT_MS
    resolve_poll_interval_ms: int = DEFAULT_RESOLVE_POLL_INTERVAL_MS
    wrapper_excludes: tuple[str, ...] = field(default=DEFAULT_WRAPPER_EXCLUDES)
    graceful_timeout_seconds: float = GRACEFUL_SHUTDOWN_TIMEOUT_SECONDS
    force_timeout_seconds: float = FORCE_KILL_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if self.resolve_poll_interval_ms <= 0:
            raise ConfigurationError.invalid_value(
                "resolve_poll_interval_ms", self.resolve_poll_interval_ms, "Must be positive"
            )
        if self.resolve_max_wait_ms < 0:
            raise ConfigurationError.invalid_value("resolve_max_wait_ms", self.resolve_max_wait_ms, "Must be non-negative")
        for name in ("graceful_timeout_seconds", "force_timeout_seconds"):
            value = getattr(self, name)
            if value < 0:
                raise ConfigurationError.invalid_value(name, value, "Must be non-negative")

    @classmethod
    def from_env(cls) -> "SupervisorSettings":
        """Build settings from ``PROCTRACK_*`` environment variables."""
        return cls(
            resolve_max_wait_ms=env_int("PROCTRACK_RESOLVE_MAX_WAIT_MS", or_value=DEFAULT_RESOLVE_MAX_WAIT_MS),
            resolve_poll_interval_ms=env_int(
                "PROCTRACK_RESOLVE_POLL_INTERVAL_MS", or_value=DEFAULT_RESOLVE_POLL_INTERVAL_MS
            ),
            wrapper_excludes=env_list(
                "PROCTRACK_WRAPPER_EXCLUDES", or_value=DEFAULT_WRAPPER_EXCLUDES, casefold_unique=True
            ),
            graceful_timeout_seconds=env_float(
                "PROCTRACK_GRACEFUL_TIMEOUT_SECONDS", or_value=GRACEFUL_SHUTDOWN_TIMEOUT_SECONDS
            ),
            force_timeout_seconds=env_float("PROCTRACK_FORCE_TIMEOUT_SECONDS", or_value=FORCE_KILL_TIMEOUT_SECONDS),
        )


__all__ = [
    "DEFAULT_RESOLVE_MAX_WAIT_MS",
    "DEFAULT_RESOLVE_POLL_INTERVAL_MS",
    "DEFAULT_WRAPPER_EXCLUDES",
    "FORCE_KILL_TIMEOUT_SECONDS",
    "GRACEFUL_SHUTDOWN_TIMEOUT_SECONDS",
    "SupervisorSettings",
]
