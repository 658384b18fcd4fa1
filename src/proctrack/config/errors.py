"""Configuration error type."""

from __future__ import annotations

from typing import Any


class ConfigurationError(RuntimeError):
    """A setting is missing, unreadable or malformed."""

    @classmethod
    def invalid_value(cls, setting: str, value: Any, reason: str = "") -> "ConfigurationError":
        suffix = f". {reason}" if reason else ""
        return cls(f"Invalid value for {setting}: {value!r}{suffix}")

    @classmethod
    def missing_value(cls, setting: str, context: str = "") -> "ConfigurationError":
        suffix = f" ({context})" if context else ""
        return cls(f"{setting} is not set{suffix}")

    @classmethod
    def load_failed(cls, resource: str, source: str = "") -> "ConfigurationError":
        suffix = f" from {source}" if source else ""
        return cls(f"Failed to load {resource}{suffix}")


__all__ = ["ConfigurationError"]
