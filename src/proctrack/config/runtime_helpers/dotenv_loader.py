"""Dotenv file loading for supervisor defaults."""

from __future__ import annotations

from pathlib import Path
from typing import Dict

from ..errors import ConfigurationError

_EXPORT_PREFIX = "export "


class DotenvLoader:
    """Loads ``KEY=value`` pairs from .env-style files."""

    @staticmethod
    def load_from_file(path: Path) -> Dict[str, str]:
        """
        Load key-value pairs from a .env file.

        Missing files yield an empty mapping; unreadable files raise.

        Raises:
            ConfigurationError: If the file exists but cannot be read
        """
        if not path.is_file():
            return {}

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:  # policy_guard: allow-silent-handler
            raise ConfigurationError.load_failed("supervisor defaults", str(path)) from exc

        values: Dict[str, str] = {}
        for line in text.splitlines():
            parsed = DotenvLoader.parse_line(line)
            if parsed is None:
                continue
            key, value = parsed
            values.setdefault(key, value)
        return values

    @staticmethod
    def parse_line(line: str) -> tuple[str, str] | None:
        """Return ``(key, value)`` for an assignment line, ``None`` for comments and blanks."""
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            return None
        if stripped.startswith(_EXPORT_PREFIX):
            stripped = stripped[len(_EXPORT_PREFIX) :]
        key, raw_value = stripped.split("=", 1)
        key = key.strip()
        if not key:
            return None
        return key, raw_value.strip().strip("'").strip('"')
