"""Normalization of delimited list values such as wrapper exclusion names."""

from __future__ import annotations

from typing import Iterable, Sequence


class ListNormalizer:
    """Splits, trims and de-duplicates list-valued settings."""

    @staticmethod
    def split_and_normalize(raw_value: str, separator: str, strip_items: bool) -> list[str]:
        """Split ``raw_value`` on ``separator`` and drop blank items when stripping."""
        parts: Iterable[str] = raw_value.split(separator) if separator else [raw_value]
        items: list[str] = []
        for part in parts:
            candidate = part.strip() if strip_items else part
            if strip_items and not candidate:
                continue
            items.append(candidate)
        return items

    @staticmethod
    def deduplicate_preserving_order(items: Sequence[str], *, casefold: bool = False) -> tuple[str, ...]:
        """Remove duplicates, keeping the first occurrence.

        With ``casefold`` the comparison ignores case, which is how exclusion
        names are matched.
        """
        seen: set[str] = set()
        deduped: list[str] = []
        for item in items:
            key = item.casefold() if casefold else item
            if key in seen:
                continue
            seen.add(key)
            deduped.append(item)
        return tuple(deduped)
