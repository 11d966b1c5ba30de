"""Request headers: each key maps to one or more distinct values."""

from __future__ import annotations

from typing import Iterable, List

_ALLOWED_PUNCTUATION = "-_."


def _distinct(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))


def _valid_key_char(ch: str) -> bool:
    return ch.isalpha() or ch.isdecimal() or ch in _ALLOWED_PUNCTUATION


class Headers(dict):
    """Mapping of header names to lists of distinct values."""

    def add(self, key: str, value: str) -> None:
        """Append ``value`` to ``key``.

        A new key may consist only of letters, digits, '-', '_' and '.'.
        """
        if key not in self:
            for ch in key:
                if not _valid_key_char(ch):
                    raise ValueError(f"invalid char '{ch}' in key")
        self[key] = _distinct([*self.get(key, []), value])

    def remove(self, key: str) -> None:
        """Delete all values of ``key``; missing keys are ignored."""
        self.pop(key, None)