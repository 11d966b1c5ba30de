"""Command history housekeeping."""

from __future__ import annotations

from typing import Iterable, List, Optional


def tidy_up_history(history: Optional[Iterable[str]], max_size: int) -> List[str]:
    """Keep only the latest occurrence of each command, and at most ``max_size``."""
    entries = list(history or [])
    last_index = {entry: i for i, entry in enumerate(entries)}
    tidy = [entry for entry, _ in sorted(last_index.items(), key=lambda kv: kv[1])]
    if len(tidy) > max_size:
        tidy = tidy[len(tidy) - max_size:]
    return tidy