from __future__ import annotations

from typing import Iterable, Set


class DedupIndex:
    """
    Set of internal ids already known to the result set.
    Mirrors the records; persists nothing itself.
    """

    def __init__(self, ids: Iterable[str] = ()) -> None:
        self._ids: Set[str] = set(ids)

    def contains(self, internal_id: str) -> bool:
        return internal_id in self._ids

    def add(self, internal_id: str) -> bool:
        """Add an id. Returns True only if it was not present before."""
        if internal_id in self._ids:
            return False
        self._ids.add(internal_id)
        return True

    def __contains__(self, internal_id: object) -> bool:
        return internal_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)
