from __future__ import annotations

from typing import List, Protocol

from ..adapters.base import Record


class ResultStore(Protocol):
    def load(self) -> List[Record]:
        ...

    def save(self, records: List[Record]) -> bool:
        """Replace the stored set. Returns False if the write did not happen."""
        ...
