from __future__ import annotations

import json
import logging
import os
from typing import List
from pathlib import Path

from ..adapters.base import Record

logger = logging.getLogger(__name__)


class JSONSnapshotStore:
    """
    Whole result set as one pretty-printed JSON array.
    Every save replaces the file; readers see the old or the new snapshot, never a mix.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def load(self) -> List[Record]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.error("Could not read snapshot %s: %s", self.path, exc)
            return []

        if not isinstance(data, list):
            logger.error("Snapshot %s is not a JSON array; ignoring it", self.path)
            return []

        records: List[Record] = []
        for i, item in enumerate(data):
            try:
                records.append(Record.from_dict(item))
            except (KeyError, TypeError) as exc:
                logger.warning("Skipping malformed snapshot entry #%s in %s: %r", i, self.path, exc)
        return records

    def save(self, records: List[Record]) -> bool:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump([r.to_dict() for r in records], f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except (OSError, TypeError) as exc:
            logger.error("Could not save snapshot %s: %s", self.path, exc)
            return False
        logger.info("Saved %s results to %s", len(records), self.path)
        return True
