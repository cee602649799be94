from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List
from abc import ABC, abstractmethod

from ..adapters.base import Record


class PageStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    FETCH_FAILED = "fetch_failed"


class StopReason(str, Enum):
    END_OF_LISTING = "end_of_listing"
    FETCH_FAILED = "fetch_failed"
    CAUGHT_UP = "caught_up"
    PAGE_LIMIT = "page_limit"


@dataclass
class PageOutcome:
    """
    Result of fetching and parsing one listing page.
    EMPTY and FETCH_FAILED both carry no records; only the tag tells them apart.
    """
    page: int
    status: PageStatus
    records: List[Record] = field(default_factory=list)


@dataclass
class CrawlReport:
    new_records: List[Record] = field(default_factory=list)
    results: List[Record] = field(default_factory=list)  # loaded snapshot + new records
    pages_fetched: int = 0
    stop_reason: StopReason = StopReason.END_OF_LISTING
    # False when the merged set could not be written; results then live only in memory.
    persisted: bool = True

    @property
    def total_results(self) -> int:
        return len(self.results)

    @property
    def message(self) -> str:
        if self.new_records:
            return f"{len(self.new_records)} new documents added."
        return "No new documents to add."


class CrawlEngine(ABC):
    """
    Abstract engine interface. Implementations own the crawl lifecycle.
    """
    @abstractmethod
    async def crawl(self) -> CrawlReport:  # pragma: no cover - interface
        ...
