from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Protocol

# Labels for blocks whose fields came out empty; such blocks never become records.
PLACEHOLDER_TITLE = "No Title Found"
PLACEHOLDER_ID = "No Internal ID Found"


class SearchAdapter(Protocol):
    """
    Interface for site-specific search logic.
    Engine owns HTTP, pagination and dedup; adapters own URLs and parsing.
    """

    name: str

    def build_search_url(self, page: int, today: Optional[date] = None) -> str:
        """Return the request target for one 1-based results page."""
        ...

    def parse(self, html: str) -> List["Record"]:
        """Return the records of one results page, in document order."""
        ...


@dataclass
class Record:
    """One discovered document listing. ``internal_id`` is the dedup key."""

    title: str
    link: str
    internal_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "link": self.link, "internalId": self.internal_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Record":
        """Build from the snapshot shape. Raises KeyError if a field is absent."""
        return cls(
            title=str(data["title"]),
            link=str(data["link"]),
            internal_id=str(data["internalId"]),
        )
