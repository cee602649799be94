from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence, Tuple
from urllib.parse import quote, urlencode

from .base import Record
from ..config import CrawlConfig
from ..utils.dates import date_window, format_ddmmyyyy
from ..utils.parsing import extract_records


class EurLexAdapter:
    """Advanced-search listing on eur-lex.europa.eu, filtered to a rolling date window."""

    name = "eurlex"
    search_path = "/search.html"

    # Scope every term to title + text, across all document domains.
    _fixed_params: Sequence[Tuple[str, str]] = (
        ("SUBDOM_INIT", "ALL_ALL"),
        ("DTS_SUBDOM", "ALL_ALL"),
        ("textScope0", "ti-te"),
        ("textScope1", "ti-te"),
        ("DTS_DOM", "ALL"),
    )

    def __init__(self, config: CrawlConfig | None = None) -> None:
        self.config = config or CrawlConfig()

    @property
    def origin(self) -> str:
        return self.config.base_url.rstrip("/")

    def date_filter(self, today: Optional[date] = None) -> str:
        start, end = date_window(self.config.window_months, today)
        return f"ALL:{format_ddmmyyyy(start)}|{format_ddmmyyyy(end)}"

    def build_search_url(self, page: int, today: Optional[date] = None) -> str:
        if page < 1:
            raise ValueError(f"page numbers start at 1, got {page}")

        params: List[Tuple[str, str]] = list(self._fixed_params)
        params += [("lang", self.config.language), ("type", "advanced")]
        params += [(f"andText{i}", term) for i, term in enumerate(self.config.search_terms)]
        params += [("date0", self.date_filter(today)), ("page", str(page))]

        # quote with no safe chars: spaces become %20, ':' and '|' are escaped.
        return f"{self.origin}{self.search_path}?{urlencode(params, quote_via=quote)}"

    def parse(self, html: str) -> List[Record]:
        return extract_records(html, origin=self.origin)
