"""Shared fixtures: config pointing at a temp snapshot, and canned result pages."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple, Union

import pytest

from eurlex_crawler.config import CrawlConfig


def result_block(internal_id: str, title: Optional[str] = None, href: Optional[str] = None) -> str:
    """One ``.SearchResult`` block the way EUR-Lex renders it."""
    title = f"Regulation {internal_id}" if title is None else title
    href = f"/legal-content/EN/TXT/?uri={internal_id}" if href is None else href
    href_attr = f' href="{href}"' if href else ""
    return (
        '<div class="SearchResult">'
        f"<h2><a{href_attr}>  {title}  </a></h2>"
        f'<dl><dd class="internalNum"> {internal_id} </dd></dl>'
        "</div>"
    )


def results_page(ids: Iterable[str]) -> str:
    blocks = "".join(result_block(i) for i in ids)
    return f"<html><body><div id='results'>{blocks}</div></body></html>"


def ids(prefix: str, count: int) -> List[str]:
    return [f"{prefix}{n}" for n in range(count)]


class FakeFetch:
    """
    Stands in for ``fetch_text``. Maps page numbers to ids, raw HTML, ``None``
    (fetch failure) or an exception to raise. Unlisted pages are empty.
    """

    def __init__(self, pages: Dict[int, Union[List[str], str, None, Exception]]) -> None:
        self.pages = pages
        self.calls: List[Tuple[str, dict]] = []

    def _page_of(self, url: str) -> int:
        return int(url.rsplit("page=", 1)[1])

    async def __call__(self, session, url: str, **kwargs) -> Optional[str]:
        self.calls.append((url, kwargs))
        entry = self.pages.get(self._page_of(url), [])
        if isinstance(entry, Exception):
            raise entry
        if entry is None or isinstance(entry, str):
            return entry
        return results_page(entry)

    @property
    def pages_requested(self) -> List[int]:
        return [self._page_of(url) for url, _ in self.calls]


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture()
def config(tmp_path) -> CrawlConfig:
    cfg = CrawlConfig(snapshot_path=str(tmp_path / "data" / "results.json"))
    cfg.validate()
    return cfg


@pytest.fixture()
def sleep() -> RecordingSleep:
    return RecordingSleep()
