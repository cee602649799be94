from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable, List, Optional

from aiohttp import ClientSession

from .base import CrawlEngine, CrawlReport, PageOutcome, PageStatus, StopReason
from ..config import CrawlConfig
from ..adapters.base import Record, SearchAdapter
from ..adapters.eurlex import EurLexAdapter
from ..store.base import ResultStore
from ..store.dedup import DedupIndex
from ..store.json_store import JSONSnapshotStore
from ..utils.http import create_session, fetch_text

logger = logging.getLogger(__name__)

FetchFn = Callable[..., Awaitable[Optional[str]]]
SleepFn = Callable[[float], Awaitable[None]]


class PaginatedCrawlEngine(CrawlEngine):
    """
    Incremental crawler for a paginated search listing.
    - Pages are fetched strictly one after another, with a jittered pause in between.
    - The adapter owns URLs and parsing; the store owns the snapshot.
    - Stops on an empty page, or on a short page that brought nothing new.
    """
    def __init__(
        self,
        config: CrawlConfig,
        adapter: SearchAdapter | None = None,
        store: ResultStore | None = None,
        *,
        fetch: FetchFn = fetch_text,
        sleep: SleepFn = asyncio.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config
        self.adapter = adapter or EurLexAdapter(config)
        self.store = store or JSONSnapshotStore(config.snapshot_path)
        self._fetch = fetch
        self._sleep = sleep
        self._rng = rng or random.Random()

    def next_delay(self) -> float:
        """Seconds to wait before the next page, drawn from [min_delay_ms, max_delay_ms)."""
        cfg = self.config
        return self._rng.randrange(cfg.min_delay_ms, cfg.max_delay_ms) / 1000.0

    async def fetch_page(self, session: ClientSession, page: int) -> PageOutcome:
        url = self.adapter.build_search_url(page)
        logger.info("Scraping page %s...", page)
        html = await self._fetch(
            session,
            url,
            timeout=self.config.request_timeout,
            user_agent=self.config.user_agent,
        )
        if html is None:
            logger.warning("Page %s could not be fetched; treating it as empty", page)
            return PageOutcome(page=page, status=PageStatus.FETCH_FAILED)

        records = self.adapter.parse(html)
        logger.info("Found %s results on page %s", len(records), page)
        status = PageStatus.OK if records else PageStatus.EMPTY
        return PageOutcome(page=page, status=status, records=records)

    async def crawl(self) -> CrawlReport:
        cfg = self.config
        existing = self.store.load()
        index = DedupIndex(r.internal_id for r in existing)
        new_records: List[Record] = []
        logger.info("Starting crawl with %s known results", len(existing))

        page = 1
        session = create_session()
        try:
            while True:
                outcome = await self.fetch_page(session, page)

                if not outcome.records:
                    stop = (
                        StopReason.FETCH_FAILED
                        if outcome.status is PageStatus.FETCH_FAILED
                        else StopReason.END_OF_LISTING
                    )
                    break

                # add() is False for known ids and for repeats within this page.
                fresh = [r for r in outcome.records if index.add(r.internal_id)]
                new_records.extend(fresh)
                logger.debug("Page %s: %s new, %s known", page, len(fresh), len(outcome.records) - len(fresh))

                # A short page with nothing new is the tail of the listing. A full
                # stale page may hide newer results further on, so keep going.
                if not fresh and len(outcome.records) < cfg.page_size:
                    stop = StopReason.CAUGHT_UP
                    break

                if cfg.max_pages is not None and page >= cfg.max_pages:
                    logger.warning("Stopping at page limit %s", cfg.max_pages)
                    stop = StopReason.PAGE_LIMIT
                    break

                await self._sleep(self.next_delay())
                page += 1
        finally:
            await session.close()

        logger.info("Crawl stopped after page %s (%s)", page, stop.value)

        if not new_records:
            logger.info("No new documents to add.")
            return CrawlReport(results=existing, pages_fetched=page, stop_reason=stop)

        merged = existing + new_records
        persisted = self.store.save(merged)
        if not persisted:
            logger.error("Merged results (%s) were not persisted", len(merged))
        return CrawlReport(
            new_records=new_records,
            results=merged,
            pages_fetched=page,
            stop_reason=stop,
            persisted=persisted,
        )
