from __future__ import annotations

import asyncio
import logging
from typing import Callable

from .base import CrawlEngine, CrawlReport
from ..config import CrawlConfig
from ..utils.loader import load_symbol

logger = logging.getLogger(__name__)


def build_engine(cfg: CrawlConfig) -> CrawlEngine:
    """Instantiate engine, adapter and store from the dotted paths in ``cfg``."""
    engine_cls = load_symbol(cfg.engine)
    adapter_cls = load_symbol(cfg.adapter)
    store_cls = load_symbol(cfg.store)
    return engine_cls(cfg, adapter=adapter_cls(cfg), store=store_cls(cfg.snapshot_path))


class CrawlCoordinator:
    """
    Single owner of the snapshot within a process.

    Crawls triggered while another is running wait for it to finish, so
    load/merge/save never interleave. Other processes are not coordinated.
    """

    def __init__(
        self,
        config: CrawlConfig,
        engine_factory: Callable[[CrawlConfig], CrawlEngine] = build_engine,
    ) -> None:
        self.config = config
        self._engine_factory = engine_factory
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    async def run(self) -> CrawlReport:
        if self.busy:
            logger.info("A crawl is already running; waiting for it to finish")
        async with self._lock:
            engine = self._engine_factory(self.config)
            report = await engine.crawl()
        logger.info(
            "%s Total: %s (stop: %s, persisted: %s)",
            report.message,
            report.total_results,
            report.stop_reason.value,
            report.persisted,
        )
        return report
