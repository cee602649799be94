from __future__ import annotations

import argparse
import asyncio
import json
import logging
from typing import List

from ..config import CrawlConfig
from ..utils.logging import setup_logging
from ..engines.base import CrawlReport
from ..engines.coordinator import CrawlCoordinator


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Incremental EUR-Lex search harvester")
    p.add_argument("--config", type=str, help="Path to config JSON", default=None)
    p.add_argument("--snapshot", type=str, default=None, help="Snapshot file path (default from config)")
    p.add_argument("--max-pages", type=int, default=None, help="Stop after this many pages (default: unbounded)")
    p.add_argument("--terms", type=str, default=None, help="Comma-separated search terms")
    p.add_argument("--log-level", type=str, default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
    p.add_argument("--serve", action="store_true", help="Run REST API server instead of a single crawl")
    p.add_argument("--host", type=str, default="127.0.0.1", help="API host (when --serve)")
    p.add_argument("--port", type=int, default=3000, help="API port (when --serve)")
    return p


def _load_config(args: argparse.Namespace) -> CrawlConfig:
    if args.config:
        cfg = CrawlConfig.from_file(args.config)
    else:
        cfg = CrawlConfig.from_env()

    if args.snapshot:
        cfg.snapshot_path = args.snapshot
    if args.max_pages is not None:
        cfg.max_pages = args.max_pages
    if args.terms:
        cfg.search_terms = [t.strip() for t in args.terms.split(",") if t.strip()]

    cfg.validate()
    return cfg


def run_server(cfg: CrawlConfig, host: str, port: int) -> None:
    import uvicorn

    from ..apis import app as api

    # The app serves this config rather than re-reading EURLEX_* on each request.
    api.configure(cfg)
    uvicorn.run(api.app, host=host, port=port)


def summarize(report: CrawlReport) -> dict:
    return {
        "message": report.message,
        "newResults": len(report.new_records),
        "totalResults": report.total_results,
        "stopReason": report.stop_reason.value,
        "persisted": report.persisted,
    }


def run_cli(argv: List[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.log_level)

    cfg = _load_config(args)

    if args.serve:
        run_server(cfg, args.host, args.port)
        return 0

    report: CrawlReport = asyncio.run(CrawlCoordinator(cfg).run())

    logging.getLogger(__name__).info("Pages: %s | New: %s | Total: %s | Output: %s",
                                     report.pages_fetched,
                                     len(report.new_records),
                                     report.total_results,
                                     cfg.snapshot_path)
    print(json.dumps(summarize(report), ensure_ascii=False))
    return 0 if report.persisted else 1
