from __future__ import annotations

from typing import Dict, List, Optional
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import ConfigError, CrawlConfig
from ..engines.coordinator import CrawlCoordinator
from ..store.base import ResultStore
from ..utils.loader import load_symbol
from ..version import __version__

logger = logging.getLogger(__name__)

app = FastAPI(title="eurlex_crawler API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


class RecordModel(BaseModel):
    title: str
    link: str
    internalId: str


class ScrapeResponse(BaseModel):
    message: str
    totalResults: int
    results: List[RecordModel]
    newResults: int = 0
    # False means the results above were not written to the snapshot.
    persisted: bool = True


class ResultsResponse(BaseModel):
    totalResults: int
    results: List[RecordModel] = Field(default_factory=list)


_config: Optional[CrawlConfig] = None
_coordinator: Optional[CrawlCoordinator] = None


def configure(cfg: CrawlConfig) -> None:
    """Serve with an explicit config instead of reading EURLEX_* per request."""
    global _config, _coordinator
    cfg.validate()
    _config = cfg
    _coordinator = None


def get_config() -> CrawlConfig:
    if _config is not None:
        return _config
    cfg = CrawlConfig.from_env()
    cfg.validate()
    return cfg


def get_coordinator() -> CrawlCoordinator:
    # One coordinator per process so its lock serializes every crawl trigger.
    global _coordinator
    if _coordinator is None:
        _coordinator = CrawlCoordinator(get_config())
    return _coordinator


def get_store() -> ResultStore:
    cfg = get_config()
    try:
        store_cls = load_symbol(cfg.store)
    except ImportError as exc:
        raise ConfigError(f"store {cfg.store!r} cannot be loaded: {exc}") from exc
    return store_cls(cfg.snapshot_path)


@app.exception_handler(ConfigError)
async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
    # Raised while resolving dependencies, before any route body runs.
    logger.error("Invalid configuration: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"message": "Invalid crawler configuration", "error": str(exc)},
    )


@app.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/scrape-all-eurlex", response_model=ScrapeResponse)
async def scrape_all_eurlex(coordinator: CrawlCoordinator = Depends(get_coordinator)):
    logger.info("Starting crawl and collecting results...")
    try:
        report = await coordinator.run()
    except Exception as exc:
        logger.exception("Crawl failed")
        return JSONResponse(
            status_code=500,
            content={"message": "Failed to retrieve results from the site", "error": str(exc)},
        )

    return ScrapeResponse(
        message=report.message,
        totalResults=report.total_results,
        results=[RecordModel(**r.to_dict()) for r in report.results],
        newResults=len(report.new_records),
        persisted=report.persisted,
    )


@app.get("/results", response_model=ResultsResponse)
async def results(store: ResultStore = Depends(get_store)) -> ResultsResponse:
    records = store.load()
    return ResultsResponse(
        totalResults=len(records),
        results=[RecordModel(**r.to_dict()) for r in records],
    )
