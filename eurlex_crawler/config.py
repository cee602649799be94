from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import List, Optional, Dict, Any
from pathlib import Path
import os
import json

from .version import CONFIG_SCHEMA_VERSION

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

DEFAULT_ENGINE = "eurlex_crawler.engines.paginated_engine:PaginatedCrawlEngine"
DEFAULT_ADAPTER = "eurlex_crawler.adapters.eurlex:EurLexAdapter"
DEFAULT_STORE = "eurlex_crawler.store.json_store:JSONSnapshotStore"


class ConfigError(ValueError):
    """Raised for configuration values that cannot be parsed or fail validation."""


@dataclass
class CrawlConfig:
    """
    Search, pacing and storage settings shared by the engine, adapter, API and CLI.
    Invalid values surface as ConfigError from the loaders or from validate().
    """
    schema_version: int = CONFIG_SCHEMA_VERSION
    base_url: str = "https://eur-lex.europa.eu"
    search_terms: List[str] = field(default_factory=lambda: ["antidumping", "phosphate"])
    # Trailing calendar months covered by the date filter, ending today.
    window_months: int = 3
    language: str = "en"
    # Nominal number of results the site renders on a full page.
    page_size: int = 10
    min_delay_ms: int = 2000
    max_delay_ms: int = 5000
    # None keeps pagination unbounded; set to cap pages per crawl.
    max_pages: Optional[int] = None
    request_timeout: float = 30.0
    # The source rejects clients that do not look like a browser.
    user_agent: str = BROWSER_USER_AGENT
    snapshot_path: str = "results.json"
    # Dotted paths for engine/adapter/store to allow runtime swapping without code changes.
    engine: str = DEFAULT_ENGINE
    adapter: str = DEFAULT_ADAPTER
    store: str = DEFAULT_STORE

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    # ---------- Loaders ----------

    @classmethod
    def from_env(cls) -> "CrawlConfig":
        """
        Build config from environment variables (all optional).
        """
        def _get(name: str, default: str) -> str:
            return os.getenv(name, default)

        def _num(name: str, default: str, kind: type = int) -> Any:
            raw = _get(name, default)
            try:
                return kind(raw)
            except ValueError:
                raise ConfigError(f"{name} must be {kind.__name__}, got {raw!r}") from None

        terms = [t.strip() for t in _get("EURLEX_SEARCH_TERMS", "antidumping,phosphate").split(",") if t.strip()]
        max_pages = _get("EURLEX_MAX_PAGES", "").strip()

        return cls(
            base_url=_get("EURLEX_BASE_URL", "https://eur-lex.europa.eu"),
            search_terms=terms,
            window_months=_num("EURLEX_WINDOW_MONTHS", "3"),
            language=_get("EURLEX_LANGUAGE", "en"),
            page_size=_num("EURLEX_PAGE_SIZE", "10"),
            min_delay_ms=_num("EURLEX_MIN_DELAY_MS", "2000"),
            max_delay_ms=_num("EURLEX_MAX_DELAY_MS", "5000"),
            max_pages=_num("EURLEX_MAX_PAGES", max_pages) if max_pages else None,
            request_timeout=_num("EURLEX_REQUEST_TIMEOUT", "30.0", float),
            user_agent=_get("EURLEX_USER_AGENT", BROWSER_USER_AGENT),
            snapshot_path=_get("EURLEX_SNAPSHOT_PATH", "results.json"),
            engine=_get("EURLEX_ENGINE", DEFAULT_ENGINE),
            adapter=_get("EURLEX_ADAPTER", DEFAULT_ADAPTER),
            store=_get("EURLEX_STORE", DEFAULT_STORE),
        )

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> "CrawlConfig":
        """
        Load configuration from a JSON file. Supports schema migration for future versions.
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        data = migrate_config(data)
        return cls(**data)

    # ---------- Validation ----------

    def validate(self) -> None:
        if not self.search_terms:
            raise ConfigError("search_terms cannot be empty; provide at least one term.")
        if self.window_months < 1:
            raise ConfigError("window_months must be >= 1")
        if self.page_size < 1:
            raise ConfigError("page_size must be >= 1")
        if self.min_delay_ms < 0 or self.max_delay_ms < 0:
            raise ConfigError("delays must be >= 0")
        if self.max_delay_ms <= self.min_delay_ms:
            raise ConfigError("max_delay_ms must be greater than min_delay_ms")
        if self.max_pages is not None and self.max_pages < 1:
            raise ConfigError("max_pages must be >= 1 when set")
        # Snapshot parent must exist before the first save.
        parent = Path(self.snapshot_path).parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigError(f"snapshot directory {parent} is not usable: {exc}") from exc


def migrate_config(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Migrate config dict to the latest schema version.
    Keep this pure and additive. Add migrations here as you bump schema.
    """
    schema = raw.get("schema_version", CONFIG_SCHEMA_VERSION)
    if schema > CONFIG_SCHEMA_VERSION:
        raise ConfigError(f"Unsupported config schema_version {schema}; max is {CONFIG_SCHEMA_VERSION}")

    raw.setdefault("schema_version", CONFIG_SCHEMA_VERSION)
    return raw
