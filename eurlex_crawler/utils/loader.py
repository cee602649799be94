from __future__ import annotations

import importlib
from typing import Any


def load_symbol(dotted: str) -> Any:
    """
    Resolve the engine, adapter or store class named in CrawlConfig.
    Accepts "eurlex_crawler.store.json_store:JSONSnapshotStore" or the all-dots form.
    Raises ImportError for unknown modules or attributes.
    """
    if ":" in dotted:
        module_name, symbol_name = dotted.split(":", 1)
    else:
        module_name, symbol_name = dotted.rsplit(".", 1)

    module = importlib.import_module(module_name)
    try:
        return getattr(module, symbol_name)
    except AttributeError:
        raise ImportError(f"{module_name!r} has no attribute {symbol_name!r}") from None
