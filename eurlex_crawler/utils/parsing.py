from __future__ import annotations

import logging
from typing import List
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from ..adapters.base import PLACEHOLDER_ID, PLACEHOLDER_TITLE, Record

logger = logging.getLogger(__name__)


def absolute_link(origin: str, href: str) -> str:
    """
    Resolve an extracted href against the site origin.
    Root-relative paths are prefixed; ``./`` paths resolve from the origin root.
    """
    return urljoin(origin.rstrip("/") + "/", href)


def extract_records(
    html: str,
    *,
    origin: str,
    block_selector: str = ".SearchResult",
    title_selector: str = "h2 a",
    id_selector: str = ".internalNum",
) -> List[Record]:
    """
    Parse one search-results page into records, in document order.

    A block contributes a record only when title, link and internal id are
    all non-empty; placeholders only label the skipped block in the log.
    An empty list means no block matched.
    """
    soup = BeautifulSoup(html, "html.parser")
    records: List[Record] = []

    for position, block in enumerate(soup.select(block_selector)):
        anchor = block.select_one(title_selector)
        id_node = block.select_one(id_selector)

        title = (anchor.get_text() if anchor else "").strip()
        href = (anchor.get("href") or "").strip() if anchor else ""
        internal_id = (id_node.get_text() if id_node else "").strip()

        missing = [name for name, value in (("title", title), ("link", href), ("internalId", internal_id)) if not value]
        if missing:
            logger.debug(
                "Skipping result block #%s (%s missing): title=%r id=%r",
                position,
                ", ".join(missing),
                title or PLACEHOLDER_TITLE,
                internal_id or PLACEHOLDER_ID,
            )
            continue
        records.append(Record(title=title, link=absolute_link(origin, href), internal_id=internal_id))

    return records
