from __future__ import annotations

import asyncio
from typing import Optional
from aiohttp import ClientSession, ClientTimeout
import aiohttp
import logging

logger = logging.getLogger(__name__)


async def fetch_text(
    session: ClientSession,
    url: str,
    *,
    timeout: float = 30.0,
    user_agent: Optional[str] = None,
) -> Optional[str]:
    """
    Fetch a URL once and return body text. Returns None on failure.

    Non-2xx responses count as failures. Nothing is retried: the caller treats
    None the same way as a page without results.
    """
    headers = {}
    if user_agent:
        headers["User-Agent"] = user_agent

    try:
        async with session.get(url, headers=headers, timeout=ClientTimeout(total=timeout)) as resp:
            resp.raise_for_status()
            return await resp.text()
    except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as exc:
        logger.warning("fetch_text failed for %s: %r", url, exc)
        return None


def create_session() -> ClientSession:
    """
    Create a shared aiohttp ClientSession.
    """
    # Note: caller is responsible for closing the session (await session.close()).
    # Pages are fetched sequentially, so one connection per host is plenty.
    connector = aiohttp.TCPConnector(limit_per_host=1)
    return aiohttp.ClientSession(connector=connector)
