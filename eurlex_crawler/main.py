"""``python -m eurlex_crawler.main``: one crawl, or ``--serve`` for the HTTP API."""
from __future__ import annotations

import sys

from eurlex_crawler.ui.cli import run_cli


def main() -> int:
    return run_cli(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
