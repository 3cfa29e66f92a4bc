"""CLI search command: print matching Forge modules as a two-column table."""

from __future__ import annotations

import logging
import sys
from typing import Iterable, List, Optional, TextIO

from registry.forge import ForgeClient, SearchResult

logger = logging.getLogger(__name__)

_HEADERS = ("NAME", "DESCRIPTION")


def format_table(results: Iterable[SearchResult]) -> List[str]:
    """Left-align names to the widest entry and return the table lines."""
    rows = [(r.full_name, r.description) for r in results]
    width = max([len(_HEADERS[0])] + [len(name) for name, _ in rows])
    lines = [f"{_HEADERS[0].ljust(width)}  {_HEADERS[1]}"]
    for name, desc in rows:
        lines.append(f"{name.ljust(width)}  {desc}".rstrip())
    return lines


def run_search(settings, term: str, client: Optional[ForgeClient] = None, out: Optional[TextIO] = None) -> int:
    """Search the Forge and print results.

    Returns:
        int: Number of modules found.
    """
    client = client or ForgeClient(settings.forge_url, timeout=settings.timeout)
    out = out or sys.stdout
    results = client.search(term)
    if not results:
        logger.warning("No modules match '%s'.", term)
        return 0
    for line in format_table(results):
        out.write(line + "\n")
    return len(results)
