"""Puppet Forge registry package.

- client.py: HTTP interactions with the Forge v1 API (search, releases, downloads)
"""

from .client import ForgeClient, SearchResult  # noqa: F401

__all__ = [
    "ForgeClient",
    "SearchResult",
]
