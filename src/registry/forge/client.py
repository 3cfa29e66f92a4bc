"""Puppet Forge API client.

Read-only access to the two v1 endpoints the tool needs (module search and
release listing) plus raw tarball downloads. Every failure surfaces as a
``TransportError``; nothing here retries.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from constants import Constants
from errors import TransportError
from common import http_client
from versioning.models import RawRelease

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    """One module returned by a Forge search."""
    full_name: str
    description: str = ""


class ForgeClient:
    """Lightweight REST client for a Forge-compatible registry."""

    def __init__(self, base_url: Optional[str] = None, timeout: float = Constants.REQUEST_TIMEOUT):
        """Initialize the client.

        Args:
            base_url: Registry base URL (defaults to Constants.FORGE_URL)
            timeout: Per-request timeout in seconds
        """
        self.base_url = (base_url or Constants.FORGE_URL).rstrip("/")
        self.timeout = timeout

    def url_for(self, path: str) -> str:
        """Absolute URL for a registry-relative path; absolute URLs pass through."""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def query(self, endpoint_path: str, params: Sequence[Tuple[str, str]] = ()) -> Any:
        """GET a JSON endpoint with ordered query parameters."""
        return http_client.get_json(
            self.url_for(endpoint_path),
            context=endpoint_path,
            params=list(params),
            timeout=self.timeout,
            headers={"Accept": "application/json"},
        )

    def fetch_bytes(self, url: str) -> bytes:
        """Download raw content, e.g. a release tarball."""
        res = http_client.get(self.url_for(url), context="download", timeout=self.timeout)
        return res.content

    def search(self, term: str) -> List[SearchResult]:
        """Search modules by free text.

        Args:
            term: Query string

        Returns:
            List of SearchResult in registry order
        """
        data = self.query(Constants.SEARCH_ENDPOINT, [("q", term)])
        if not isinstance(data, list):
            raise TransportError(self.url_for(Constants.SEARCH_ENDPOINT), "unexpected search response")
        return [
            SearchResult(
                full_name=str(item.get("full_name", "")),
                description=str(item.get("desc") or ""),
            )
            for item in data
            if isinstance(item, dict)
        ]

    def releases(self, module: str, version: Optional[str] = None) -> Dict[str, List[RawRelease]]:
        """List releases of a module and of everything it depends on.

        Args:
            module: Module identifier, e.g. ``puppetlabs/apache``
            version: Optional version pin

        Returns:
            Dict of module name -> releases, in registry order
        """
        params = [("module", module)]
        if version:
            params.append(("version", version))
        data = self.query(Constants.RELEASES_ENDPOINT, params)
        if not isinstance(data, dict):
            raise TransportError(self.url_for(Constants.RELEASES_ENDPOINT), "unexpected releases response")

        result: Dict[str, List[RawRelease]] = {}
        for name, entries in data.items():
            result[name] = [RawRelease.from_dict(entry) for entry in entries or []]
        logger.debug("Registry listed %d modules for %s", len(result), module)
        return result
