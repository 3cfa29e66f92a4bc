"""Shared HTTP helper used by the Forge registry client.

Encapsulates request/timeout/status error handling so callers receive
either a successful response or a ``TransportError``. There are no
retries and no response cache: every failure is final.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Tuple

import requests

from constants import Constants
from errors import TransportError
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def get(
    url: str,
    *,
    context: str,
    params: Optional[Sequence[Tuple[str, str]]] = None,
    timeout: float = Constants.REQUEST_TIMEOUT,
    **kwargs: Any,
) -> requests.Response:
    """Perform a GET request and return the response only when it is 2xx.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "search", "tarball").
        params: Ordered query parameters.
        timeout: Seconds before the request is abandoned.
        **kwargs: Passed through to requests.get.

    Returns:
        requests.Response: The successful HTTP response.

    Raises:
        TransportError: On connection failure, timeout or non-2xx status.
    """
    headers = dict(kwargs.pop("headers", None) or {})
    headers.setdefault("User-Agent", Constants.USER_AGENT)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_url(url),
                    context=context,
                )
            )
        try:
            res = requests.get(url, params=params, timeout=timeout, headers=headers, **kwargs)
        except requests.Timeout as exc:
            logger.error("%s request timed out after %s seconds", context, timeout)
            raise TransportError(url, f"timed out after {timeout} seconds") from exc
        except requests.RequestException as exc:  # includes ConnectionError
            logger.error("%s connection error: %s", context, exc)
            raise TransportError(url, str(exc)) from exc

    target = res.url or url
    if not 200 <= res.status_code < 300:
        logger.error("%s request returned HTTP %s", context, res.status_code)
        raise TransportError(
            target,
            f"HTTP {res.status_code} {res.reason or ''}".strip(),
            status_code=res.status_code,
        )

    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response ok",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="GET",
                outcome="success",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                target=safe_url(target),
                context=context,
            )
        )
    return res


def get_json(url: str, *, context: str, **kwargs: Any) -> Any:
    """GET a URL and decode its JSON body.

    Raises:
        TransportError: On any request failure or when the body is not JSON.
    """
    res = get(url, context=context, **kwargs)
    try:
        return res.json()
    except ValueError as exc:
        logger.error("%s response was not valid JSON", context)
        raise TransportError(res.url or url, "response body is not valid JSON") from exc
