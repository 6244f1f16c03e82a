"""
Recipe page fetching over httpx.
"""

import logging
import time
from typing import Optional
from urllib.parse import urlparse

import httpx
import logfire

from ..exceptions import FetchError, InvalidURLError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)


def validate_url(url: str) -> str:
    """Return the stripped URL, or raise InvalidURLError when it cannot be fetched"""
    candidate = (url or "").strip()
    parsed = urlparse(candidate)
    if parsed.scheme not in ("http", "https") or not parsed.netloc or " " in candidate:
        raise InvalidURLError(url)
    return candidate


class PageFetcher:
    """Single GET per page; the body must be HTTP 200 and valid UTF-8"""

    def __init__(self, timeout: Optional[httpx.Timeout] = None, user_agent: str = DEFAULT_USER_AGENT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout or httpx.Timeout(15.0, connect=5.0)
        self.user_agent = user_agent
        self.transport = transport

    async def fetch(self, url: str) -> str:
        """
        Fetch a recipe page.

        Args:
            url: Absolute http(s) URL

        Returns:
            Decoded HTML

        Raises:
            InvalidURLError: URL is malformed
            FetchError: Network failure, timeout, non-200 status or undecodable body
        """
        target = validate_url(url)
        start = time.time()
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport,
                                         follow_redirects=True, headers=headers) as client:
                response = await client.get(target)
        except httpx.TimeoutException as e:
            logfire.warn("page_fetch_failed", url=target, reason="timeout", error=str(e))
            raise FetchError(target, "request timed out") from e
        except httpx.InvalidURL as e:
            raise InvalidURLError(url) from e
        except httpx.HTTPError as e:
            logfire.warn("page_fetch_failed", url=target, reason="transport", error=str(e))
            raise FetchError(target, str(e) or type(e).__name__) from e

        if response.status_code != 200:
            logfire.warn("page_fetch_failed", url=target, reason="status", status_code=response.status_code)
            raise FetchError(target, "unexpected status", status_code=response.status_code)

        try:
            html = response.content.decode("utf-8")
        except UnicodeDecodeError as e:
            logfire.warn("page_fetch_failed", url=target, reason="decode", error=str(e))
            raise FetchError(target, "response body is not valid UTF-8") from e

        logger.debug(f"Fetched {target} ({len(html)} chars) in {time.time() - start:.2f}s")
        return html
