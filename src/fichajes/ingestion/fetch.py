"""Plain-HTTP page provider for pages that render their content server-side."""
from __future__ import annotations

import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from fichajes.domain.errors import NavigationError
from fichajes.infrastructure.config import SETTINGS
from fichajes.ingestion.page import RenderedPage

LOGGER = logging.getLogger(__name__)

BASE_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "es-ES,es;q=0.9,en-US;q=0.8,en;q=0.7",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


def new_session(*, with_retries: bool = True, total_retries: int = 3) -> requests.Session:
    """requests.Session with standard headers, retry policy and optional proxy."""
    s = requests.Session()
    s.headers.update(BASE_HEADERS)
    s.max_redirects = 10

    if with_retries:
        retry_strategy = Retry(
            total=total_retries,
            backoff_factor=0.5,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=frozenset({"HEAD", "GET", "OPTIONS"}),
            raise_on_status=False,
            respect_retry_after_header=True,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        s.mount("http://", adapter)
        s.mount("https://", adapter)

    if SETTINGS.HTTP_PROXY:
        s.proxies.update({"http": SETTINGS.HTTP_PROXY, "https": SETTINGS.HTTP_PROXY})
    return s


class HttpPageProvider:
    def __init__(
        self, *, sess: requests.Session | None = None, timeout: int | None = None
    ) -> None:
        self._sess = sess
        self.timeout = timeout or SETTINGS.REQ_TIMEOUT

    def render(self, url: str, user_agent: str) -> RenderedPage:
        s = self._sess or new_session()
        try:
            r = s.get(
                url,
                headers={"User-Agent": user_agent},
                timeout=self.timeout,
                allow_redirects=True,
            )
            r.raise_for_status()
        except requests.RequestException as exc:
            LOGGER.warning("HTTP fetch failed for %s: %s", url, exc)
            raise NavigationError(url, f"{type(exc).__name__}: {exc}") from exc
        finally:
            if self._sess is None:
                s.close()
        return RenderedPage(url=r.url or url, html=r.text)


__all__ = ["BASE_HEADERS", "HttpPageProvider", "new_session"]
