# fichajes/ingestion/browser_fetch.py
from __future__ import annotations

import logging
from typing import Any, Dict

from playwright.sync_api import Error as PWError
from playwright.sync_api import TimeoutError as PWTimeoutError
from playwright.sync_api import sync_playwright

from fichajes.domain.errors import NavigationError
from fichajes.infrastructure.config import SETTINGS
from fichajes.ingestion.page import RenderedPage

LOGGER = logging.getLogger(__name__)

CHROMIUM_ARGS = ["--no-sandbox", "--disable-dev-shm-usage"]


class BrowserPageProvider:
    """Render a page in headless Chromium and snapshot its DOM.

    One browser per call: nothing is kept alive between requests, and the
    page, context and browser are closed on every exit path.
    """

    def __init__(
        self,
        *,
        headless: bool | None = None,
        timeout_ms: int | None = None,
        settle_ms: int | None = None,
        proxy: str | None = None,
    ) -> None:
        self.headless = SETTINGS.HEADLESS if headless is None else headless
        self.timeout_ms = timeout_ms or SETTINGS.PLAYWRIGHT_TIMEOUT
        self.settle_ms = SETTINGS.PLAYWRIGHT_SETTLE_MS if settle_ms is None else settle_ms
        self.proxy = proxy if proxy is not None else SETTINGS.HTTP_PROXY

    def _launch_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"headless": self.headless, "args": list(CHROMIUM_ARGS)}
        if self.proxy:
            kwargs["proxy"] = {"server": self.proxy}
        return kwargs

    def render(self, url: str, user_agent: str) -> RenderedPage:
        try:
            with sync_playwright() as p:
                browser = p.chromium.launch(**self._launch_kwargs())
                context = None
                page = None
                try:
                    context = browser.new_context(user_agent=user_agent)
                    page = context.new_page()
                    page.goto(url, wait_until="networkidle", timeout=self.timeout_ms)
                    # Give the front end time to hydrate lists after networkidle
                    if self.settle_ms:
                        page.wait_for_timeout(self.settle_ms)
                    html = page.content()
                    final_url = page.url or url
                finally:
                    for closable in (page, context, browser):
                        if closable is None:
                            continue
                        try:
                            closable.close()
                        except Exception:
                            pass
        except PWTimeoutError as exc:
            LOGGER.warning("Timeout rendering %s after %s ms", url, self.timeout_ms)
            raise NavigationError(url, f"timeout after {self.timeout_ms} ms") from exc
        except PWError as exc:
            LOGGER.warning("Playwright failed for %s: %s", url, exc)
            raise NavigationError(url, str(exc)) from exc

        LOGGER.info("Rendered %s (%d bytes)", final_url, len(html))
        return RenderedPage(url=final_url, html=html)


__all__ = ["BrowserPageProvider", "CHROMIUM_ARGS"]
