from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from fichajes.domain.cache import ResultCache
from fichajes.domain.competitions import cache_key, resolve_url
from fichajes.domain.errors import ExtractionFailed, NavigationError
from fichajes.domain.transfers import TransferRecord
from fichajes.infrastructure.config import SETTINGS
from fichajes.infrastructure.single_flight import SingleFlight
from fichajes.ingestion.cascade import ExtractionCascade
from fichajes.ingestion.page import PageProvider

LOGGER = logging.getLogger(__name__)

Payload = Tuple[TransferRecord, ...]


def make_provider(kind: str | None = None) -> PageProvider:
    """Build the page provider named by ``kind`` (defaults to SETTINGS.PAGE_PROVIDER)."""
    name = (kind or SETTINGS.PAGE_PROVIDER or "browser").strip().lower()
    if name == "http":
        from fichajes.ingestion.fetch import HttpPageProvider

        return HttpPageProvider()
    if name == "browser":
        from fichajes.ingestion.browser_fetch import BrowserPageProvider

        return BrowserPageProvider()
    raise ValueError(f"Unknown page provider: {kind!r}")


class TransferService:
    def __init__(
        self,
        *,
        provider: Optional[PageProvider] = None,
        cascade: Optional[ExtractionCascade] = None,
        cache: Optional[ResultCache[Payload]] = None,
        user_agent: Optional[str] = None,
        ttl: Optional[float] = None,
    ) -> None:
        self._provider = provider
        self.cascade = cascade if cascade is not None else ExtractionCascade()
        self.cache: ResultCache[Payload] = cache if cache is not None else ResultCache()
        self.user_agent = user_agent or SETTINGS.USER_AGENT
        self.ttl = ttl
        self._flights: SingleFlight[Payload] = SingleFlight()

    @property
    def provider(self) -> PageProvider:
        if self._provider is None:
            self._provider = make_provider()
        return self._provider

    def get_transfers(self, competition: str, *, use_cache: bool = True) -> List[TransferRecord]:
        url = resolve_url(competition)
        key = cache_key(competition)

        if use_cache:
            cached = self.cache.get(key)
            if cached is not None:
                LOGGER.debug("Cache hit for %s", key)
                return list(cached)

        LOGGER.info("Cache miss for %s; scraping %s", key, url)
        payload = self._flights.do(
            key, lambda: self._fetch(competition, url, key, use_cache=use_cache)
        )
        return list(payload)

    def _fetch(self, competition: str, url: str, key: str, *, use_cache: bool) -> Payload:
        # A previous flight may have filled the cache while we queued
        if use_cache:
            cached = self.cache.get(key)
            if cached is not None:
                return cached

        try:
            page = self.provider.render(url, self.user_agent)
        except NavigationError as exc:
            raise ExtractionFailed(competition, str(exc)) from exc
        except Exception as exc:
            LOGGER.exception("Unexpected provider failure for %s", url)
            raise ExtractionFailed(
                competition, f"Could not render {url}: {type(exc).__name__}: {exc}"
            ) from exc

        result = self.cascade.run(page)
        payload: Payload = tuple(result.records)
        self.cache.put(key, payload, self.ttl)
        return payload


__all__ = ["TransferService", "make_provider"]
