"""Queryable view over a rendered page.

Providers hand the strategies a ``RenderedPage``: the final HTML parsed with
BeautifulSoup plus a few helpers that mimic what the browser would report
(collapsed ``innerText``, absolute outbound links, raw JSON script bodies).
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from bs4 import BeautifulSoup
from bs4.element import Tag

EMBEDDED_DATA_SELECTOR = (
    'script[type="application/json"], script[type="application/ld+json"]'
)

_WS_RE = re.compile(r"\s+")


def collapse_whitespace(value: str) -> str:
    return _WS_RE.sub(" ", value.strip())


def element_text(node: Tag) -> str:
    """Whitespace-collapsed visible text of ``node``."""
    try:
        raw = node.get_text(" ", strip=True)
    except Exception:
        return ""
    return collapse_whitespace(raw)


def outbound_link(node: Tag) -> str:
    """First absolute http(s) link inside ``node`` or ""."""
    anchor = node.select_one('a[href^="http"]')
    if anchor is None:
        return ""
    href = anchor.get("href")
    if isinstance(href, list):
        href = href[0] if href else ""
    return str(href or "").strip()


@dataclass
class RenderedPage:
    url: str
    html: str
    _soup: Optional[BeautifulSoup] = field(default=None, repr=False)

    @property
    def soup(self) -> BeautifulSoup:
        if self._soup is None:
            self._soup = BeautifulSoup(self.html or "", "html.parser")
        return self._soup

    def select(self, selector: str) -> List[Tag]:
        return [el for el in self.soup.select(selector) if isinstance(el, Tag)]

    def embedded_blocks(self) -> List[str]:
        """Raw text of JSON / JSON-LD script blocks, in document order."""
        blocks: List[str] = []
        for tag in self.select(EMBEDDED_DATA_SELECTOR):
            raw = tag.string or tag.get_text() or ""
            blocks.append(raw)
        return blocks


class PageProvider(Protocol):
    def render(self, url: str, user_agent: str) -> RenderedPage: ...


__all__ = [
    "EMBEDDED_DATA_SELECTOR",
    "PageProvider",
    "RenderedPage",
    "collapse_whitespace",
    "element_text",
    "outbound_link",
]
