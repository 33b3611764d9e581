"""Heuristic reading of card / list layouts on the LaLiga transfer pages.

When there is no table, transfers are usually rendered as blocks like
``"Pedri Destino FC Barcelona Procedencia UD Las Palmas Tipo Traspaso"`` or
simply ``"Pedri → FC Barcelona"``.
"""
from __future__ import annotations

import re
from typing import List, Optional, Set

from fichajes.domain.transfers import RawCandidate
from fichajes.ingestion.page import RenderedPage, element_text

from .base import ExtractionStrategy

ARROW = "→"

CONTAINER_SELECTOR = "section, div"
ROW_SELECTOR = "div, li, article"

CONTAINER_LABELS_RE = re.compile(r"Jugador|Destino|Procedencia|Tipo", re.I)
ROW_MARKERS_RE = re.compile(r"→|Destino|Procedencia|Jugador", re.I)

# player, destination, origin, transfer type
LABELLED_ROW_RE = re.compile(
    r"^(.*?)\s(?:Destino|→)\s+(.*?)\s(?:Procedencia|desde)\s+(.*?)\s(?:Tipo|Modalidad)\s+(.*)$",
    re.I,
)


def parse_row(text: str) -> Optional[RawCandidate]:
    m = LABELLED_ROW_RE.match(text)
    if m:
        return {
            "player": m.group(1),
            "to": m.group(2),
            "from": m.group(3),
            "status": m.group(4),
            "date": "",
        }
    arrow = text.find(ARROW)
    if arrow > 0:
        return {
            "player": text[:arrow].strip(),
            "to": text[arrow + 1 :].strip(),
        }
    return None


class TextStrategy(ExtractionStrategy):
    name = "text"

    def extract(self, page: RenderedPage) -> List[RawCandidate]:
        out: List[RawCandidate] = []
        seen: Set[int] = set()
        for container in page.select(CONTAINER_SELECTOR):
            if not CONTAINER_LABELS_RE.search(element_text(container)):
                continue
            for row in container.select(ROW_SELECTOR):
                # nested containers reach the same rows more than once
                if id(row) in seen:
                    continue
                seen.add(id(row))
                txt = element_text(row)
                if not ROW_MARKERS_RE.search(txt):
                    continue
                record = parse_row(txt)
                if record is not None:
                    out.append(record)
        return out


__all__ = ["ARROW", "LABELLED_ROW_RE", "TextStrategy", "parse_row"]
