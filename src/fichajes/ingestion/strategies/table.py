from __future__ import annotations

from typing import List

from fichajes.domain.transfers import RawCandidate
from fichajes.ingestion.page import RenderedPage, element_text, outbound_link

from .base import ExtractionStrategy

ROW_SELECTOR = "table tr"

# Assumed column order of the transfers table. Not confirmed against a live
# page; extra cells are ignored and missing ones stay absent.
COLUMNS = ("player", "to", "from", "status", "date")


class TableStrategy(ExtractionStrategy):
    name = "table"

    def extract(self, page: RenderedPage) -> List[RawCandidate]:
        out: List[RawCandidate] = []
        for row in page.select(ROW_SELECTOR):
            cells = [element_text(td) for td in row.find_all("td")]
            if not cells:
                # header rows only have <th>
                continue
            record: RawCandidate = {}
            for column, value in zip(COLUMNS, cells):
                record[column] = value  # type: ignore[literal-required]
            record["url"] = outbound_link(row)
            out.append(record)
        return out


__all__ = ["COLUMNS", "ROW_SELECTOR", "TableStrategy"]
