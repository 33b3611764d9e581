from __future__ import annotations

import json
import logging
from typing import Any, List, Mapping, Optional, Tuple

from fichajes.domain.transfers import RawCandidate, coerce_text
from fichajes.ingestion.page import RenderedPage

from .base import ExtractionStrategy

LOGGER = logging.getLogger(__name__)

# Wrapper objects seen in JSON payloads; first truthy one wins
LIST_KEYS = ("items", "data", "results")

# raw field -> lookup chain; dotted paths descend into nested objects
ENTRY_FIELDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("player", ("player", "name", "title", "player.name")),
    ("to", ("to", "destination", "club.name")),
    ("from", ("from", "origin", "previousClub.name")),
    ("status", ("status", "type", "transferType")),
    ("date", ("date", "updatedAt", "createdAt")),
    ("fee", ("fee", "amount", "transferFee")),
    ("position", ("position", "player.position")),
    ("url", ("url", "link")),
)


def _lookup(entry: Mapping[str, Any], path: str) -> Any:
    node: Any = entry
    for part in path.split("."):
        if not isinstance(node, Mapping):
            return None
        node = node.get(part)
    return node


def resolve_entry(entry: Mapping[str, Any]) -> RawCandidate:
    record: RawCandidate = {}
    for name, chain in ENTRY_FIELDS:
        value = ""
        for path in chain:
            value = coerce_text(_lookup(entry, path))
            if value:
                break
        record[name] = value  # type: ignore[literal-required]
    return record


def decode_list(raw: str) -> Optional[List[Any]]:
    """Decode a script body into a list of entries, or None if it holds none.

    Raises ValueError when ``raw`` is not JSON, RecursionError when it nests too deep.
    """
    obj = json.loads(raw)
    if isinstance(obj, list):
        return obj or None
    if isinstance(obj, Mapping):
        for key in LIST_KEYS:
            value = obj.get(key)
            if value:
                return value if isinstance(value, list) else None
    return None


class EmbeddedDataStrategy(ExtractionStrategy):
    name = "embedded"

    def extract(self, page: RenderedPage) -> List[RawCandidate]:
        for idx, raw in enumerate(page.embedded_blocks()):
            try:
                entries = decode_list(raw)
            except (ValueError, RecursionError) as exc:
                LOGGER.debug("Skipping embedded block %d: %s", idx, exc)
                continue
            if not entries:
                continue
            return [resolve_entry(e) for e in entries if isinstance(e, Mapping)]
        return []


__all__ = ["ENTRY_FIELDS", "EmbeddedDataStrategy", "LIST_KEYS", "decode_list", "resolve_entry"]
