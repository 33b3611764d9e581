"""Canonical transfer records and the normalizer that produces them.

Every extraction strategy emits loosely-typed ``RawCandidate`` mappings. Field
names differ between strategies (``to`` vs ``destination``, ``fee`` vs
``amount`` ...), so each canonical field has an ordered alias list and the
first non-empty value wins.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, TypedDict, Union

SOURCE_NAME = "LaLiga.com"
SENTINEL_PLAYER = "—"

# Functional syntax because "from" is a keyword
RawCandidate = TypedDict(
    "RawCandidate",
    {
        "player": Any,
        "name": Any,
        "title": Any,
        "to": Any,
        "destination": Any,
        "from": Any,
        "origin": Any,
        "status": Any,
        "type": Any,
        "date": Any,
        "ts": Any,
        "updatedAt": Any,
        "createdAt": Any,
        "position": Any,
        "fee": Any,
        "amount": Any,
        "contract": Any,
        "url": Any,
    },
    total=False,
)


# canonical field -> accepted source names, in priority order
FIELD_ALIASES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("player", ("player", "name")),
    ("from", ("from", "origin")),
    ("to", ("to", "destination")),
    ("date", ("date", "ts", "updatedAt", "createdAt")),
    ("status", ("status", "type")),
    ("position", ("position",)),
    ("fee", ("fee", "amount")),
    ("contract", ("contract",)),
    ("url", ("url",)),
)


def coerce_text(value: Any) -> str:
    """Return a stripped string for scalar values, "" for everything else.

    Numeric zero counts as empty so an alias chain moves on to the next name.
    """
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)):
        return str(value) if value else ""
    return ""


def first_text(record: Mapping[str, Any], keys: Iterable[str]) -> str:
    for key in keys:
        text = coerce_text(record.get(key))
        if text:
            return text
    return ""


@dataclass(frozen=True, slots=True)
class TransferRecord:
    player: str = ""
    from_: str = ""
    to: str = ""
    date: str = ""
    status: str = ""
    position: str = ""
    fee: str = ""
    contract: str = ""
    url: str = ""
    source: str = SOURCE_NAME
    fallback: Optional[bool] = None

    @property
    def is_fallback(self) -> bool:
        return bool(self.fallback)

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "player": self.player,
            "from": self.from_,
            "to": self.to,
            "date": self.date,
            "status": self.status,
            "position": self.position,
            "fee": self.fee,
            "contract": self.contract,
            "url": self.url,
            "source": self.source,
        }
        if self.fallback:
            payload["__fallback"] = True
        return payload


_ATTR_FOR_FIELD = {"from": "from_"}

SENTINEL = TransferRecord(player=SENTINEL_PLAYER, fallback=True)


def normalize(record: Union[Mapping[str, Any], TransferRecord]) -> TransferRecord:
    """Map a raw candidate (or an existing record) onto the canonical schema."""
    if isinstance(record, TransferRecord):
        record = record.as_dict()
    values = {
        _ATTR_FOR_FIELD.get(name, name): first_text(record, aliases)
        for name, aliases in FIELD_ALIASES
    }
    fallback = True if record.get("__fallback") is True else None
    return TransferRecord(source=SOURCE_NAME, fallback=fallback, **values)


def is_usable(record: TransferRecord) -> bool:
    return bool(record.player or record.to or record.from_)


def normalize_all(candidates: Iterable[Mapping[str, Any]]) -> List[TransferRecord]:
    """Normalize candidates and drop those without player, destination or origin."""
    out: List[TransferRecord] = []
    for candidate in candidates:
        if not isinstance(candidate, Mapping):
            continue
        record = normalize(candidate)
        if is_usable(record):
            out.append(record)
    return out


def sentinel_result() -> List[TransferRecord]:
    return [SENTINEL]


__all__ = [
    "FIELD_ALIASES",
    "RawCandidate",
    "SENTINEL",
    "SENTINEL_PLAYER",
    "SOURCE_NAME",
    "TransferRecord",
    "coerce_text",
    "first_text",
    "is_usable",
    "normalize",
    "normalize_all",
    "sentinel_result",
]
