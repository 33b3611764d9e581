from __future__ import annotations

from typing import List

from .base import ExtractionStrategy, StrategyOutcome
from .embedded import EmbeddedDataStrategy
from .table import TableStrategy
from .text import TextStrategy


def default_strategies() -> List[ExtractionStrategy]:
    # Order = priority: table is the most trustworthy, embedded JSON the last resort
    return [TableStrategy(), TextStrategy(), EmbeddedDataStrategy()]


__all__ = [
    "EmbeddedDataStrategy",
    "ExtractionStrategy",
    "StrategyOutcome",
    "TableStrategy",
    "TextStrategy",
    "default_strategies",
]
