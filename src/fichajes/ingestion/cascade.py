from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from fichajes.domain.transfers import TransferRecord, normalize_all, sentinel_result
from fichajes.ingestion.page import RenderedPage
from fichajes.ingestion.strategies import (
    ExtractionStrategy,
    StrategyOutcome,
    default_strategies,
)

LOGGER = logging.getLogger(__name__)


@dataclass
class CascadeResult:
    records: List[TransferRecord]
    strategy: Optional[str] = None
    outcomes: List[StrategyOutcome] = field(default_factory=list)

    @property
    def is_fallback(self) -> bool:
        return self.strategy is None


class ExtractionCascade:
    """Try each strategy in order and keep the first usable result."""

    def __init__(self, strategies: Sequence[ExtractionStrategy] | None = None) -> None:
        self.strategies: List[ExtractionStrategy] = (
            list(strategies) if strategies is not None else default_strategies()
        )

    def run(self, page: RenderedPage) -> CascadeResult:
        outcomes: List[StrategyOutcome] = []
        for strategy in self.strategies:
            outcome = strategy.run(page)
            outcomes.append(outcome)
            if outcome.status == "error":
                LOGGER.warning(
                    "Strategy %s failed on %s: %s", strategy.name, page.url, outcome.reason
                )
                continue
            records = normalize_all(outcome.records)
            if records:
                LOGGER.info(
                    "Strategy %s produced %d transfers (%d candidates) from %s",
                    strategy.name,
                    len(records),
                    len(outcome.records),
                    page.url,
                )
                return CascadeResult(records=records, strategy=strategy.name, outcomes=outcomes)
            LOGGER.debug(
                "Strategy %s gave no usable rows (%d candidates)",
                strategy.name,
                len(outcome.records),
            )

        LOGGER.info("No strategy produced transfers for %s; returning placeholder", page.url)
        return CascadeResult(records=sentinel_result(), strategy=None, outcomes=outcomes)


__all__ = ["CascadeResult", "ExtractionCascade"]
