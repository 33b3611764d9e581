# fichajes/ingestion/strategies/base.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Literal, Optional

from fichajes.domain.transfers import RawCandidate
from fichajes.ingestion.page import RenderedPage

LOGGER = logging.getLogger(__name__)

OutcomeStatus = Literal["ok", "empty", "error"]


@dataclass(frozen=True)
class StrategyOutcome:
    strategy: str
    status: OutcomeStatus
    records: List[RawCandidate] = field(default_factory=list)
    reason: Optional[str] = None

    @classmethod
    def ok(cls, strategy: str, records: List[RawCandidate]) -> StrategyOutcome:
        return cls(strategy=strategy, status="ok", records=list(records))

    @classmethod
    def empty(cls, strategy: str) -> StrategyOutcome:
        return cls(strategy=strategy, status="empty")

    @classmethod
    def error(cls, strategy: str, reason: str) -> StrategyOutcome:
        return cls(strategy=strategy, status="error", reason=reason)


class ExtractionStrategy(ABC):
    """
    Abstract base for one way of reading transfers off the page.
    Subclasses implement extract(); callers use run(), which never raises.
    """

    # Short name (used in logs and in CascadeResult)
    name: str = "base"

    @abstractmethod
    def extract(self, page: RenderedPage) -> List[RawCandidate]:
        """
        Return candidate records found on ``page`` (possibly none).

        May raise on malformed content; run() turns that into an error outcome.
        """
        raise NotImplementedError

    def run(self, page: RenderedPage) -> StrategyOutcome:
        try:
            records = self.extract(page)
        except Exception as exc:
            LOGGER.debug("Strategy %s raised", self.name, exc_info=True)
            return StrategyOutcome.error(self.name, f"{type(exc).__name__}: {exc}")
        if not records:
            return StrategyOutcome.empty(self.name)
        return StrategyOutcome.ok(self.name, records)


__all__ = ["ExtractionStrategy", "OutcomeStatus", "StrategyOutcome"]
