"""Exceptions that cross the transfer-service boundary.

Each one can be rebuilt from its own attributes (``__reduce__``), so it can be
copied for every thread waiting on a shared fetch.
"""
from __future__ import annotations


class TransferError(Exception):
    """Base class for failures when retrieving transfers."""


class InvalidCompetitionError(TransferError, ValueError):
    def __init__(self, competition: str) -> None:
        super().__init__(f"Parámetro comp inválido: {competition!r}")
        self.competition = competition

    def __reduce__(self):
        return (type(self), (self.competition,))


class NavigationError(TransferError):
    """The page could not be loaded (timeout, DNS, HTTP error, browser crash)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Could not load {url}: {reason}")
        self.url = url
        self.reason = reason

    def __reduce__(self):
        return (type(self), (self.url, self.reason))


class ExtractionFailed(TransferError):
    def __init__(self, competition: str, message: str) -> None:
        super().__init__(message)
        self.competition = competition

    def __reduce__(self):
        return (type(self), (self.competition, str(self)))


__all__ = [
    "ExtractionFailed",
    "InvalidCompetitionError",
    "NavigationError",
    "TransferError",
]
