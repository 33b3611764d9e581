from __future__ import annotations

from typing import Dict, Tuple

from fichajes.domain.errors import InvalidCompetitionError

DEFAULT_COMPETITION = "ea-sports"

# Official LaLiga transfer pages
LALIGA_URLS: Dict[str, str] = {
    "ea-sports": "https://www.laliga.com/fichajes/laliga-easports",
    "hypermotion": "https://www.laliga.com/fichajes/laliga-hypermotion",
}


def supported_competitions() -> Tuple[str, ...]:
    return tuple(LALIGA_URLS)


def resolve_url(competition: str) -> str:
    """Return the source URL for ``competition`` or raise InvalidCompetitionError."""
    url = LALIGA_URLS.get(competition)
    if not url:
        raise InvalidCompetitionError(competition)
    return url


def cache_key(competition: str) -> str:
    return f"laliga:{competition}"


__all__ = [
    "DEFAULT_COMPETITION",
    "LALIGA_URLS",
    "cache_key",
    "resolve_url",
    "supported_competitions",
]
