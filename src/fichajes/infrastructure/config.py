# fichajes/infrastructure/config.py
from __future__ import annotations
from dataclasses import dataclass
import os


def _env_bool(name: str, default: bool) -> bool:
    """Read a boolean environment variable tolerantly."""
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() not in {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    PORT: int = int(os.getenv("PORT", "3001"))

    # Headless unless explicitly disabled with HEADLESS=false
    HEADLESS: bool = _env_bool("HEADLESS", True)

    USER_AGENT: str = os.getenv(
        "USER_AGENT",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/123 Safari/537.36",
    )

    REQ_TIMEOUT: int = int(os.getenv("REQ_TIMEOUT", "25"))
    PLAYWRIGHT_TIMEOUT: int = int(os.getenv("PLAYWRIGHT_TIMEOUT", "60000"))
    # Extra wait after networkidle so the LaLiga front end can hydrate
    PLAYWRIGHT_SETTLE_MS: int = int(os.getenv("PLAYWRIGHT_SETTLE_MS", "2000"))

    # "browser" (Playwright) or "http" (plain requests)
    PAGE_PROVIDER: str = os.getenv("PAGE_PROVIDER", "browser").strip().lower()

    HTTP_PROXY: str | None = os.getenv("HTTP_PROXY", None)

    CACHE_TTL_SECONDS: float = float(os.getenv("TRANSFERS_CACHE_TTL", "600"))


SETTINGS = Settings()
