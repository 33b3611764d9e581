from __future__ import annotations

from .transfers import router as transfers_router

__all__ = ["transfers_router"]
