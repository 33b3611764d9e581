"""Modules for rendering the LaLiga transfer pages and extracting transfers."""
__all__ = [
    "browser_fetch",
    "cascade",
    "fetch",
    "page",
    "strategies",
]
