"""Application-level services shared by the API and CLI layers."""

__all__ = [
    "transfers",
]
