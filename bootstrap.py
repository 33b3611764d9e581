"""Put the repo root and src/ on sys.path so `apps` and `fichajes` import without install."""
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"

for _path in (ROOT, SRC):
    if _path.exists() and str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

__all__ = ["ROOT", "SRC"]
