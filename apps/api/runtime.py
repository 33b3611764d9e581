from __future__ import annotations

import logging
import os
import sys
from importlib import import_module
from pathlib import Path
from types import ModuleType


def _project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def ensure_bootstrap() -> ModuleType:
    try:
        return import_module("bootstrap")
    except ModuleNotFoundError:
        root = _project_root()
        if str(root) not in sys.path:
            sys.path.insert(0, str(root))
        return import_module("bootstrap")


def load_environment() -> None:
    from dotenv import load_dotenv

    # Real environment wins over .env
    load_dotenv(_project_root() / ".env", override=False)


def configure_logging() -> None:
    log_level = os.getenv("API_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [api] %(levelname)s: %(message)s",
    )


__all__ = ["configure_logging", "ensure_bootstrap", "load_environment"]
