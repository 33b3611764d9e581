from __future__ import annotations

import logging
import os
from typing import Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.api import runtime

_bootstrap = runtime.ensure_bootstrap()
runtime.load_environment()

from apps.api.routes import transfers_router
from fichajes.infrastructure.config import SETTINGS

app = FastAPI(title="LaLiga Fichajes API")
LOGGER = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    raw = os.getenv("API_CORS_ORIGINS")
    if raw:
        return [origin.strip() for origin in raw.split(",") if origin.strip()]
    return ["*"]


app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(transfers_router)


@app.get("/health")
def health() -> Dict[str, bool]:
    return {"ok": True}


def main() -> None:
    import uvicorn

    runtime.configure_logging()
    LOGGER.info("Fichajes backend listening on http://localhost:%s", SETTINGS.PORT)
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=SETTINGS.PORT,
        log_level=os.getenv("UVICORN_LOG_LEVEL", "info"),
    )


if __name__ == "__main__":
    main()


__all__ = ["app", "main"]
