"""
beacon.api.__main__ — Entry point for ``python -m beacon.api``
===============================================================

Wiring:
1. Load .env (DATABASE_URL, CORS origins).
2. Load config.yaml (host, port, point economy).
3. Hand the FastAPI app to uvicorn (blocking).
"""

from __future__ import annotations

import logging

import uvicorn
from dotenv import load_dotenv

from beacon.api.deps import get_config

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("beacon")


def main() -> None:
    """Bootstrap and serve the Beacon API."""
    load_dotenv()

    cfg = get_config()
    logger.info("Config loaded — %s on %s:%d", cfg.app_name, cfg.api_host, cfg.api_port)

    uvicorn.run("beacon.api.main:app", host=cfg.api_host, port=cfg.api_port)


if __name__ == "__main__":
    main()
