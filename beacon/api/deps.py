"""
beacon.api.deps — FastAPI dependency injection
================================================
"""

from __future__ import annotations

import os
from functools import lru_cache

from sqlalchemy import Engine

from beacon.config import BeaconConfig, load_config
from beacon.database.engine import create_db_engine


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    return create_db_engine()


@lru_cache(maxsize=1)
def get_config() -> BeaconConfig:
    return load_config(os.getenv("BEACON_CONFIG") or None)
