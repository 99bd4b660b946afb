"""
beacon.config — YAML Configuration Loader
==========================================

Reads ``config.yaml`` for deployment and gameplay tuning (app identity,
API port, point awards, demo credentials).  Secrets and connection strings
stay in ``.env``.

Usage::

    from beacon.config import load_config

    cfg = load_config()          # reads ./config.yaml when present
    print(cfg.app_name)          # "Beacon"
    print(cfg.checkin_points)    # 10
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yaml"


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class BeaconConfig:
    """Immutable configuration loaded from ``config.yaml``.

    Every field has a default so a bare checkout runs without a config file.
    """

    # Identity
    app_name: str = "Beacon"

    # API
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    # Point economy
    message_points: int = 1
    checkin_points: int = 10
    referral_points: int = 50

    # Demo user bootstrap, see user_service.resolve_current_user
    demo_username: str = "DemoUser"
    demo_password: str = "demo"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(path: str | Path | None = None) -> BeaconConfig:
    """Read *path* and return a :class:`BeaconConfig` instance.

    Parameters
    ----------
    path:
        Filesystem path to the YAML configuration file.  When omitted,
        ``config.yaml`` in the current working directory is used if it
        exists, otherwise the built-in defaults are returned.

    Raises
    ------
    FileNotFoundError
        If an explicit *path* doesn't exist.
    ValueError
        If a numeric key holds a non-integer value.
    """
    if path is None:
        config_path = Path(DEFAULT_CONFIG_PATH)
        if not config_path.exists():
            logger.info("No %s found — using default configuration", config_path)
            return BeaconConfig()
    else:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {config_path.resolve()}\n"
                "Hint: copy config.yaml.example → config.yaml and edit it."
            )

    with open(config_path, encoding="utf-8") as fh:
        raw: dict = yaml.safe_load(fh) or {}

    defaults = BeaconConfig()
    return BeaconConfig(
        app_name=raw.get("app_name", defaults.app_name),
        api_host=raw.get("api_host", defaults.api_host),
        api_port=int(raw.get("api_port", defaults.api_port)),
        message_points=int(raw.get("message_points", defaults.message_points)),
        checkin_points=int(raw.get("checkin_points", defaults.checkin_points)),
        referral_points=int(raw.get("referral_points", defaults.referral_points)),
        demo_username=raw.get("demo_username", defaults.demo_username),
        demo_password=raw.get("demo_password", defaults.demo_password),
    )
