"""Centralized configuration for AppsAI MCP.

All settings come from environment variables. A ``.env`` file is loaded
first, but never overrides variables that are already set.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_SERVER_URL = "https://internal.appsai.com/server"
DEFAULT_APP_ID = "Rv4CcqHMjTcjAzSDb6vVMnw0Yp99ZQ5Wrvh80PUI"
DEFAULT_REQUEST_TIMEOUT = 120.0

# Payment-required (x402) defaults
INSUFFICIENT_BALANCE_CODE = 402
DEFAULT_MIN_TOPUP = 10
DEFAULT_RECOMMENDED_TOPUP = 25
DEFAULT_TOPUP_MULTIPLIER = 1.2
DEFAULT_PAYMENT_ENDPOINT = "https://api.appsai.com/x402/topup"
DEFAULT_BILLING_URL = "https://appsai.com/billing"
SETTLEMENT_NETWORKS = ("base", "solana")
SETTLEMENT_ASSET = "USDC"

ENV_FILE_LOCATIONS = [Path.cwd() / ".env", Path.home() / ".appsai" / ".env"]


def load_env_file(paths: list[Path] | None = None) -> Path | None:
    """Load KEY=VALUE pairs from the first existing .env file.

    Returns:
        The path that was loaded, or None if no file was found.
    """
    for env_path in paths if paths is not None else ENV_FILE_LOCATIONS:
        if not env_path.exists():
            continue
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    os.environ.setdefault(key.strip(), value.strip().strip("\"'"))
        logger.debug(f"Loaded environment from {env_path}")
        return env_path
    return None


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the gateway."""

    api_key: str | None = None
    server_url: str = DEFAULT_SERVER_URL
    app_id: str = DEFAULT_APP_ID
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_level: str = "INFO"

    # Payment-required response shaping
    min_topup: float = DEFAULT_MIN_TOPUP
    recommended_topup: float = DEFAULT_RECOMMENDED_TOPUP
    topup_multiplier: float = DEFAULT_TOPUP_MULTIPLIER
    payment_endpoint: str = DEFAULT_PAYMENT_ENDPOINT
    billing_url: str = DEFAULT_BILLING_URL

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key and self.api_key.strip())


def load_settings() -> Settings:
    """Build Settings from the current environment.

    Raises:
        ConfigurationError: If a numeric variable cannot be parsed.
    """
    return Settings(
        api_key=os.environ.get("APPSAI_API_KEY") or None,
        server_url=os.environ.get("PARSE_SERVER_URL") or DEFAULT_SERVER_URL,
        app_id=os.environ.get("PARSE_APP_ID") or DEFAULT_APP_ID,
        request_timeout=_env_float("APPSAI_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        log_level=os.environ.get("APPSAI_LOG_LEVEL", "INFO").upper(),
        min_topup=_env_float("APPSAI_MIN_TOPUP", DEFAULT_MIN_TOPUP),
        recommended_topup=_env_float("APPSAI_RECOMMENDED_TOPUP", DEFAULT_RECOMMENDED_TOPUP),
        topup_multiplier=_env_float("APPSAI_TOPUP_MULTIPLIER", DEFAULT_TOPUP_MULTIPLIER),
        payment_endpoint=os.environ.get("APPSAI_PAYMENT_ENDPOINT") or DEFAULT_PAYMENT_ENDPOINT,
        billing_url=os.environ.get("APPSAI_BILLING_URL") or DEFAULT_BILLING_URL,
    )
