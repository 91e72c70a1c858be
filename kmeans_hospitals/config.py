"""Configuration helpers for the K-Means hospitals dashboard."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ENV_PATH = PROJECT_ROOT / ".env"

# Load environment variables early so downstream modules can rely on them.
load_dotenv(ENV_PATH, override=False)

API_URL_ENV = "KMEANS_API_URL"
API_TIMEOUT_ENV = "KMEANS_API_TIMEOUT"
LOG_LEVEL_ENV = "KMEANS_LOG_LEVEL"
PORT_ENV = "PORT"
HOST_ENV = "HOST"

DEFAULT_API_URL = "http://localhost:8000"
DEFAULT_API_TIMEOUT = 30.0
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_PORT = 7860
DEFAULT_HOST = "0.0.0.0"


@dataclass(frozen=True)
class ApiSettings:
    """Where the K-Means computation service lives and how long to wait for it."""

    base_url: str
    timeout: float


@dataclass(frozen=True)
class ServerSettings:
    host: str
    port: int


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def get_api_settings() -> ApiSettings:
    """Resolve the API base URL and timeout from the environment."""

    base_url = _get_env(API_URL_ENV, DEFAULT_API_URL).rstrip("/")
    raw_timeout = _get_env(API_TIMEOUT_ENV, str(DEFAULT_API_TIMEOUT))
    try:
        timeout = float(raw_timeout)
    except ValueError as exc:
        raise RuntimeError(
            f"{API_TIMEOUT_ENV} must be a number of seconds, got {raw_timeout!r}"
        ) from exc
    if timeout <= 0:
        raise RuntimeError(f"{API_TIMEOUT_ENV} must be positive, got {timeout}")
    return ApiSettings(base_url=base_url, timeout=timeout)


def get_server_settings() -> ServerSettings:
    raw_port = _get_env(PORT_ENV, str(DEFAULT_PORT))
    try:
        port = int(raw_port)
    except ValueError as exc:
        raise RuntimeError(f"{PORT_ENV} must be an integer, got {raw_port!r}") from exc
    return ServerSettings(host=_get_env(HOST_ENV, DEFAULT_HOST), port=port)


def configure_logging(level: Optional[str] = None) -> None:
    """Set the root log level from ``KMEANS_LOG_LEVEL`` (default INFO)."""

    level_name = (level or _get_env(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
