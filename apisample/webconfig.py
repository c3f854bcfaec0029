"""Web server settings read from ``WEB_*`` environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WebConfig:
    host: str = "0.0.0.0"
    port: str = "8080"
    cors_allow_origins: tuple[str, ...] = ("http://0.0.0.0:8001",)


def _load(environ: Optional[Mapping[str, str]]) -> WebConfig:
    env = os.environ if environ is None else environ
    defaults = WebConfig()
    origins = env.get("WEB_CORS_ALLOW_ORIGINS")
    return WebConfig(
        host=env.get("WEB_HOST") or defaults.host,
        port=env.get("WEB_PORT") or defaults.port,
        cors_allow_origins=tuple(origins.split(",")) if origins else defaults.cors_allow_origins,
    )


def load_gin_config(environ: Optional[Mapping[str, str]] = None) -> WebConfig:
    return _load(environ)


def load_echo_config(environ: Optional[Mapping[str, str]] = None) -> WebConfig:
    return _load(environ)