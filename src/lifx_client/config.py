from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import os

from lifx_client.errors import LifxValidationError

OFFICIAL_API_ENDPOINT = "https://api.lifx.com"
OFFLINE_API_ENDPOINT = "http://localhost:8089"


def _split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in {"0", "false", "no", "off"}


@dataclass(frozen=True)
class LifxConfig:
    """Credential plus the ordered endpoints every operation is sent to.

    Endpoint order is priority order, e.g. the official cloud API first and an
    offline server second. Both are always attempted.
    """

    access_token: str
    api_endpoints: tuple[str, ...]
    timeout_seconds: float = 10.0
    connect_timeout_seconds: float = 3.0
    verify_tls: bool = True

    def __post_init__(self) -> None:
        endpoints = self.api_endpoints
        if isinstance(endpoints, str):
            endpoints = (endpoints,)
        endpoints = tuple(str(e).strip().rstrip("/") for e in endpoints)
        if not endpoints:
            raise LifxValidationError("api_endpoints must contain at least one base URL")
        for endpoint in endpoints:
            if not endpoint.startswith(("http://", "https://")):
                raise LifxValidationError(f"endpoint must be an http(s) URL: {endpoint!r}")
        if self.timeout_seconds <= 0 or self.connect_timeout_seconds <= 0:
            raise LifxValidationError("timeouts must be positive")
        # Frozen: normalized values go in through object.__setattr__.
        object.__setattr__(self, "api_endpoints", endpoints)

    @staticmethod
    def create(access_token: str, api_endpoints: Sequence[str], **kwargs) -> "LifxConfig":
        return LifxConfig(access_token=access_token, api_endpoints=tuple(api_endpoints), **kwargs)

    @staticmethod
    def from_env() -> "LifxConfig":
        return LifxConfig(
            access_token=os.getenv("LIFX_ACCESS_TOKEN", ""),
            api_endpoints=tuple(_split_csv(os.getenv("LIFX_API_ENDPOINTS")) or [OFFICIAL_API_ENDPOINT]),
            timeout_seconds=float(os.getenv("LIFX_TIMEOUT_SECONDS", "10")),
            connect_timeout_seconds=float(os.getenv("LIFX_CONNECT_TIMEOUT_SECONDS", "3")),
            verify_tls=_parse_bool(os.getenv("LIFX_VERIFY_TLS"), True),
        )
