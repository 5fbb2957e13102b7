from typing import Any, Callable

import httpx
import pytest

from lifx_client.config import LifxConfig

CLOUD = "https://api.lifx.com"
OFFLINE = "http://localhost:8089"


def light_payload(light_id: str, label: str, **extra: Any) -> dict[str, Any]:
    payload = {
        "id": light_id,
        "uuid": f"uuid-{light_id}",
        "label": label,
        "connected": True,
        "power": "on",
        "color": {"hue": 120.0, "saturation": 1.0, "kelvin": 3500},
        "brightness": 0.5,
        "group": {"id": "g1", "name": "Living Room"},
        "location": {"id": "l1", "name": "Home"},
        "product": {
            "name": "LIFX A19",
            "identifier": "lifx_a19",
            "company": "LIFX",
            "vendor_id": 1,
            "product_id": 27,
            "capabilities": {"has_color": True, "min_kelvin": 2500, "max_kelvin": 9000},
        },
        "last_seen": "2026-10-18T12:00:00Z",
        "seconds_since_seen": 0,
    }
    payload.update(extra)
    return payload


def results_payload(*ids: str) -> dict[str, Any]:
    return {"results": [{"id": i, "label": f"Light {i}", "status": "ok"} for i in ids]}


class Recorder:
    """MockTransport handler that records requests and answers per endpoint host."""

    def __init__(self, routes: dict[str, Callable[[httpx.Request], httpx.Response]]) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        base = f"{request.url.scheme}://{request.url.netloc.decode()}"
        return self.routes[base](request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


@pytest.fixture
def config() -> LifxConfig:
    return LifxConfig(access_token="tok", api_endpoints=(CLOUD, OFFLINE))
