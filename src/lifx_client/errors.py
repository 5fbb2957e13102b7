from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from lifx_client.results import EndpointOutcome


class LifxError(Exception):
    pass


class LifxTransportError(LifxError):
    """DNS, connect, TLS or timeout failure talking to one endpoint."""


class LifxStatusError(LifxError):
    def __init__(self, *, status_code: int, body: Any) -> None:
        super().__init__(f"LIFX API error: {status_code}")
        self.status_code = status_code
        self.body = body


class LifxDecodeError(LifxError):
    """A 2xx response whose body is not the expected JSON shape."""


class LifxValidationError(LifxError, ValueError):
    """Caller input rejected before any request was sent."""


class AllEndpointsFailed(LifxError):
    def __init__(self, outcomes: Sequence["EndpointOutcome"]) -> None:
        reasons = "; ".join(f"{o.endpoint}: {o.reason}" for o in outcomes)
        super().__init__(f"All LIFX endpoints failed ({reasons})")
        self.outcomes = tuple(outcomes)
