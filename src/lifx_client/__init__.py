"""Blocking and asyncio client for the LIFX HTTP API and compatible offline servers."""

__version__ = "0.1.0"

from lifx_client.client import AsyncLifxClient, LifxClient  # noqa: E402
from lifx_client.config import OFFICIAL_API_ENDPOINT, OFFLINE_API_ENDPOINT, LifxConfig  # noqa: E402
from lifx_client.errors import (  # noqa: E402
    AllEndpointsFailed,
    LifxDecodeError,
    LifxError,
    LifxStatusError,
    LifxTransportError,
    LifxValidationError,
)
from lifx_client.models import (  # noqa: E402
    BreatheEffect,
    Clean,
    Color,
    Effect,
    EffectsOff,
    FlameEffect,
    LifxResult,
    Light,
    MorphEffect,
    MoveEffect,
    PulseEffect,
    Scene,
    State,
    StateDelta,
    States,
    Toggle,
)
from lifx_client.results import EndpointOutcome, MutationResult, OperationReceipt, ResultSet  # noqa: E402

__all__ = [
    "AllEndpointsFailed",
    "AsyncLifxClient",
    "BreatheEffect",
    "Clean",
    "Color",
    "Effect",
    "EffectsOff",
    "EndpointOutcome",
    "FlameEffect",
    "LifxClient",
    "LifxConfig",
    "LifxDecodeError",
    "LifxError",
    "LifxResult",
    "LifxStatusError",
    "LifxTransportError",
    "LifxValidationError",
    "Light",
    "MorphEffect",
    "MoveEffect",
    "MutationResult",
    "OFFICIAL_API_ENDPOINT",
    "OFFLINE_API_ENDPOINT",
    "OperationReceipt",
    "PulseEffect",
    "ResultSet",
    "Scene",
    "State",
    "StateDelta",
    "States",
    "Toggle",
]
