from __future__ import annotations

from typing import Any, Sequence, TypeVar

import httpx

from lifx_client import __version__
from lifx_client import operations as ops
from lifx_client.config import LifxConfig
from lifx_client.dispatcher import EndpointDispatcher
from lifx_client.models import (
    BreatheEffect,
    Clean,
    Color,
    Effect,
    EffectsOff,
    FlameEffect,
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
from lifx_client.results import MutationResult, ResultSet

R = TypeVar("R")


def _headers(config: LifxConfig) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {config.access_token}",
        "User-Agent": f"lifx-client/{__version__}",
    }


def _timeout(config: LifxConfig) -> httpx.Timeout:
    return httpx.Timeout(config.timeout_seconds, connect=config.connect_timeout_seconds)


class LifxClient:
    """Blocking client; every call runs on the caller's thread."""

    def __init__(self, config: LifxConfig, *, transport: httpx.BaseTransport | None = None) -> None:
        self.config = config
        self._dispatcher = EndpointDispatcher(config)
        self._transport = transport
        self._client: httpx.Client | None = None

    def close(self) -> None:
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "LifxClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _get_client(self) -> httpx.Client:
        if self._client:
            return self._client
        self._client = httpx.Client(
            headers=_headers(self.config),
            timeout=_timeout(self.config),
            verify=self.config.verify_tls,
            transport=self._transport,
        )
        return self._client

    def run(self, operation: ops.Operation[R]) -> R:
        outcomes = self._dispatcher.dispatch(self._get_client(), operation)
        return operation.collect(outcomes)

    def list_lights(self, selector: str = "all") -> ResultSet[Light]:
        return self.run(ops.list_lights(selector))

    def list_all(self) -> ResultSet[Light]:
        return self.list_lights("all")

    def set_state(self, selector: str, state: State) -> MutationResult:
        return self.run(ops.set_state(selector, state))

    def set_states(self, states: States | Sequence[State]) -> MutationResult:
        return self.run(ops.set_states(states))

    def state_delta(self, selector: str, delta: StateDelta) -> MutationResult:
        return self.run(ops.state_delta(selector, delta))

    def toggle(self, selector: str, toggle: Toggle | None = None) -> MutationResult:
        return self.run(ops.toggle(selector, toggle))

    def effect(self, selector: str, effect: Effect) -> MutationResult:
        return self.run(ops.effect(selector, effect))

    def breathe_effect(self, selector: str, breathe: BreatheEffect) -> MutationResult:
        return self.run(ops.breathe_effect(selector, breathe))

    def move_effect(self, selector: str, move: MoveEffect) -> MutationResult:
        return self.run(ops.move_effect(selector, move))

    def morph_effect(self, selector: str, morph: MorphEffect) -> MutationResult:
        return self.run(ops.morph_effect(selector, morph))

    def flame_effect(self, selector: str, flame: FlameEffect) -> MutationResult:
        return self.run(ops.flame_effect(selector, flame))

    def pulse_effect(self, selector: str, pulse: PulseEffect) -> MutationResult:
        return self.run(ops.pulse_effect(selector, pulse))

    def effects_off(self, selector: str, effects_off: EffectsOff | None = None) -> MutationResult:
        return self.run(ops.effects_off(selector, effects_off))

    def clean(self, selector: str, clean: Clean | None = None) -> MutationResult:
        return self.run(ops.clean(selector, clean))

    def list_scenes(self) -> ResultSet[Scene]:
        return self.run(ops.list_scenes())

    def validate_color(self, color: str) -> ResultSet[Color]:
        return self.run(ops.validate_color(color))


class AsyncLifxClient:
    """asyncio client; suspends only while waiting on the network."""

    def __init__(self, config: LifxConfig, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config
        self._dispatcher = EndpointDispatcher(config)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "AsyncLifxClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client:
            return self._client
        self._client = httpx.AsyncClient(
            headers=_headers(self.config),
            timeout=_timeout(self.config),
            verify=self.config.verify_tls,
            transport=self._transport,
        )
        return self._client

    async def run(self, operation: ops.Operation[R]) -> R:
        outcomes = await self._dispatcher.adispatch(self._get_client(), operation)
        return operation.collect(outcomes)

    async def list_lights(self, selector: str = "all") -> ResultSet[Light]:
        return await self.run(ops.list_lights(selector))

    async def list_all(self) -> ResultSet[Light]:
        return await self.list_lights("all")

    async def set_state(self, selector: str, state: State) -> MutationResult:
        return await self.run(ops.set_state(selector, state))

    async def set_states(self, states: States | Sequence[State]) -> MutationResult:
        return await self.run(ops.set_states(states))

    async def state_delta(self, selector: str, delta: StateDelta) -> MutationResult:
        return await self.run(ops.state_delta(selector, delta))

    async def toggle(self, selector: str, toggle: Toggle | None = None) -> MutationResult:
        return await self.run(ops.toggle(selector, toggle))

    async def effect(self, selector: str, effect: Effect) -> MutationResult:
        return await self.run(ops.effect(selector, effect))

    async def breathe_effect(self, selector: str, breathe: BreatheEffect) -> MutationResult:
        return await self.run(ops.breathe_effect(selector, breathe))

    async def move_effect(self, selector: str, move: MoveEffect) -> MutationResult:
        return await self.run(ops.move_effect(selector, move))

    async def morph_effect(self, selector: str, morph: MorphEffect) -> MutationResult:
        return await self.run(ops.morph_effect(selector, morph))

    async def flame_effect(self, selector: str, flame: FlameEffect) -> MutationResult:
        return await self.run(ops.flame_effect(selector, flame))

    async def pulse_effect(self, selector: str, pulse: PulseEffect) -> MutationResult:
        return await self.run(ops.pulse_effect(selector, pulse))

    async def effects_off(self, selector: str, effects_off: EffectsOff | None = None) -> MutationResult:
        return await self.run(ops.effects_off(selector, effects_off))

    async def clean(self, selector: str, clean: Clean | None = None) -> MutationResult:
        return await self.run(ops.clean(selector, clean))

    async def list_scenes(self) -> ResultSet[Scene]:
        return await self.run(ops.list_scenes())

    async def validate_color(self, color: str) -> ResultSet[Color]:
        return await self.run(ops.validate_color(color))
