"""Request builders for every supported LIFX HTTP API method.

Builders are pure: they validate caller input, serialize the sparse request
body and describe how the per-endpoint responses should be decoded and
aggregated. Nothing here touches the network, so the blocking and the asyncio
clients share all of it.
"""

from __future__ import annotations

import urllib.parse
from dataclasses import dataclass
from typing import Any, Callable, Generic, Sequence, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from lifx_client.errors import LifxValidationError
from lifx_client.models import (
    BreatheEffect,
    Clean,
    Color,
    Effect,
    EffectsOff,
    FlameEffect,
    LifxResults,
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
from lifx_client.results import (
    EndpointOutcome,
    MutationResult,
    ResultSet,
    collect_items,
    collect_receipts,
)

R = TypeVar("R")
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class Operation(Generic[R]):
    method: str
    path: str
    decode: Callable[[Any], Any]
    collect: Callable[[Sequence[EndpointOutcome]], R]
    json_body: dict[str, Any] | None = None
    params: dict[str, str] | None = None


_LIGHTS = TypeAdapter(list[Light])
_SCENES = TypeAdapter(list[Scene])


def decode_lights(body: Any) -> list[Light]:
    return _LIGHTS.validate_python(body)


def decode_scenes(body: Any) -> list[Scene]:
    return _SCENES.validate_python(body)


def decode_color(body: Any) -> list[Color]:
    return [Color.model_validate(body)]


def decode_results(body: Any) -> LifxResults:
    # 202/207 responses may carry no body at all (e.g. fast mode).
    if body is None:
        return LifxResults()
    return LifxResults.model_validate(body)


def _require_selector(selector: Any) -> str:
    if not isinstance(selector, str) or not selector.strip():
        raise LifxValidationError("selector must be a non-empty string")
    return selector


def _selector_segment(selector: Any) -> str:
    # The selector is one path segment; "#", "?" and "/" in labels must not end it.
    return urllib.parse.quote(_require_selector(selector), safe=":,|")


def _plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(exclude_none=True)
    return value


def _coerce(model_cls: type[M], value: Any) -> M:
    """Validate ``value`` as ``model_cls``.

    Model instances are dumped and validated again so that objects built with
    ``model_construct`` cannot smuggle out-of-range values onto the wire.
    """
    if not isinstance(value, (model_cls, dict)):
        raise LifxValidationError(f"expected {model_cls.__name__}, got {type(value).__name__}")
    try:
        return model_cls.model_validate(_plain(value))
    except PydanticValidationError as exc:
        raise LifxValidationError(str(exc)) from exc


def _mutation(method: str, path: str, body: dict[str, Any] | None) -> Operation[MutationResult]:
    return Operation(
        method=method,
        path=path,
        decode=decode_results,
        collect=collect_receipts,
        json_body=body,
    )


def list_lights(selector: str = "all") -> Operation[ResultSet[Light]]:
    selector = _selector_segment(selector)
    return Operation(method="GET", path=f"/v1/lights/{selector}", decode=decode_lights, collect=collect_items)


def set_state(selector: str, state: State | dict[str, Any]) -> Operation[MutationResult]:
    selector = _selector_segment(selector)
    body = _coerce(State, state).to_body()
    return _mutation("PUT", f"/v1/lights/{selector}/state", body)


def set_states(states: States | Sequence[State] | dict[str, Any]) -> Operation[MutationResult]:
    if isinstance(states, (list, tuple)):
        states = {"states": [_plain(s) for s in states]}
    body = _coerce(States, states).to_body()
    return _mutation("PUT", "/v1/lights/states", body)


def state_delta(selector: str, delta: StateDelta | dict[str, Any]) -> Operation[MutationResult]:
    selector = _selector_segment(selector)
    body = _coerce(StateDelta, delta).to_body()
    return _mutation("POST", f"/v1/lights/{selector}/state/delta", body)


def toggle(selector: str, toggle: Toggle | dict[str, Any] | None = None) -> Operation[MutationResult]:
    selector = _selector_segment(selector)
    body = _coerce(Toggle, toggle).to_body() if toggle is not None else None
    return _mutation("POST", f"/v1/lights/{selector}/toggle", body)


def effect(selector: str, effect: Effect) -> Operation[MutationResult]:
    selector = _selector_segment(selector)
    if not isinstance(effect, Effect) or type(effect) is Effect:
        raise LifxValidationError("effect must be a concrete effect model, e.g. BreatheEffect")
    body = _coerce(type(effect), effect).to_body()
    return _mutation("POST", f"/v1/lights/{selector}/effects/{effect.effect_name}", body)


def breathe_effect(selector: str, breathe: BreatheEffect) -> Operation[MutationResult]:
    return effect(selector, _coerce(BreatheEffect, breathe))


def move_effect(selector: str, move: MoveEffect) -> Operation[MutationResult]:
    return effect(selector, _coerce(MoveEffect, move))


def morph_effect(selector: str, morph: MorphEffect) -> Operation[MutationResult]:
    return effect(selector, _coerce(MorphEffect, morph))


def flame_effect(selector: str, flame: FlameEffect) -> Operation[MutationResult]:
    return effect(selector, _coerce(FlameEffect, flame))


def pulse_effect(selector: str, pulse: PulseEffect) -> Operation[MutationResult]:
    return effect(selector, _coerce(PulseEffect, pulse))


def effects_off(selector: str, effects_off: EffectsOff | None = None) -> Operation[MutationResult]:
    return effect(selector, effects_off if effects_off is not None else EffectsOff())


def clean(selector: str, clean: Clean | dict[str, Any] | None = None) -> Operation[MutationResult]:
    selector = _selector_segment(selector)
    body = _coerce(Clean, clean).to_body() if clean is not None else None
    return _mutation("POST", f"/v1/lights/{selector}/clean", body)


def list_scenes() -> Operation[ResultSet[Scene]]:
    return Operation(method="GET", path="/v1/scenes", decode=decode_scenes, collect=collect_items)


def validate_color(color: str) -> Operation[ResultSet[Color]]:
    if not isinstance(color, str) or not color.strip():
        raise LifxValidationError("color must be a non-empty string")
    return Operation(
        method="GET",
        path="/v1/color",
        decode=decode_color,
        collect=collect_items,
        params={"string": color},
    )
