from __future__ import annotations

from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _SparseModel(BaseModel):
    """Request body whose fields are all optional; only set fields go on the wire."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class _Snapshot(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


# Response records


class ApiError(_Snapshot):
    field: str = ""
    message: list[str] = Field(default_factory=list)


class Color(_Snapshot):
    hue: float | None = Field(default=None, ge=0.0, le=360.0)
    saturation: float | None = Field(default=None, ge=0.0, le=1.0)
    kelvin: int | None = None
    brightness: float | None = Field(default=None, ge=0.0, le=1.0)
    error: str | None = None
    errors: list[ApiError] | None = None

    def to_color_string(self) -> str:
        """Render as a LIFX color string, e.g. ``hue:120 saturation:1.0``."""
        parts = []
        for name in ("hue", "saturation", "brightness", "kelvin"):
            value = getattr(self, name)
            if value is not None:
                parts.append(f"{name}:{value}")
        return " ".join(parts)


class Group(_Snapshot):
    id: str
    name: str = ""


class Location(_Snapshot):
    id: str
    name: str = ""


class Capabilities(_Snapshot):
    has_color: bool = False
    has_variable_color_temp: bool = False
    has_ir: bool = False
    has_hev: bool = False
    has_chain: bool = False
    has_matrix: bool = False
    has_multizone: bool = False
    min_kelvin: int | None = None
    max_kelvin: int | None = None


class Product(_Snapshot):
    name: str = ""
    identifier: str = ""
    company: str = ""
    vendor_id: int | None = None
    product_id: int | None = None
    capabilities: Capabilities | None = None


class Light(_Snapshot):
    id: str
    uuid: str | None = None
    label: str = ""
    connected: bool = False
    power: str = "off"
    color: Color | None = None
    brightness: float | None = None
    group: Group | None = None
    location: Location | None = None
    product: Product | None = None
    last_seen: str | None = None
    seconds_since_seen: float | None = None
    error: str | None = None
    errors: list[ApiError] | None = None

    @property
    def selector(self) -> str:
        return f"id:{self.id}"


class Account(_Snapshot):
    uuid: str


class SceneState(_Snapshot):
    selector: str | None = None
    power: str | None = None
    brightness: float | None = None
    color: Color | str | None = None


class Scene(_Snapshot):
    uuid: str
    name: str = ""
    account: Account | None = None
    states: list[SceneState] = Field(default_factory=list)
    created_at: int | None = None
    updated_at: int | None = None
    error: str | None = None
    errors: list[ApiError] | None = None


class LifxResult(_Snapshot):
    """One device line of a mutation response."""

    id: str
    label: str = ""
    status: str = ""


class LifxResults(_Snapshot):
    results: list[LifxResult] = Field(default_factory=list)
    error: str | None = None


# Request bodies


class State(_SparseModel):
    power: Literal["on", "off"] | None = None
    color: str | None = None
    brightness: float | None = Field(default=None, ge=0.0, le=1.0)
    duration: float | None = Field(default=None, ge=0.0)
    infrared: float | None = Field(default=None, ge=0.0, le=1.0)
    selector: str | None = Field(default=None, min_length=1)
    fast: bool | None = None

    @field_validator("color", mode="before")
    @classmethod
    def _color_to_string(cls, value: Any) -> Any:
        if isinstance(value, Color):
            return value.to_color_string()
        return value


class States(_SparseModel):
    states: list[State] = Field(..., min_length=1)
    defaults: State | None = None


class StateDelta(_SparseModel):
    power: Literal["on", "off"] | None = None
    duration: float | None = Field(default=None, ge=0.0)
    infrared: float | None = Field(default=None, ge=0.0, le=1.0)
    hue: float | None = Field(default=None, ge=-360.0, le=360.0)
    saturation: float | None = Field(default=None, ge=-1.0, le=1.0)
    brightness: float | None = Field(default=None, ge=-1.0, le=1.0)
    kelvin: int | None = None
    fast: bool | None = None


class Toggle(_SparseModel):
    duration: float | None = Field(default=None, ge=0.0)


class Clean(_SparseModel):
    stop: bool | None = None
    duration: int | None = Field(default=None, ge=0)


class Effect(_SparseModel):
    """Base for waveform/firmware effects; ``effect_name`` is the path segment."""

    effect_name: ClassVar[str]


class BreatheEffect(Effect):
    effect_name: ClassVar[str] = "breathe"

    color: str | None = None
    from_color: str | None = None
    period: float | None = Field(default=None, gt=0.0)
    cycles: float | None = Field(default=None, gt=0.0)
    persist: bool | None = None
    power_on: bool | None = None
    peak: float | None = Field(default=None, ge=0.0, le=1.0)


class PulseEffect(Effect):
    effect_name: ClassVar[str] = "pulse"

    color: str | None = None
    from_color: str | None = None
    period: float | None = Field(default=None, gt=0.0)
    cycles: float | None = Field(default=None, gt=0.0)
    persist: bool | None = None
    power_on: bool | None = None


class MoveEffect(Effect):
    effect_name: ClassVar[str] = "move"

    direction: Literal["forward", "backward"] | None = None
    period: float | None = Field(default=None, gt=0.0)
    cycles: float | None = Field(default=None, gt=0.0)
    power_on: bool | None = None
    fast: bool | None = None


class MorphEffect(Effect):
    effect_name: ClassVar[str] = "morph"

    period: float | None = Field(default=None, gt=0.0)
    duration: float | None = Field(default=None, ge=0.0)
    palette: list[str] | None = Field(default=None, min_length=1)
    power_on: bool | None = None
    fast: bool | None = None


class FlameEffect(Effect):
    effect_name: ClassVar[str] = "flame"

    period: float | None = Field(default=None, gt=0.0)
    duration: float | None = Field(default=None, ge=0.0)
    power_on: bool | None = None
    fast: bool | None = None


class EffectsOff(Effect):
    effect_name: ClassVar[str] = "off"

    power_off: bool | None = None
