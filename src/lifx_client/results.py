from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Iterator, Literal, Sequence, TypeVar

from lifx_client.errors import AllEndpointsFailed, LifxError
from lifx_client.models import LifxResult, LifxResults

T = TypeVar("T")

OverallStatus = Literal["ok", "partial"]


@dataclass(frozen=True)
class EndpointOutcome:
    """What happened when one operation was sent to one endpoint."""

    endpoint: str
    status_code: int | None = None
    payload: Any = None
    reason: str | None = None
    error: LifxError | None = field(default=None, compare=False, repr=False)

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class OperationReceipt:
    endpoint: str
    ok: bool
    status_code: int | None = None
    results: tuple[LifxResult, ...] = ()
    error: str | None = None


def _overall_status(outcomes: Sequence[EndpointOutcome]) -> OverallStatus:
    return "ok" if all(o.ok for o in outcomes) else "partial"


@dataclass(frozen=True)
class ResultSet(Generic[T]):
    """Items concatenated from every endpoint that answered, in endpoint order."""

    items: tuple[T, ...]
    outcomes: tuple[EndpointOutcome, ...]

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> T:
        return self.items[index]

    @property
    def failures(self) -> list[EndpointOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def partial(self) -> bool:
        return bool(self.failures)

    @property
    def status(self) -> OverallStatus:
        return _overall_status(self.outcomes)


@dataclass(frozen=True)
class MutationResult:
    receipts: tuple[OperationReceipt, ...]
    outcomes: tuple[EndpointOutcome, ...]

    def __iter__(self) -> Iterator[OperationReceipt]:
        return iter(self.receipts)

    def __len__(self) -> int:
        return len(self.receipts)

    @property
    def results(self) -> list[LifxResult]:
        return [line for receipt in self.receipts for line in receipt.results]

    @property
    def failures(self) -> list[EndpointOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def partial(self) -> bool:
        return bool(self.failures)

    @property
    def status(self) -> OverallStatus:
        return _overall_status(self.outcomes)


def _raise_if_all_failed(outcomes: Sequence[EndpointOutcome]) -> None:
    if not any(o.ok for o in outcomes):
        raise AllEndpointsFailed(outcomes)


def collect_items(outcomes: Sequence[EndpointOutcome]) -> ResultSet[Any]:
    # Devices reported by several endpoints are kept once per endpoint.
    _raise_if_all_failed(outcomes)
    items: list[Any] = []
    for outcome in outcomes:
        if outcome.ok and outcome.payload:
            items.extend(outcome.payload)
    return ResultSet(items=tuple(items), outcomes=tuple(outcomes))


def collect_receipts(outcomes: Sequence[EndpointOutcome]) -> MutationResult:
    _raise_if_all_failed(outcomes)
    receipts: list[OperationReceipt] = []
    for outcome in outcomes:
        if not outcome.ok:
            receipts.append(
                OperationReceipt(
                    endpoint=outcome.endpoint,
                    ok=False,
                    status_code=outcome.status_code,
                    error=outcome.reason,
                )
            )
            continue
        payload = outcome.payload if isinstance(outcome.payload, LifxResults) else LifxResults()
        receipts.append(
            OperationReceipt(
                endpoint=outcome.endpoint,
                ok=True,
                status_code=outcome.status_code,
                results=tuple(payload.results),
                error=payload.error,
            )
        )
    return MutationResult(receipts=tuple(receipts), outcomes=tuple(outcomes))
