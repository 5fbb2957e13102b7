from __future__ import annotations

import logging
import time
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from lifx_client.config import LifxConfig
from lifx_client.errors import LifxDecodeError, LifxError, LifxStatusError, LifxTransportError
from lifx_client.operations import Operation
from lifx_client.results import EndpointOutcome

logger = logging.getLogger("lifx_client")


def _response_body(resp: httpx.Response, *, strict: bool) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        if strict:
            raise
        return resp.text


class EndpointDispatcher:
    """Sends one operation to every configured endpoint, one after another.

    Every endpoint is attempted even after a success: the cloud API and an
    offline server manage different devices. Failures are recorded in the
    returned outcomes and never raised.
    """

    def __init__(self, config: LifxConfig) -> None:
        self.config = config

    def url_for(self, endpoint: str, operation: Operation[Any]) -> str:
        return f"{endpoint}{operation.path}"

    def dispatch(self, client: httpx.Client, operation: Operation[Any]) -> list[EndpointOutcome]:
        outcomes: list[EndpointOutcome] = []
        for endpoint in self.config.api_endpoints:
            start = time.perf_counter()
            try:
                resp = client.request(
                    operation.method,
                    self.url_for(endpoint, operation),
                    json=operation.json_body,
                    params=operation.params,
                )
            except (httpx.RequestError, httpx.InvalidURL) as exc:
                outcomes.append(self._request_failure(endpoint, operation, exc))
                continue
            outcomes.append(self._record(endpoint, operation, resp, start))
        return outcomes

    async def adispatch(self, client: httpx.AsyncClient, operation: Operation[Any]) -> list[EndpointOutcome]:
        outcomes: list[EndpointOutcome] = []
        for endpoint in self.config.api_endpoints:
            start = time.perf_counter()
            try:
                resp = await client.request(
                    operation.method,
                    self.url_for(endpoint, operation),
                    json=operation.json_body,
                    params=operation.params,
                )
            except (httpx.RequestError, httpx.InvalidURL) as exc:
                outcomes.append(self._request_failure(endpoint, operation, exc))
                continue
            outcomes.append(self._record(endpoint, operation, resp, start))
        return outcomes

    def _record(
        self, endpoint: str, operation: Operation[Any], resp: httpx.Response, start: float
    ) -> EndpointOutcome:
        duration_ms = (time.perf_counter() - start) * 1000
        status_code = resp.status_code

        if not 200 <= status_code < 300:
            return self._failure(
                endpoint,
                operation,
                LifxStatusError(status_code=status_code, body=_response_body(resp, strict=False)),
                status_code=status_code,
            )

        try:
            payload = operation.decode(_response_body(resp, strict=True))
        except (PydanticValidationError, ValueError, TypeError) as exc:
            return self._failure(
                endpoint,
                operation,
                LifxDecodeError(f"unexpected response shape from {endpoint}: {exc}"),
                status_code=status_code,
            )

        logger.debug(
            "%s %s%s -> %s (%.1fms)",
            operation.method,
            endpoint,
            operation.path,
            status_code,
            duration_ms,
        )
        return EndpointOutcome(endpoint=endpoint, status_code=status_code, payload=payload)

    def _request_failure(
        self, endpoint: str, operation: Operation[Any], exc: httpx.RequestError | httpx.InvalidURL
    ) -> EndpointOutcome:
        # Corrupt gzip/deflate bodies surface from httpx as DecodingError.
        err: LifxError
        if isinstance(exc, httpx.DecodingError):
            err = LifxDecodeError(f"undecodable response body from {endpoint}: {exc}")
        else:
            err = LifxTransportError(str(exc) or type(exc).__name__)
        err.__cause__ = exc
        return self._failure(endpoint, operation, err, status_code=None)

    @staticmethod
    def _failure(
        endpoint: str, operation: Operation[Any], err: LifxError, *, status_code: int | None
    ) -> EndpointOutcome:
        logger.warning(
            "%s %s%s failed: %s: %s",
            operation.method,
            endpoint,
            operation.path,
            type(err).__name__,
            err,
        )
        return EndpointOutcome(endpoint=endpoint, status_code=status_code, reason=str(err), error=err)
