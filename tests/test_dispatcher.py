import logging

import httpx
import pytest

from lifx_client import operations as ops
from lifx_client.config import LifxConfig
from lifx_client.dispatcher import EndpointDispatcher
from lifx_client.errors import LifxDecodeError, LifxStatusError, LifxTransportError

from conftest import CLOUD, OFFLINE, Recorder, light_payload, refuse


def _client(recorder: Recorder) -> httpx.Client:
    return httpx.Client(headers={"Authorization": "Bearer tok"}, transport=recorder.transport())


def test_dispatch_attempts_every_endpoint_in_order(config: LifxConfig):
    recorder = Recorder(
        {
            CLOUD: lambda r: httpx.Response(200, json=[light_payload("a", "Cloud")]),
            OFFLINE: lambda r: httpx.Response(200, json=[light_payload("b", "Offline")]),
        }
    )
    with _client(recorder) as client:
        outcomes = EndpointDispatcher(config).dispatch(client, ops.list_lights("all"))

    assert [o.endpoint for o in outcomes] == [CLOUD, OFFLINE]
    assert [str(r.url) for r in recorder.requests] == [f"{CLOUD}/v1/lights/all", f"{OFFLINE}/v1/lights/all"]
    assert all(r.headers["authorization"] == "Bearer tok" for r in recorder.requests)
    assert [o.payload[0].id for o in outcomes] == ["a", "b"]


def test_dispatch_records_transport_failure_and_continues(config: LifxConfig, caplog: pytest.LogCaptureFixture):
    recorder = Recorder(
        {
            CLOUD: refuse,
            OFFLINE: lambda r: httpx.Response(200, json=[light_payload("b", "Offline")]),
        }
    )
    with caplog.at_level(logging.WARNING, logger="lifx_client"), _client(recorder) as client:
        outcomes = EndpointDispatcher(config).dispatch(client, ops.list_lights())

    assert len(outcomes) == 2
    assert outcomes[0].ok is False
    assert isinstance(outcomes[0].error, LifxTransportError)
    assert outcomes[0].status_code is None
    assert outcomes[1].ok is True
    assert any("LifxTransportError" in rec.getMessage() for rec in caplog.records)


def test_dispatch_records_status_error_with_body(config: LifxConfig):
    recorder = Recorder(
        {
            CLOUD: lambda r: httpx.Response(401, json={"error": "Invalid token"}),
            OFFLINE: lambda r: httpx.Response(200, json=[]),
        }
    )
    with _client(recorder) as client:
        outcomes = EndpointDispatcher(config).dispatch(client, ops.list_lights())

    err = outcomes[0].error
    assert isinstance(err, LifxStatusError)
    assert err.status_code == 401
    assert err.body == {"error": "Invalid token"}
    assert outcomes[0].status_code == 401
    assert outcomes[1].ok is True
    assert outcomes[1].payload == []


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"not": "a list"}),
        httpx.Response(200, json=[{"label": "missing id"}]),
    ],
)
def test_dispatch_records_decode_errors(config: LifxConfig, response: httpx.Response):
    recorder = Recorder(
        {
            CLOUD: lambda r: response,
            OFFLINE: lambda r: httpx.Response(200, json=[light_payload("b", "Offline")]),
        }
    )
    with _client(recorder) as client:
        outcomes = EndpointDispatcher(config).dispatch(client, ops.list_lights())

    assert isinstance(outcomes[0].error, LifxDecodeError)
    assert outcomes[0].status_code == 200
    assert outcomes[1].ok is True


def test_dispatch_sends_json_body_and_query_params(config: LifxConfig):
    recorder = Recorder(
        {
            CLOUD: lambda r: httpx.Response(200, json={"hue": 0, "saturation": 1.0}),
            OFFLINE: lambda r: httpx.Response(200, json={"hue": 0, "saturation": 1.0}),
        }
    )
    with _client(recorder) as client:
        outcomes = EndpointDispatcher(config).dispatch(client, ops.validate_color("red"))

    assert all(o.ok for o in outcomes)
    for request in recorder.requests:
        assert request.method == "GET"
        assert request.url.path == "/v1/color"
        assert request.url.params["string"] == "red"
        assert request.content == b""


def test_dispatch_treats_empty_mutation_body_as_no_results(config: LifxConfig):
    recorder = Recorder({CLOUD: lambda r: httpx.Response(202), OFFLINE: lambda r: httpx.Response(202)})
    with _client(recorder) as client:
        outcomes = EndpointDispatcher(config).dispatch(client, ops.toggle("all"))

    assert all(o.ok for o in outcomes)
    assert outcomes[0].payload.results == []


@pytest.mark.asyncio
async def test_adispatch_attempts_every_endpoint_sequentially(config: LifxConfig):
    order: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        order.append(request.url.host)
        if request.url.host == "api.lifx.com":
            raise httpx.ConnectTimeout("timed out", request=request)
        return httpx.Response(200, json=[light_payload("b", "Offline")])

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        outcomes = await EndpointDispatcher(config).adispatch(client, ops.list_lights())

    assert order == ["api.lifx.com", "localhost"]
    assert isinstance(outcomes[0].error, LifxTransportError)
    assert outcomes[1].payload[0].id == "b"


def _corrupt_gzip(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, headers={"content-encoding": "gzip"}, content=b"not gzip")


def _too_many_redirects(request: httpx.Request) -> httpx.Response:
    raise httpx.TooManyRedirects("Exceeded maximum allowed redirects.", request=request)


def test_dispatch_records_undecodable_body_and_continues(config: LifxConfig):
    recorder = Recorder(
        {
            CLOUD: _corrupt_gzip,
            OFFLINE: lambda r: httpx.Response(200, json=[light_payload("o1", "Offline")]),
        }
    )
    with _client(recorder) as client:
        outcomes = EndpointDispatcher(config).dispatch(client, ops.list_lights())

    assert isinstance(outcomes[0].error, LifxDecodeError)
    assert isinstance(outcomes[0].error.__cause__, httpx.DecodingError)
    assert [light.id for light in outcomes[1].payload] == ["o1"]


def test_dispatch_records_other_request_errors_as_transport_failures(config: LifxConfig):
    recorder = Recorder(
        {
            CLOUD: _too_many_redirects,
            OFFLINE: lambda r: httpx.Response(200, json=[light_payload("o1", "Offline")]),
        }
    )
    with _client(recorder) as client:
        outcomes = EndpointDispatcher(config).dispatch(client, ops.list_lights())

    assert isinstance(outcomes[0].error, LifxTransportError)
    assert outcomes[1].ok is True


@pytest.mark.asyncio
async def test_adispatch_records_undecodable_body_and_request_errors(config: LifxConfig):
    recorder = Recorder({CLOUD: _corrupt_gzip, OFFLINE: _too_many_redirects})
    async with httpx.AsyncClient(transport=recorder.transport()) as client:
        outcomes = await EndpointDispatcher(config).adispatch(client, ops.list_lights())

    assert len(recorder.requests) == 2
    assert isinstance(outcomes[0].error, LifxDecodeError)
    assert isinstance(outcomes[1].error, LifxTransportError)


@pytest.mark.asyncio
async def test_async_client_returns_partial_result_for_undecodable_body(config: LifxConfig):
    from lifx_client.client import AsyncLifxClient

    recorder = Recorder(
        {
            CLOUD: _corrupt_gzip,
            OFFLINE: lambda r: httpx.Response(200, json=[light_payload("o1", "Offline")]),
        }
    )
    async with AsyncLifxClient(config, transport=recorder.transport()) as client:
        lights = await client.list_lights()

    assert [light.id for light in lights] == ["o1"]
    assert [o.endpoint for o in lights.failures] == [CLOUD]
