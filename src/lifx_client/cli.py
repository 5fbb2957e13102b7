from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from lifx_client.client import LifxClient
from lifx_client.config import LifxConfig
from lifx_client.errors import AllEndpointsFailed, LifxValidationError
from lifx_client.models import State
from lifx_client.results import EndpointOutcome, MutationResult, ResultSet


def _failures_json(failures: list[EndpointOutcome]) -> list[dict[str, Any]]:
    return [{"endpoint": o.endpoint, "status": o.status_code, "reason": o.reason} for o in failures]


def _result_json(result: ResultSet[Any] | MutationResult) -> dict[str, Any]:
    if isinstance(result, MutationResult):
        return {
            "status": result.status,
            "receipts": [
                {
                    "endpoint": r.endpoint,
                    "ok": r.ok,
                    "status": r.status_code,
                    "results": [line.model_dump(mode="json") for line in r.results],
                    "error": r.error,
                }
                for r in result.receipts
            ],
        }
    return {
        "status": result.status,
        "items": [item.model_dump(mode="json", exclude_none=True) for item in result],
        "failures": _failures_json(result.failures),
    }


def _build_config(args: argparse.Namespace) -> LifxConfig:
    env = LifxConfig.from_env()
    return LifxConfig(
        access_token=args.token or env.access_token,
        api_endpoints=tuple(args.endpoint or env.api_endpoints),
        timeout_seconds=args.timeout_seconds if args.timeout_seconds is not None else env.timeout_seconds,
        connect_timeout_seconds=env.connect_timeout_seconds,
        verify_tls=env.verify_tls,
    )


def _run_command(client: LifxClient, args: argparse.Namespace) -> ResultSet[Any] | MutationResult:
    if args.command == "lights":
        return client.list_lights(args.selector)
    if args.command == "power":
        state = State(
            power=args.state,
            brightness=args.brightness,
            color=args.color,
            duration=args.duration,
        )
        return client.set_state(args.selector, state)
    if args.command == "toggle":
        return client.toggle(args.selector)
    if args.command == "effects-off":
        return client.effects_off(args.selector)
    if args.command == "scenes":
        return client.list_scenes()
    if args.command == "color":
        return client.validate_color(args.color)
    raise LifxValidationError(f"unknown command: {args.command}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lifx-ctl")
    parser.add_argument("--token", help="LIFX access token (default: $LIFX_ACCESS_TOKEN).")
    parser.add_argument(
        "--endpoint",
        action="append",
        help="API base URL; repeat for fallbacks (default: $LIFX_API_ENDPOINTS or the official API).",
    )
    parser.add_argument("--timeout-seconds", type=float, default=None)
    parser.add_argument("--verbose", action="store_true", help="Log every endpoint attempt to stderr.")

    sub = parser.add_subparsers(dest="command", required=True)

    lights = sub.add_parser("lights", help="List lights.")
    lights.add_argument("selector", nargs="?", default="all")

    power = sub.add_parser("power", help="Set power (and optionally brightness/color).")
    power.add_argument("state", choices=["on", "off"])
    power.add_argument("--selector", default="all")
    power.add_argument("--brightness", type=float, default=None)
    power.add_argument("--color", default=None)
    power.add_argument("--duration", type=float, default=None)

    toggle = sub.add_parser("toggle", help="Toggle power.")
    toggle.add_argument("--selector", default="all")

    effects_off = sub.add_parser("effects-off", help="Stop running effects.")
    effects_off.add_argument("--selector", default="all")

    sub.add_parser("scenes", help="List scenes.")

    color = sub.add_parser("color", help="Ask the API how it interprets a color string.")
    color.add_argument("color")

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = _build_config(args)
        if not config.access_token:
            print("Missing access token. Provide --token or set LIFX_ACCESS_TOKEN.", file=sys.stderr)
            raise SystemExit(2)
        with LifxClient(config) as client:
            result = _run_command(client, args)
    except (LifxValidationError, ValueError) as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        raise SystemExit(2)
    except AllEndpointsFailed as exc:
        print(json.dumps({"status": "failed", "failures": _failures_json(list(exc.outcomes))}, indent=2))
        print(str(exc), file=sys.stderr)
        raise SystemExit(1)

    print(json.dumps(_result_json(result), indent=2))
    raise SystemExit(0)


if __name__ == "__main__":
    main()
