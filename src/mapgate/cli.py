from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table

from mapgate.client import MapsClient, get_client
from mapgate.core.models import Result, StatusFailure, Success, TransportFailure
from mapgate.errors import InvalidDescriptor

EXIT_OK = 0
EXIT_STATUS_FAILURE = 1
EXIT_INVALID_INPUT = 3
# argparse exits 2 on usage errors
EXIT_TRANSPORT_FAILURE = 4


def _parse_pairs(items: Optional[List[str]], what: str) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for item in items or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise InvalidDescriptor(f"{what} must look like key=value: {item!r}", item)
        out[key] = value
    return out


def _parse_latlng(text: str):
    lat, _, lon = text.partition(",")
    try:
        return (float(lat), float(lon))
    except ValueError:
        raise InvalidDescriptor(f"--latlng must look like LAT,LON: {text!r}", text) from None


# ── Rendering ────────────────────────────────────────────────────────────

def _routes_table(body: Dict[str, Any]) -> Table:
    table = Table(title="Routes")
    table.add_column("Summary")
    table.add_column("Distance")
    table.add_column("Duration")
    for route in body.get("routes", []):
        legs = route.get("legs") or [{}]
        table.add_row(
            str(route.get("summary", "")),
            str((legs[0].get("distance") or {}).get("text", "")),
            str((legs[0].get("duration") or {}).get("text", "")),
        )
    return table


def _matrix_table(body: Dict[str, Any]) -> Table:
    table = Table(title="Distance matrix")
    table.add_column("Origin")
    table.add_column("Destination")
    table.add_column("Distance")
    table.add_column("Duration")
    origins = body.get("origin_addresses", [])
    destinations = body.get("destination_addresses", [])
    for i, row in enumerate(body.get("rows", [])):
        for j, el in enumerate(row.get("elements", [])):
            table.add_row(
                origins[i] if i < len(origins) else "",
                destinations[j] if j < len(destinations) else "",
                str((el.get("distance") or {}).get("text", el.get("status", ""))),
                str((el.get("duration") or {}).get("text", "")),
            )
    return table


def _geocode_table(body: Dict[str, Any]) -> Table:
    table = Table(title="Geocode results")
    table.add_column("Address")
    table.add_column("Lat")
    table.add_column("Lng")
    table.add_column("Place id")
    for r in body.get("results", []):
        loc = (r.get("geometry") or {}).get("location") or {}
        table.add_row(
            str(r.get("formatted_address", "")),
            str(loc.get("lat", "")),
            str(loc.get("lng", "")),
            str(r.get("place_id", "")),
        )
    return table


def _predictions_table(body: Dict[str, Any]) -> Table:
    table = Table(title="Predictions")
    table.add_column("Description")
    table.add_column("Place id")
    for p in body.get("predictions", []):
        table.add_row(str(p.get("description", "")), str(p.get("place_id", "")))
    return table


def _render(console: Console, result: Result, as_json: bool) -> int:
    if isinstance(result, Success):
        body = result.payload
        if as_json:
            console.print_json(json.dumps(body))
        elif "routes" in body:
            console.print(_routes_table(body))
        elif "rows" in body:
            console.print(_matrix_table(body))
        elif "results" in body:
            console.print(_geocode_table(body))
        elif "predictions" in body:
            console.print(_predictions_table(body))
        else:
            console.print_json(json.dumps(body))
        return EXIT_OK

    if isinstance(result, StatusFailure):
        msg = f" ({result.message})" if result.message else ""
        console.print(f"[yellow]status {result.code}[/yellow]{msg}")
        return EXIT_STATUS_FAILURE

    if isinstance(result, TransportFailure):
        console.print(f"[red]transport failure:[/red] {type(result.cause).__name__}: {result.cause}")
        return EXIT_TRANSPORT_FAILURE

    raise TypeError(f"unexpected result: {result!r}")


# ── Commands ─────────────────────────────────────────────────────────────

def _run(client: MapsClient, args: argparse.Namespace) -> Result:
    options: Dict[str, Any] = _parse_pairs(args.option, "--option")

    if args.command == "directions":
        if args.waypoint:
            options["waypoints"] = args.waypoint
        return client.directions(args.origin, args.destination, **options)

    if args.command == "distance":
        return client.distance(args.origins, args.to, **options)

    if args.command == "geocode":
        components = _parse_pairs(args.component, "--component")
        if components and (args.latlng or args.place_id):
            raise InvalidDescriptor("--component only applies to forward geocoding")
        if args.latlng:
            return client.geocode(_parse_latlng(args.latlng), **options)
        if args.place_id:
            return client.geocode(("place_id", args.place_id), **options)
        if args.address:
            if components:
                options["components"] = components
            return client.geocode(args.address, **options)
        if components:
            return client.geocode(components, **options)
        raise InvalidDescriptor("geocode needs an address, --latlng, --place-id or --component")

    if args.command == "autocomplete":
        return client.place_autocomplete(args.input, **options)

    if args.command == "query":
        return client.place_query(args.input, **options)

    if args.command == "get":
        return client.get(args.endpoint, options)

    raise ValueError(f"Unknown command: '{args.command}'")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="mapgate", description="Query the Google Maps web services")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-o", "--option", action="append", metavar="KEY=VALUE",
        help="Extra query parameter, e.g. -o mode=transit (repeatable)",
    )
    common.add_argument("--json", action="store_true", help="Print the raw response body")
    common.add_argument("--debug", action="store_true")

    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("directions", parents=[common], help="Route between two places")
    p.add_argument("origin")
    p.add_argument("destination")
    p.add_argument("--waypoint", action="append", help="Waypoint, in order (repeatable)")

    p = sub.add_parser("distance", parents=[common], help="Distance matrix")
    p.add_argument("origins", nargs="+")
    p.add_argument("--to", nargs="+", required=True, metavar="DESTINATION")

    p = sub.add_parser("geocode", parents=[common], help="Forward or reverse geocoding")
    p.add_argument("address", nargs="?")
    p.add_argument("--latlng", help="Reverse geocode LAT,LON")
    p.add_argument("--place-id", help="Reverse geocode a place id")
    p.add_argument("--component", action="append", metavar="KEY=VALUE", help="Component filter (repeatable)")

    p = sub.add_parser("autocomplete", parents=[common], help="Place autocomplete")
    p.add_argument("input")

    p = sub.add_parser("query", parents=[common], help="Place query autocomplete")
    p.add_argument("input")

    p = sub.add_parser("get", parents=[common], help="Raw request to any endpoint")
    p.add_argument("endpoint")

    return ap


def main(argv: Optional[List[str]] = None, client: Optional[MapsClient] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    console = Console()
    try:
        result = _run(client or get_client(), args)
    except InvalidDescriptor as e:
        console.print(f"[red]invalid input:[/red] {e}")
        return EXIT_INVALID_INPUT

    return _render(console, result, args.json)


if __name__ == "__main__":
    sys.exit(main())
