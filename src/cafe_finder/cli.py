"""Command line interface for finding cafés."""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .enricher import Enricher
from .errors import CafeFinderError, GeolocationError, InvalidInputError, NotFoundError, ServiceError
from .favorites import FavoritesStore
from .fetcher import OverpassCafeFetcher
from .geolocation import FixedPositionProvider
from .models import Cafe, GeoPoint
from .pipeline import CafeFinder, SearchOutcome, write_to_csv, write_to_json
from .settings import RADIUS_CHOICES, FinderSettings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_INVALID_INPUT = 2
EXIT_SERVICE_ERROR = 3


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Find cafés near a place or a coordinate")
    parser.add_argument("query", nargs="?", default=None, help="Place name or address to search around")
    parser.add_argument("--near", type=str, default=None, help='Search around coordinates, e.g. "48.8566, 2.3522"')
    parser.add_argument(
        "--radius",
        type=int,
        default=None,
        help=f"Search radius in meters (common choices: {', '.join(map(str, RADIUS_CHOICES))})",
    )
    parser.add_argument("--open-now", action="store_true", help="Only cafés known to be open")
    parser.add_argument("--wifi", action="store_true", help="Only cafés with WiFi")
    parser.add_argument("--outdoor", action="store_true", help="Only cafés with outdoor seating")
    parser.add_argument("--takeaway", action="store_true", help="Only cafés offering takeaway")
    parser.add_argument("--name", type=str, default=None, help="Search the found cafés by name, specialty or tag")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the generated café details")
    parser.add_argument("--output", type=Path, default=None, help="Write results to a .csv or .json file")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--favorites", action="store_true", help="List saved favorites and exit")
    parser.add_argument("--add-favorite", type=int, action="append", default=[], metavar="ID", help="Save a found café as favorite")
    parser.add_argument("--config", type=Path, help="Optional JSON file overriding settings")
    parser.add_argument("--email", type=str, default=None, help="Contact email passed to the geocoding provider")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    return parser.parse_args(argv)


def load_config(path: Path | None) -> Dict[str, Any]:
    if not path:
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def build_settings(args: argparse.Namespace, config: Dict[str, Any]) -> FinderSettings:
    config = dict(config)
    geocode_config = dict(config.get("geocode", {}))
    filter_config = dict(config.get("filters", {}))

    if args.email is not None:
        geocode_config["email"] = args.email
    if args.radius is not None:
        filter_config["radius"] = args.radius
    for name in ("open_now", "wifi", "outdoor", "takeaway"):
        if getattr(args, name):
            filter_config[name] = True

    config["geocode"] = geocode_config
    config["filters"] = filter_config
    return FinderSettings.from_mapping(config)


def format_cafe(cafe: Cafe, favorite: bool = False) -> str:
    marker = "*" if favorite else " "
    rating = "-" if cafe.rating is None else f"{cafe.rating:.1f}"
    parts = [f"{marker} {cafe.distance:>6}m", cafe.name, f"{rating}★", cafe.price_range or ""]
    if cafe.address:
        parts.append(cafe.address)
    parts.append(f"[{cafe.id}]")
    return "  ".join(part for part in parts if part)


def print_outcome(outcome: SearchOutcome, favorites: FavoritesStore, as_json: bool) -> None:
    if as_json:
        payload = {
            "location": None if outcome.location is None else {
                "lat": outcome.location.lat,
                "lng": outcome.location.lng,
                "display_name": outcome.location.display_name,
            },
            "cafes": [cafe.as_dict() for cafe in outcome.cafes],
            "message": outcome.message,
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return
    if outcome.location is not None:
        print(f"Cafés near {outcome.location.display_name}:")
    if outcome.message:
        print(outcome.message)
    for cafe in outcome.cafes:
        print(format_cafe(cafe, favorites.is_favorite(cafe.id)))


def run(args: argparse.Namespace, settings: FinderSettings) -> int:
    favorites = FavoritesStore(settings.favorites_path)
    favorites.load()

    if args.favorites:
        outcome = SearchOutcome(cafes=favorites.favorites)
        if not favorites.count:
            outcome.message = "No favorites saved yet."
        print_outcome(outcome, favorites, args.json)
        return EXIT_OK

    rng = random.Random(args.seed) if args.seed is not None else None
    fetcher = OverpassCafeFetcher(settings.overpass, enricher=Enricher(rng))
    finder = CafeFinder(settings, fetcher=fetcher)

    if args.near:
        provider = FixedPositionProvider(GeoPoint.parse(args.near))
        outcome = finder.search_near_me(provider)
    elif args.query:
        outcome = finder.search_location(args.query)
    else:
        raise InvalidInputError("Give a place to search or --near coordinates")

    if args.name:
        outcome = finder.search_by_name(args.name)

    found: List[Cafe] = finder.all_cafes
    for cafe_id in args.add_favorite:
        match: Optional[Cafe] = next((cafe for cafe in found if cafe.id == cafe_id), None)
        if match is None:
            logger.warning("Café %s is not among the results; not saved", cafe_id)
            continue
        favorites.add(match)

    print_outcome(outcome, favorites, args.json)

    if args.output:
        if args.output.suffix.lower() == ".json":
            write_to_json(outcome.cafes, args.output)
        else:
            write_to_csv(outcome.cafes, args.output)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)

    try:
        settings = build_settings(args, load_config(args.config))
        return run(args, settings)
    except NotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_NOT_FOUND
    except InvalidInputError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_INVALID_INPUT
    except (ServiceError, GeolocationError, CafeFinderError) as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_SERVICE_ERROR


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
