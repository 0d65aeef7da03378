"""CLI entry point for the stargazing advisor."""

import argparse
import logging
from datetime import date, datetime

from stargaze.astro.twilight import calculate_twilight
from stargaze.cache.forecast_cache import ForecastCache
from stargaze.config.loader import get_config_value, load_config, redacted_dump
from stargaze.ingest.errors import AuthorizationError
from stargaze.ingest.location_search import LocationSearch
from stargaze.ingest.weather_client import WeatherApiClient
from stargaze.models.weather import WeatherForecast
from stargaze.pipeline.night_report import NightReportPipeline
from stargaze.reporting.formatters import (
    format_report_json,
    format_report_text,
    format_twilight_text,
)
from stargaze.storage.database import connect, run_migrations
from stargaze.storage.kv_store import SqliteKeyValueStore

DEFAULT_CONFIG = "configs/default.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="stargaze",
        description="Stargazing conditions advisor",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--db", default=None, help="SQLite DB path override")

    sub = parser.add_subparsers(dest="command")

    # report
    report_p = sub.add_parser("report", help="Nightly stargazing report")
    report_p.add_argument("location", help="Place name, postal code or 'lat,lon'")
    report_p.add_argument("--json", action="store_true", help="Emit JSON")

    # twilight
    tw_p = sub.add_parser("twilight", help="Twilight boundaries for a night")
    tw_p.add_argument("--lat", type=float, required=True)
    tw_p.add_argument("--lon", type=float, required=True)
    tw_p.add_argument("--date", type=date.fromisoformat, required=True)
    tw_p.add_argument("--sunset", required=True, help="HH:MM local")
    tw_p.add_argument("--sunrise", required=True, help="HH:MM local")

    # search
    search_p = sub.add_parser("search", help="Search for locations")
    search_p.add_argument("query")

    # cache clear
    cache_p = sub.add_parser("cache", help="Cache operations")
    cache_sub = cache_p.add_subparsers(dest="cache_command")
    cache_sub.add_parser("clear", help="Remove all cached entries")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Show one config value")
    get_p.add_argument("key", help="Dotted key, e.g. cache.forecast_ttl_hours")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    if args.db:
        config = config.model_copy(
            update={"storage": config.storage.model_copy(update={"db_path": args.db})}
        )

    try:
        if args.command == "report":
            return _cmd_report(config, args)
        elif args.command == "twilight":
            return _cmd_twilight(args)
        elif args.command == "search":
            return _cmd_search(config, args)
        elif args.command == "cache":
            return _cmd_cache(config, args)
        elif args.command == "config":
            return _cmd_config(config, args)
        else:
            parser.print_help()
            return 1
    except AuthorizationError as e:
        print(f"Error: {e}. Check the WEATHERAPI_KEY setting.")
        return 2


def _cmd_report(config, args) -> int:
    report = NightReportPipeline(config).run(args.location)
    if report is None:
        print(f"No forecast available for {args.location!r}")
        return 1
    print(format_report_json(report) if args.json else format_report_text(report))
    return 0


def _cmd_twilight(args) -> int:
    try:
        sunset = _parse_clock(args.sunset)
        sunrise = _parse_clock(args.sunrise)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    t = calculate_twilight(args.lat, args.lon, args.date, sunset, sunrise)
    print(format_twilight_text(t))
    return 0


def _cmd_search(config, args) -> int:
    client = WeatherApiClient(
        api_key=config.provider.api_key,
        base_url=config.provider.base_url,
        timeout=config.provider.timeout,
        max_retries=config.provider.max_retries,
        retry_base_delay=config.provider.retry_base_delay,
    )
    results = LocationSearch(client).search(args.query)
    if not results:
        print("No matches")
        return 1
    for r in results:
        print(f"  {r.display_name} ({r.latitude:.4f}, {r.longitude:.4f})")
    return 0


def _cmd_cache(config, args) -> int:
    if args.cache_command != "clear":
        print("Use: cache clear")
        return 1
    conn = connect(config.storage.db_path, config.storage.timeout_seconds)
    try:
        run_migrations(conn)
        cache = ForecastCache(
            SqliteKeyValueStore(conn), WeatherForecast, namespace=config.cache.namespace
        )
        removed = cache.clear()
    finally:
        conn.close()
    print(f"Removed {removed} cached entries")
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(redacted_dump(config))
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(config, args.key)
        except KeyError as e:
            print(f"Error: {e}")
            return 1
        if args.key.endswith("api_key") and value:
            value = "***"
        print(f"{args.key} = {value}")
        return 0
    else:
        print("Use: config show | config get key")
        return 1


def _parse_clock(text: str):
    return datetime.strptime(text.strip(), "%H:%M").time()
