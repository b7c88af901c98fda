"""CLI entry point for the weather dashboard."""

import argparse
import json
import logging

from pydantic import BaseModel

from skycast.api import build_pipeline, create_app, serialize_report
from skycast.config.loader import (
    get_config_value,
    load_config,
    masked_dump,
    masked_value,
)
from skycast.errors import PersistenceError, SkycastError
from skycast.storage.history_store import HistoryStore

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "config/skycast.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="skycast",
        description="City weather lookup with search history",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)

    # weather
    weather_p = sub.add_parser("weather", help="Look up weather for a city")
    weather_p.add_argument("city", help="City name")

    # history list / add / remove
    history_p = sub.add_parser("history", help="Search history operations")
    history_sub = history_p.add_subparsers(dest="history_command")
    history_sub.add_parser("list", help="List searched cities")
    add_p = history_sub.add_parser("add", help="Record a city")
    add_p.add_argument("name")
    rm_p = history_sub.add_parser("remove", help="Remove a city by id")
    rm_p.add_argument("id")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Print one config value")
    get_p.add_argument("key", help="Dotted key, e.g. provider.units")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "serve":
            return _cmd_serve(args)
        elif args.command == "weather":
            return _cmd_weather(args)
        elif args.command == "history":
            return _cmd_history(args)
        elif args.command == "config":
            return _cmd_config(args)
    except SkycastError as e:
        print(f"Error: {e.message}")
        return 1

    parser.print_help()
    return 1


def _cmd_serve(args) -> int:
    import uvicorn

    config = load_config(args.config, require_api_key=True)
    app = create_app(config)
    uvicorn.run(
        app,
        host=args.host or config.server.host,
        port=args.port or config.server.port,
    )
    return 0


def _cmd_weather(args) -> int:
    config = load_config(args.config, require_api_key=True)
    pipeline = build_pipeline(config)
    report = pipeline.resolve_city(args.city)
    try:
        HistoryStore(config.history.path).add(args.city)
    except PersistenceError as e:
        logger.error("Weather resolved but history not saved: %s", e.message)
    print(json.dumps(serialize_report(report), indent=2))
    return 0


def _cmd_history(args) -> int:
    config = load_config(args.config)
    store = HistoryStore(config.history.path)

    if args.history_command == "list":
        cities = store.list()
    elif args.history_command == "add":
        cities = store.add(args.name)
    elif args.history_command == "remove":
        cities = store.remove(args.id)
    else:
        print("Use: history list | history add NAME | history remove ID")
        return 1

    if not cities:
        print("No previous search history")
    # Most recent first
    for c in reversed(cities):
        print(f"{c.id}  {c.name}")
    return 0


def _cmd_config(args) -> int:
    if args.config_command == "show":
        print(masked_dump(load_config(args.config)))
        return 0
    elif args.config_command == "get":
        if args.key == "provider.api_key":
            print("Error: provider.api_key is not printable")
            return 1
        try:
            value = get_config_value(load_config(args.config), args.key)
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        if isinstance(value, (BaseModel, dict, list)):
            print(json.dumps(masked_value(value), indent=2))
        else:
            print(value)
        return 0
    print("Use: config show | config get KEY")
    return 1
