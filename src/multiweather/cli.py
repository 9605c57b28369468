# connects input (flags, cities) to the aggregator and either prints temperatures or serves http

from __future__ import annotations
import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple
import uvicorn
from .app import create_app
from .config import ConfigError, build_aggregator, load_settings

DEFAULT_CONFIG = "config.json"

def parse_addr(addr: str) -> Tuple[str, int]:
    # ":8080" and "127.0.0.1:8080" style addresses, an empty host means all interfaces
    host, sep, port = addr.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"invalid address {addr!r}, expected host:port")
    return host or "0.0.0.0", int(port)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="multiweather",
        description="Average the current temperature reported by several weather services.",
    )
    parser.add_argument("cities", nargs="*", help="print temperatures for these cities instead of serving http")
    parser.add_argument("--http-addr", default=":8080", help="http server address (default: %(default)s)")
    parser.add_argument(
        "--config",
        default=None,
        help=f"path to the JSON file with API keys (default: {DEFAULT_CONFIG} when present)",
    )
    parser.add_argument("--deadline", type=float, default=None, help="seconds to wait for providers")
    parser.add_argument("-v", "--verbose", action="store_true", help="log provider readings")
    return parser

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config_path = args.config
    if config_path is None and Path(DEFAULT_CONFIG).exists():
        config_path = DEFAULT_CONFIG

    try:
        settings = load_settings(config_path)
        if args.deadline is not None:
            if args.deadline <= 0:
                raise ConfigError(f"--deadline must be positive (got {args.deadline})")
            settings = dataclasses.replace(settings, deadline=args.deadline)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    aggregator = build_aggregator(settings)

    if args.cities:
        for city in args.cities:
            try:
                temp = aggregator.temperature(city)
            except Exception as exc:
                # provider exceptions arrive unwrapped, whatever their type
                print(f"error: {city}: {exc}", file=sys.stderr)
                return 1
            # two decimals, one line per city
            print(f"{city} Temperature: {temp:.2f}")
        return 0

    try:
        host, port = parse_addr(args.http_addr)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    uvicorn.run(create_app(aggregator), host=host, port=port)
    return 0

if __name__ == "__main__":
    sys.exit(main())
