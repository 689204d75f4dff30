#!/usr/bin/env python3
"""
Constellix Client - Command Line Interface

Main entry point for the Constellix client CLI.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Optional

import requests
import yaml
from rich.console import Console
from rich.table import Table

from ..core.client import ConstellixClient
from ..core.errors import APIError, ConfigurationError, ConstellixError
from ..parsers.payload import PayloadParser
from ..transport.mock_adapter import MockAdapter

console = Console()
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Constellix Client - Signed requests to the Constellix DNS and Sonar APIs"
    )

    parser.add_argument(
        "--config",
        "-c",
        default="configs/config.yaml",
        help="Configuration file path (default: configs/config.yaml)",
    )

    parser.add_argument(
        "--mock",
        action="store_true",
        help="Answer requests from an in-memory mock instead of the live API",
    )

    parser.add_argument(
        "--show-rate-limit",
        action="store_true",
        help="Print the rate-limit state after the request",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    get_parser = subparsers.add_parser("get", help="Fetch an object or collection")
    get_parser.add_argument("endpoint", help="API path or full Sonar API URL")

    for name, help_text in (("create", "Create an object"), ("update", "Replace an object")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("endpoint", help="API path or full Sonar API URL")
        sub.add_argument(
            "--payload", "-p", required=True, help="JSON or YAML file with the request body"
        )

    delete_parser = subparsers.add_parser("delete", help="Delete an object")
    delete_parser.add_argument("endpoint", help="API path or full Sonar API URL")

    return parser


def main(argv: Optional[list] = None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    config_logger(config, args.verbose)

    try:
        transport = MockAdapter(mock_settings(config)) if args.mock else None
        if args.mock:
            # The mock needs no real credentials
            credentials = config.get("constellix") or {}
            credentials["api_key"] = credentials.get("api_key") or "mock-api-key"
            credentials["secret_key"] = credentials.get("secret_key") or "mock-secret-key"
            config["constellix"] = credentials

        client = ConstellixClient.from_config(config, transport=transport)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)

    try:
        run_command(client, args)
    except APIError as e:
        console.print(f"[red]API error (HTTP {e.status_code}) from {e.host}: {e}[/red]")
        sys.exit(1)
    except (ConstellixError, ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        if args.verbose:
            console.print_exception()
        sys.exit(1)
    finally:
        if args.show_rate_limit:
            display_rate_limit(client)
        client.close()

    sys.exit(0)


def run_command(client: ConstellixClient, args: argparse.Namespace):
    """Run the selected sub-command against the client."""
    if args.command == "get":
        display_response(client.fetch(args.endpoint))
    elif args.command == "create":
        payload = PayloadParser(args.payload).parse()
        display_response(client.create(payload, args.endpoint))
    elif args.command == "update":
        payload = PayloadParser(args.payload).parse()
        display_response(client.update(payload, args.endpoint))
    elif args.command == "delete":
        client.delete(args.endpoint)
        console.print(f"[green]Deleted {args.endpoint}[/green]")


def display_response(response: requests.Response):
    """Print a response body, pretty-printing JSON."""
    try:
        console.print_json(json.dumps(response.json()))
    except ValueError:
        console.print(response.text)


def display_rate_limit(client: ConstellixClient):
    """Display the client's rate-limit state."""
    status = client.rate_limit_status()

    table = Table(title="Rate Limit")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row("Requests remaining", str(status["remaining"]))
    table.add_row("Refresh interval (s)", str(status["refresh_interval"]))
    table.add_row("Requests sent", str(status["total_requests"]))

    console.print(table)


def load_config(config_path: str) -> Dict:
    """Load configuration from YAML file."""
    if not Path(config_path).exists():
        logger.warning(f"Config file {config_path} not found, using defaults")
        return get_default_config()

    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}
        logger.info(f"Configuration loaded from {config_path}")
        return config
    except yaml.YAMLError as e:
        console.print(f"[red]Error parsing config file: {e}[/red]")
        sys.exit(1)


def get_default_config() -> Dict:
    """Return default configuration."""
    return {
        "constellix": {"api_key": "", "secret_key": "", "insecure": False},
        "rate_limit": {},
        "mock": {"limit": 100, "refresh_interval": 1},
        "logging": {"level": "INFO"},
    }


def mock_settings(config: Dict) -> Dict:
    """Mock transport settings, sharing the configured header names."""
    settings = dict(config.get("mock", {}) or {})
    rate_limit = config.get("rate_limit", {}) or {}
    for key in ("remaining_header", "refresh_interval_header"):
        if key in rate_limit:
            settings.setdefault(key, rate_limit[key])
    return settings


def config_logger(config: Dict, verbose: bool = False):
    """Configure logging."""
    logging_config = config.get("logging", None) or {}
    log_level = "DEBUG" if verbose else logging_config.get("level", "INFO")

    handlers = [logging.StreamHandler(sys.stdout)]
    log_file = logging_config.get("file")
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


if __name__ == "__main__":
    main()
