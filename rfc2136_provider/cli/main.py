#!/usr/bin/env python3
"""
RFC2136 Provider - Command Line Interface

Main entry point for the rfc2136-provider CLI.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List

import yaml

from ..core.dns_manager import DNSManager
from ..core.record import Record, UpdateMode
from ..exceptions import RFC2136Error
from ..parsers.csv import CSVParser

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        description="RFC2136 Provider - manage DNS records with dynamic updates"
    )

    parser.add_argument(
        "--config",
        "-c",
        default="configs/config.yaml",
        help="Configuration file path (default: configs/config.yaml)",
    )

    parser.add_argument(
        "--nameserver",
        "-n",
        help="Nameserver address, overrides the configured RFC2136 nameserver",
    )

    parser.add_argument(
        "--timeout",
        "-t",
        type=float,
        help="Deadline in seconds for the whole operation",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List the records of a zone")
    list_parser.add_argument("zone", help="DNS zone to query")

    for mode in UpdateMode:
        sub = subparsers.add_parser(mode.value, help=f"{mode.value.capitalize()} records")
        sub.add_argument("zone", help="DNS zone to update")
        sub.add_argument("--csv", "-f", help="CSV file with Name,Type,Value,TTL columns")
        sub.add_argument("--name", help="Record name")
        sub.add_argument("--type", dest="record_type", help="Record type")
        sub.add_argument("--value", help="Record value")
        sub.add_argument("--ttl", type=int, default=300, help="Record TTL (default: 300)")
        sub.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be changed without making changes",
        )
        sub.add_argument(
            "--output-file",
            "-o",
            help="File to save dry run output (only used with --dry-run)",
        )

    return parser


def main(argv: List[str] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if getattr(args, "output_file", None) and not args.dry_run:
        print("Error: --output-file can only be used with --dry-run")
        sys.exit(1)

    config = load_config(args.config)
    if args.nameserver:
        providers = config.setdefault("dns_providers", {})
        providers.setdefault("rfc2136", {})["nameserver"] = args.nameserver
        config["default_provider"] = "rfc2136"
    config_logger(config, args.verbose)

    try:
        dns_manager = DNSManager(config)

        if args.command == "list":
            success = dns_manager.list_records(args.zone, timeout=args.timeout)
        else:
            records = _records_from_args(args)
            success = dns_manager.apply_records(
                UpdateMode(args.command),
                args.zone,
                records,
                dry_run=args.dry_run,
                timeout=args.timeout,
                output_file=args.output_file,
            )

    except (RFC2136Error, ValueError, FileNotFoundError) as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    if success:
        print("DNS record management completed successfully")
        sys.exit(0)
    else:
        print("DNS record management failed")
        sys.exit(1)


def _records_from_args(args) -> List[Record]:
    """Collect records from the CSV file or the single-record options."""
    if args.csv:
        if not Path(args.csv).exists():
            raise FileNotFoundError(f"CSV file '{args.csv}' not found")
        return CSVParser(args.csv, default_ttl=args.ttl).parse()

    if not (args.name and args.record_type and args.value):
        raise ValueError("either --csv or all of --name, --type and --value are required")
    return [
        Record(
            name=args.name,
            type=args.record_type.upper(),
            value=args.value,
            ttl=args.ttl,
        )
    ]


def load_config(config_path: str) -> Dict:
    """Load configuration from YAML file."""
    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}
        logger.info(f"Configuration loaded from {config_path}")
        return config
    except FileNotFoundError:
        logger.warning(f"Config file {config_path} not found, using defaults")
        return get_default_config()
    except yaml.YAMLError as e:
        print(f"Error parsing config file: {e}")
        sys.exit(1)


def get_default_config() -> Dict:
    """Return default configuration."""
    return {
        "dns_providers": {"mock": {}},
        "default_provider": "mock",
        "logging": {"level": "INFO"},
    }


def config_logger(config: Dict, verbose: bool = False):
    """Configure logging."""
    logging_config = config.get("logging") or {}
    log_level = "DEBUG" if verbose else logging_config.get("level", "INFO")

    handlers = [logging.StreamHandler(sys.stderr)]
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
