"""
Command line entry point.

    balance-monitor [--config PATH] [--log-level LEVEL] serve
    balance-monitor [--config PATH] once
    balance-monitor [--config PATH] check-config
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from balance_monitor import __version__
from balance_monitor.config.state import MonitorConfig, load_config
from balance_monitor.exceptions import StartupError
from balance_monitor.infrastructure.observability import (
    get_infrastructure_logger,
    setup_logging,
)
from balance_monitor.service import BalanceMonitorService

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="balance-monitor",
        description="Sample tracked address balances and fee estimates into InfluxDB",
    )
    parser.add_argument(
        "--config",
        help="Config file (YAML or JSON). Defaults to $BALANCE_MONITOR_CONFIG "
        "or config/balance_monitor.yaml",
        default=None,
    )
    parser.add_argument(
        "--log-level",
        help="Override the configured log level",
        default=None,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("serve", help="Run the monitor and the health endpoint")
    commands.add_parser("once", help="Run a single sampling round and exit")
    commands.add_parser("check-config", help="Validate the configuration and exit")
    return parser


def _configure_logging(config: MonitorConfig | None, override: str | None) -> None:
    level = override or (config.logging.level if config else "INFO")
    json_logs = config.logging.json_logs if config else True
    setup_logging(level=level, json_logs=json_logs)


def _check_config(config: MonitorConfig) -> int:
    print(f"Configuration OK: {len(config.tracked_balances)} tracked addresses")
    print(f"  fees:      {config.fees_address}")
    print(f"  balances:  {config.balance_address}")
    print(f"  influx:    {config.influx_config.address}")
    print(f"  interval:  {config.polling_interval.total_seconds()}s ({config.overlap_policy.value})")
    print(f"  port:      {config.port}")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except StartupError as e:
        _configure_logging(None, args.log_level)
        get_infrastructure_logger("cli", command=args.command).error(
            "startup_failed", error=str(e)
        )
        return EXIT_FAILURE

    _configure_logging(config, args.log_level)
    log = get_infrastructure_logger("cli", command=args.command)

    if args.command == "check-config":
        return _check_config(config)

    try:
        service = BalanceMonitorService(config)
        if args.command == "once":
            result = asyncio.run(service.run_once())
            return EXIT_OK if result.succeeded else EXIT_FAILURE
        asyncio.run(service.serve())
    except StartupError as e:
        log.error("startup_failed", error=str(e))
        return EXIT_FAILURE
    except KeyboardInterrupt:
        log.info("interrupted")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
