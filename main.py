#!/usr/bin/env python3
"""
GWtoAPRS - Entry Point

Receives Ecowitt weather station uploads and forwards them to APRS-IS.
"""

import argparse
import os
import sys
from datetime import datetime

MAX_LOG_SIZE = 10 * 1024 * 1024  # 10MB


def open_log_file(path):
    """Open the console log in append mode, rotating it if too large."""
    log_path = os.path.expanduser(path)
    if os.path.exists(log_path) and os.path.getsize(log_path) > MAX_LOG_SIZE:
        timestamp = datetime.now().strftime('%Y%m%d-%H%M%S')
        backup_path = f"{log_path}.{timestamp}"
        os.rename(log_path, backup_path)
        print(f"Rotated log: {backup_path}", file=sys.stderr)

    print(f"Logging to: {log_path}", file=sys.stderr)
    return open(log_path, 'a', buffering=1)


def build_parser():
    parser = argparse.ArgumentParser(description="Ecowitt to APRS-IS weather gateway")
    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        help="Config file (default: $CONFIG or default.cfg)",
    )
    parser.add_argument(
        "--host",
        help="Listen address (overrides LISTEN_HOST)",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        help="Listen port (overrides LISTEN_PORT)",
    )
    parser.add_argument(
        "-d",
        "--debug",
        nargs="?",
        type=int,
        const=2,
        default=0,
        metavar="LEVEL",
        help="Enable debug output (optional level 0-6, default: 2)",
    )
    parser.add_argument(
        "-l",
        "--log",
        nargs="?",
        const="~/.gwaprs.log",
        metavar="FILE",
        help="Log all console output to file (default: ~/.gwaprs.log)",
    )
    return parser


def main(argv=None):
    from gwaprs import constants
    from gwaprs.config import ConfigError, load_config
    from gwaprs.utils import print_error, set_console_log_file
    from gwaprs.web_server import run

    args = build_parser().parse_args(argv)
    constants.DEBUG_LEVEL = args.debug

    log_file = None
    if args.log:
        log_file = open_log_file(args.log)
        set_console_log_file(log_file)

    try:
        try:
            config = load_config(args.config)
        except ConfigError as e:
            print_error(str(e))
            return 1

        run(config, host=args.host, port=args.port)
        return 0
    finally:
        if log_file:
            set_console_log_file(None)
            log_file.close()


if __name__ == "__main__":
    sys.exit(main())
