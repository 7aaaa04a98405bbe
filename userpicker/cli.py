#!/usr/bin/env python3
"""
userpicker CLI entry point: filter a JSON user list from the shell
"""

from __future__ import annotations
import sys
import argparse
import os
import logging
import logging.handlers
from pathlib import Path

from userpicker import __version__

# Global logger instance
logger = None


def setup_logging(debug: bool = False, log_file: str | None = None) -> logging.Logger:
    """Setup logging to stderr and, if requested, to a rotating file

    Args:
        debug: Enable debug level logging
        log_file: Path to log file (no file logging when None)
    """
    global logger

    if logger is not None:
        return logger

    logger = logging.getLogger('userpicker')
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    fmt = logging.Formatter(
        '[%(asctime)s] %(levelname)-8s %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if log_file is not None:
        log_path = Path(log_file)
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=10*1024*1024,  # 10 MB
                backupCount=5
            )
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_handler.setFormatter(fmt)
            logger.addHandler(file_handler)
        except OSError as e:
            print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)

    # Console handler (only warnings in production, all in debug)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    console_handler.setFormatter(fmt)
    logger.addHandler(console_handler)

    return logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='userpicker',
        description='Filter users by name typed in any keyboard layout or transliteration',
    )
    parser.add_argument('users', help='Path to a JSON array of {id, first_name, last_name}')
    parser.add_argument('filter', nargs='*', help='Filter words (all must match)')
    parser.add_argument('--ids', action='store_true', help='Print matching ids only')
    parser.add_argument('--debug', action='store_true', help='Enable debug mode with verbose logging')
    parser.add_argument('--trace', action='store_true', help='Also log every compiled pattern and cache lookup')
    parser.add_argument('--config', type=str, default=None, help='Path to config file')
    parser.add_argument('--logfile', type=str, default=None, help='Path to log file')
    parser.add_argument('--version', action='version', version='%(prog)s ' + __version__)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for userpicker"""
    args = build_parser().parse_args(argv)

    log = setup_logging(debug=args.debug, log_file=args.logfile)
    log.debug("userpicker %s, PID %d", __version__, os.getpid())

    # Import after args parsing to avoid import-time side effects
    from userpicker.config import load_config
    from userpicker.core.records import UserSourceError, load_users
    from userpicker.core.session import SelectorSession

    if args.config is not None and not os.path.exists(args.config):
        log.error("Config file not found: %s", args.config)
        return 1
    config = load_config(args.config)
    if args.debug:
        config['debug'] = True
    elif config['debug']:
        log.setLevel(logging.DEBUG)
    if args.trace:
        from userpicker.log import enable_trace
        enable_trace()

    try:
        users = load_users(args.users)
    except UserSourceError as e:
        log.error("Failed to load users: %s", e)
        return 1

    session = SelectorSession(config)
    try:
        session.load(users)
        session.filter(' '.join(args.filter))
        for user_id in session.items:
            if args.ids:
                print(user_id)
            else:
                print(f"{user_id}\t{session.users_by_id[user_id].full_name}")
    except BrokenPipeError:
        log.debug("Output pipe closed")
    finally:
        session.close()
    return 0


if __name__ == '__main__':
    sys.exit(main())
