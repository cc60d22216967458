#!/usr/bin/env python3
"""
htopsettings - Main entry point.

Loads the process monitor settings the same way the monitor does at
startup, shows them, and optionally applies simple edits and saves.
"""

import argparse
import logging
import sys

from htopsettings import __version__
from htopsettings.config import Settings
from htopsettings.utils import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="htopsettings",
        description="Inspect and edit htoprc settings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  htopsettings                          # Show the active settings
  htopsettings --path                   # Print where settings are stored
  htopsettings --toggle tree_view --save
  htopsettings --invert-sort --save
        """
    )
    parser.add_argument('--path', action='store_true', help='Print the configuration path and exit')
    parser.add_argument('--cpus', type=int, default=None, help='CPU count used for the default meter layout')
    parser.add_argument('--toggle', action='append', default=[], metavar='KEY',
                        help='Flip a boolean option (may be repeated)')
    parser.add_argument('--invert-sort', action='store_true', help='Invert the sort direction')
    parser.add_argument('--save', action='store_true', help='Write settings back to disk')
    parser.add_argument('--log-level', default='WARNING', help='Logging level (default: WARNING)')
    parser.add_argument('--log-file', action='store_true', help='Also log to a file')
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    return parser


def main(argv=None) -> int:
    """Main entry point for htopsettings."""
    args = build_parser().parse_args(argv)

    setup_logging(log_level=args.log_level, log_file=args.log_file)
    logger = logging.getLogger(__name__)

    settings = Settings(cpu_count=args.cpus)

    if args.path:
        print(settings.filename)
        return 0

    for key in args.toggle:
        try:
            settings.toggle(key)
        except KeyError:
            logger.error(f"Unknown option: {key}")
            return 2

    if args.invert_sort:
        settings.invert_sort_order()

    sys.stdout.write(settings.codec.serialize(settings))

    if args.save and not settings.save():
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
