#!/usr/bin/env python3
"""
htopsettings - Main entry point.
"""

import sys

from htopsettings.main import main


if __name__ == "__main__":
    sys.exit(main())
