#!/usr/bin/env python3
"""
userpicker main entry point for running as a module: python3 -m userpicker
"""

import sys
from userpicker.cli import main

if __name__ == '__main__':
    sys.exit(main())
