#!/usr/bin/env python3
"""
Entry point for running the chronokv harness as a module.

Usage:
    python -m chronokv
"""

import sys

from chronokv.cli import main

if __name__ == "__main__":
    sys.exit(main())
