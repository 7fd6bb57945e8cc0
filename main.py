#!/usr/bin/env python3
"""Thin wrapper: run gitodb CLI. Usage: python main.py <cmd> ... (same as the gitodb script)."""

import sys

if __name__ == "__main__":
    from gitodb.cli import main
    sys.exit(main())
