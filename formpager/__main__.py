"""
Entry point for running formpager as a module.

Usage:
    python -m formpager export necropsia --output-dir out
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
