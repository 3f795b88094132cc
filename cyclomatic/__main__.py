"""
Entry point for running the analyzer as a module.

Usage:
    python -m cyclomatic tree src/main.rs
    python -m cyclomatic --help
"""

import sys
from cyclomatic.cli import main

if __name__ == "__main__":
    sys.exit(main())
