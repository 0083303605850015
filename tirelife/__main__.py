"""
Entry point for running tirelife as a module.

Usage:
    python -m tirelife analyze --input roster.json
    python -m tirelife make-example
    python -m tirelife serve --port 8000
"""

import sys

from tirelife.cli.main import cli

if __name__ == "__main__":
    sys.exit(cli())
