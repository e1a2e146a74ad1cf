#!/usr/bin/env python3
"""Entry point for the startup scouting commands."""
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from scouting.cli import main

if __name__ == "__main__":
    main()
