#!/usr/bin/env python3
"""
CHCC launcher

Runs the chcc command line from a source checkout without installing it.
"""

import sys
from pathlib import Path

# Add the parent directory to sys.path to import from chcc
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from chcc.cli import main

if __name__ == "__main__":
    main()
