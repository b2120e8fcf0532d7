#!/usr/bin/env python3
# Path: monitor.py
"""
CDR Monitor - Main Entry Point

Run this file to launch the console monitor:
    python monitor.py                 # continuous refresh
    python monitor.py --once          # single refresh, then exit
    python monitor.py --search alice  # filter the record table
"""

import sys
from pathlib import Path

# Allow running from a source checkout without installing
sys.path.insert(0, str(Path(__file__).parent))

from cdr_monitor.cli.monitor_cli import run

if __name__ == '__main__':
    print("Initializing CDR Monitor...")
    sys.exit(run())
