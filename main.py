#!/usr/bin/env python3
"""
Entry point for the filter design and analysis engine.

Usage:
    python main.py response --domain digital_fir --taps 31 --cutoff 1000
    python main.py --help

For the available commands, see filterlab/pipeline/cli.py
"""
import sys
from filterlab.pipeline.cli import main

if __name__ == '__main__':
    sys.exit(main())
