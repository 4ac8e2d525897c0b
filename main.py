#!/usr/bin/env python3
"""
Main entry point for the table documentation generator
"""

import sys

from tabledoc.cli.main_cli import main

if __name__ == "__main__":
    sys.exit(main())
