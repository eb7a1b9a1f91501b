#!/usr/bin/env python3
"""
Convenience entry point for running greenexchange directly.

Usage: python exchange.py [command] [options]
"""

from greenexchange.cli.app import app

if __name__ == "__main__":
    app()
