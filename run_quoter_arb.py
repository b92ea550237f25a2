#!/usr/bin/env python3
"""
Quoter arbitrage monitor (read-only, quotes only)
"""
import sys

from quoter_arb.cli import main

if __name__ == "__main__":
    sys.exit(main())
