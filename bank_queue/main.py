#!/usr/bin/env python3
"""Main entry point for the bank queue simulation package."""

import sys
from bank_queue.scripts.run_simulation import main

if __name__ == '__main__':
    sys.exit(main())
