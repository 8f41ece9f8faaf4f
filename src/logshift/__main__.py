"""
Entry point for module execution (``python -m logshift``).

This module delegates execution to the CLI handler in ``logshift.cli.__main__``.
"""

import sys

from logshift.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
