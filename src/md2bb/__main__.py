#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Entry point for ``python -m md2bb``."""

import sys

from md2bb.cli import main

if __name__ == "__main__":
    sys.exit(main())
