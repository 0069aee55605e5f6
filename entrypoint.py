"""Main entry point for the input preflight GitHub Action."""

from __future__ import annotations

import sys

from actions_toolkit.preflight import main


if __name__ == "__main__":
    sys.exit(main())
