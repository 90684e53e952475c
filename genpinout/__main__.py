"""CLI entry point: python -m genpinout"""

from __future__ import annotations

from genpinout.cli import main

if __name__ == "__main__":
    main()
