"""Module entry point so ``python -m snapdiff`` runs the CLI."""

import sys

from snapdiff.ui.cli import main

if __name__ == "__main__":
    sys.exit(main())
