"""Main entry point for the log reporter."""

import sys

from log_reporter.cli import main


if __name__ == "__main__":
    sys.exit(main())
