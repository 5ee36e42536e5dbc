"""Entry point for running dotpress as a module."""

import sys

from dotpress.cli.render import main

if __name__ == "__main__":
    sys.exit(main())
