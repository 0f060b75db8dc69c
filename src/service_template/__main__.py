"""Entry point for running service-template as a module."""

import sys

from service_template.cli import main

if __name__ == "__main__":
    sys.exit(main())
