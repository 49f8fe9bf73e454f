"""Probe entrypoint.

Parses CLI flags, configures logging, runs one health check and exits
with the classified status code.
"""

import sys

from huntress_probe.core.cli import main

if __name__ == "__main__":
    sys.exit(main())
