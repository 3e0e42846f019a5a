"""Entry point for running the launcher as a module.

Usage:
    python -m cassboot [-f] [-p pidfile] ...
"""

import sys

from cassboot.entrypoints.cli import main

if __name__ == "__main__":
    sys.exit(main())
