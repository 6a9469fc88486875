"""Allow ``python -m purge_temp``."""

import sys

from purge_temp.cli import main

if __name__ == "__main__":
    sys.exit(main())
