"""Allow ``python -m matrix_rain``."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
