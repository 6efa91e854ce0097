# SPDX-License-Identifier: MIT
"""Package entry point — run stylegate via `python -m stylegate`."""

import sys

from stylegate.cli import main

if __name__ == "__main__":
    sys.exit(main())
