from __future__ import annotations

import sys

from .console.pause_console import main

if __name__ == "__main__":
    sys.exit(main())
