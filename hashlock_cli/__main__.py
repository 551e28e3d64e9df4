"""
Module execution entry point.

Allows running with: python -m hashlock_cli
"""

import sys
from hashlock_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
