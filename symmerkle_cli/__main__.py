"""
Module execution entry point.

Allows running with: python -m symmerkle_cli
"""

import sys
from symmerkle_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
