"""
Entry point for running the package as a module: python -m unimaz
"""

import sys
from unimaz.cli import main

if __name__ == "__main__":
    sys.exit(main())
