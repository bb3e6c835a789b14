"""
Entry point for running stylerules as a module: python -m stylerules
"""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
