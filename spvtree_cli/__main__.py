"""
Module execution entry point.

Allows running with: python -m spvtree_cli
"""

import sys
from spvtree_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
