"""Approximate an image with a Hilbert line drawing (see hilbert_ink.cli).

CLI:
    python scripts/approximate.py input.jpg output.png --order 8
"""

import sys

from hilbert_ink.cli import main

if __name__ == "__main__":
    sys.exit(main())
