"""
Tap BPM - Main Entry Point

Tap tempo estimation with a 95% confidence interval,
from a text shell or a terminal UI.
"""

import sys

from tapbpm.cli import main

if __name__ == "__main__":
    sys.exit(main())
