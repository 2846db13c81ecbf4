"""
Entry point for module execution (``python -m console_rewriter``).
"""

import sys
from console_rewriter.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
