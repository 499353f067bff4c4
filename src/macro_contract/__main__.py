"""
Entry point for module execution (``python -m macro_contract``).
"""

import sys
from macro_contract.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
