"""Allow running as ``python -m ryu_mod_manager``"""

import sys

from .app import main

if __name__ == "__main__":
    sys.exit(main())
