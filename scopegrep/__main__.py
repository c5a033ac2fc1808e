"""Allow ``python -m scopegrep``."""

import sys

from scopegrep.api.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
