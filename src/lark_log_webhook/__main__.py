"""Allow running as ``python -m lark_log_webhook``."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
