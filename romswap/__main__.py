"""Allow ``python -m romswap``."""
import sys

from romswap.cli import main

sys.exit(main())
