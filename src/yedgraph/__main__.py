"""Allow ``python -m yedgraph``."""

import sys

from yedgraph.cli import main

sys.exit(main())
