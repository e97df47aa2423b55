"""Allow running as ``python -m agentscout``."""

import sys

from agentscout.cli import main

sys.exit(main())
