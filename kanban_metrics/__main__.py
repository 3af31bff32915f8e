"""Allow ``python -m kanban_metrics``."""

import sys

from kanban_metrics.cli import main

sys.exit(main())
