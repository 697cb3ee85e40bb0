"""Allow running git-tidy with ``python -m git_tidy``."""

import sys

from git_tidy.cli.main import main

sys.exit(main())
