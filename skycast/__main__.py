"""Allow ``python -m skycast``."""

import sys

from skycast.cli import main

sys.exit(main())
