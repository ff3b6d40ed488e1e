"""Allow ``python -m card_czar``."""

import sys

from .cli import main

sys.exit(main())
