"""Allow ``python -m exam_engine``."""

import sys

from .cli import main

sys.exit(main())
