"""``python -m maskvm`` – see :mod:`maskvm.main`."""

import sys

from maskvm.main import main

sys.exit(main())
