"""Allow ``python -m composetree`` to run the demo."""

import sys

from .demo import main

sys.exit(main())
