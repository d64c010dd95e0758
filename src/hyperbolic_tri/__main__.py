"""python -m hyperbolic_tri: run the dummy-point smoke harness."""

import sys

from .harness import main

sys.exit(main())
