"""
Periodic Hyperbolic Triangulation - Source
==========================================

Modules:
    hyperbolic_tri - Combinatorial periodic triangulations and the
                     dummy-point smoke harness
    scripts        - Numbered drivers (01_dummy_points_smoke.py)
    tests          - Test suite

Requirements (what each floor is needed for):
    Python >= 3.9    builtin generics in annotations, dataclasses
    numpy  >= 1.20   integer face/neighbour tables, linalg.matrix_rank
    scipy  >= 1.11   sparse.csgraph.connected_components on coo_matrix
"""

import sys

if sys.version_info < (3, 9):
    raise ImportError(f"hyperbolic_tri requires Python >= 3.9, got {sys.version}")


def _require_version(module, minimum):
    """Raise ImportError if module.__version__ (major, minor) is below minimum."""
    parts = module.__version__.split('.')[:2]
    found = tuple(int(p) for p in parts if p.isdigit())
    if found < minimum:
        wanted = '.'.join(str(p) for p in minimum)
        raise ImportError(
            f"hyperbolic_tri requires {module.__name__} >= {wanted}, got {module.__version__}"
        )


import numpy  # noqa: E402
import scipy  # noqa: E402

_require_version(numpy, (1, 20))
_require_version(scipy, (1, 11))
