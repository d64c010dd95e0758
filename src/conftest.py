"""
Pytest Configuration
====================

Puts src/ on sys.path so hyperbolic_tri imports without installation, and
provides the two reference surfaces shared by the suites:

    bolza  - freshly seeded 14-vertex dummy triangulation (genus 2)
    tetra  - boundary of a tetrahedron (genus 0), 4 faces

Usage:
    cd src
    pytest tests/ -v
"""

import sys
from pathlib import Path

import pytest

SRC_ROOT = Path(__file__).parent
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from hyperbolic_tri import PeriodicTriangulation  # noqa: E402


# Boundary of a tetrahedron, counter-clockwise seen from outside
TETRA_FACES = [(0, 2, 1), (0, 1, 3), (0, 3, 2), (1, 2, 3)]
TETRA_NEIGHBORS = [(3, 1, 2), (3, 2, 0), (3, 0, 1), (2, 1, 0)]


def pytest_report_header(config):
    import numpy
    import scipy
    return f"hyperbolic_tri: numpy {numpy.__version__}, scipy {scipy.__version__}"


@pytest.fixture
def bolza():
    tri = PeriodicTriangulation.construct()
    tri.insert_dummy_points()
    return tri


@pytest.fixture
def tetra():
    return PeriodicTriangulation.from_arrays(TETRA_FACES, TETRA_NEIGHBORS, genus=0)
