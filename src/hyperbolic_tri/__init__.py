"""
HYPERBOLIC_TRI - Combinatorial periodic triangulations
======================================================

NO hyperbolic predicates. NO Delaunay flips. NO exact arithmetic.

Structure:
    spec/        - Constants and mesh contract
    builders/    - Dummy-point seed (Bolza surface, genus 2)
    operators/   - Incidence matrices d₀, d₁ and Betti numbers
    analysis/    - Structural validity report
    triangulation.py - PeriodicTriangulation data structure
    harness.py   - Dummy-point smoke harness (construct + validate)

Layering:
    harness → triangulation → builders → spec
                            ↘ analysis → operators → spec
"""

__version__ = "0.1.0"

from . import spec
from . import builders
from . import operators
from . import analysis
from .triangulation import PeriodicTriangulation, SeedingError
from .harness import ValidationHarness, HarnessState, Ok, InvalidTopology, main
