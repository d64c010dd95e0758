#!/usr/bin/env python3
"""
01: DUMMY-POINT SMOKE TEST FOR THE PERIODIC TRIANGULATION
=========================================================

Seeds an empty periodic triangulation with the 14 Bolza dummy points,
prints its counts and checks structural validity.

INPUTS
------

  - None. No arguments, no environment variables.

OUTPUTS
-------

  Triangulation successfully initialized with dummy points!
  ---------------------------------------------
  Number of vertices:                  14
  Number of faces:                     32
  Number of edges:                     48
  Expected edges (by Euler relation):  48
  Triangulation is valid: YES

  Exit code 0 if valid, 1 if the validity assertion fails,
  2 if the dummy seed cannot be built.

EULER RELATION
--------------

  V - E + F = 2 - 2g. The Bolza surface has genus 2, so the expected
  edge count is V + F + 2 = 14 + 32 + 2 = 48.
"""

import sys
from pathlib import Path


def _find_src():
    """Find src/ by looking for hyperbolic_tri/ subdirectory."""
    current = Path(__file__).resolve().parent
    for _ in range(10):
        if (current / 'hyperbolic_tri').is_dir():
            return current
        candidate = current / 'src'
        if (candidate / 'hyperbolic_tri').is_dir():
            return candidate
        current = current.parent
    raise RuntimeError("Cannot find src/hyperbolic_tri directory")

sys.path.insert(0, str(_find_src()))

from hyperbolic_tri.harness import main


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Dummy-point smoke test for the periodic triangulation")
    parser.parse_args()

    sys.exit(main())
