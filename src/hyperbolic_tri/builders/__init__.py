"""
Seed builders - pure combinatorial construction, no operators dependency.

EXPORTS:
- build_bolza_dummy_points: 14-point genus-2 seed (faces, neighbours, lifts)
- build_dummy_faces: the same seed as lift-label triples
"""

from .dummy_points import build_bolza_dummy_points, build_dummy_faces
