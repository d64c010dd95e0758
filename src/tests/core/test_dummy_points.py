"""
Tests for the Bolza dummy-point seed
====================================

Counts, vertex classes, side pairing and neighbour tables of the 14-point
genus-2 seed.

Run: python -m pytest tests/core/test_dummy_points.py -v
"""

import numpy as np
import pytest
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from hyperbolic_tri.builders import build_bolza_dummy_points, build_dummy_faces
from hyperbolic_tri.builders.dummy_points import glue_side, vertex_class, octagon_point
from hyperbolic_tri.spec import (
    N_DUMMY_VERTICES,
    N_DUMMY_FACES,
    OCTAGON_SIDES,
    OCTAGON_VERTEX_RADIUS,
    OCTAGON_MIDPOINT_RADIUS,
    NO_NEIGHBOR,
    EPS_CLOSE,
    ccw,
    cw,
)


@pytest.fixture(scope="module")
def seed():
    return build_bolza_dummy_points()


# =============================================================================
# D1: Counts and vertex classes
# =============================================================================

def test_seed_counts(seed):
    """D1.1: 14 vertices, 32 faces."""
    assert len(seed['points']) == N_DUMMY_VERTICES == 14
    assert len(seed['labels']) == 14
    assert seed['faces'].shape == (N_DUMMY_FACES, 3) == (32, 3)
    assert seed['neighbors'].shape == (32, 3)
    assert seed['lifts'].shape == (32, 3, 2)


def test_seed_vertex_labels(seed):
    """D1.2: O, one corner vertex, four midpoints, eight inner points."""
    expected = {"O", "v"} | {f"m{j}" for j in range(4)} | {f"q{k}" for k in range(8)}
    assert set(seed['labels']) == expected
    # First face is the fan triangle (O, Q0, Q1)
    assert seed['labels'][:3] == ["O", "q0", "q1"]


def test_every_vertex_used(seed):
    """D1.3: Each of the 14 vertices appears in some face."""
    used = np.unique(seed['faces'])
    assert np.array_equal(used, np.arange(14))


def test_octagon_corners_collapse(seed):
    """D1.4: All 8 octagon corners project to the single vertex v."""
    assert {vertex_class(('P', k)) for k in range(OCTAGON_SIDES)} == {"v"}
    assert vertex_class(('M', 1)) == vertex_class(('M', 5)) == "m1"


# =============================================================================
# D2: Geometry of the lifts
# =============================================================================

def test_octagon_radii():
    """D2.1: r_v = 2^(-1/4), r_m = sqrt(sqrt(2) - 1)."""
    assert abs(OCTAGON_VERTEX_RADIUS - 0.8408964152537145) < EPS_CLOSE
    assert abs(OCTAGON_MIDPOINT_RADIUS - 0.6435942529055827) < EPS_CLOSE
    for k in range(OCTAGON_SIDES):
        assert abs(np.linalg.norm(octagon_point(('P', k))) - OCTAGON_VERTEX_RADIUS) < EPS_CLOSE
        assert abs(np.linalg.norm(octagon_point(('M', k))) - OCTAGON_MIDPOINT_RADIUS) < EPS_CLOSE


def test_lifts_inside_disk(seed):
    """D2.2: Every lift lies inside the unit disk."""
    r = np.linalg.norm(seed['lifts'], axis=2)
    assert np.all(r < 1.0)


def test_lifts_counterclockwise(seed):
    """D2.3: Every lifted face has positive orientation."""
    lifts = seed['lifts']
    e1 = lifts[:, 1] - lifts[:, 0]
    e2 = lifts[:, 2] - lifts[:, 0]
    det = e1[:, 0] * e2[:, 1] - e1[:, 1] * e2[:, 0]
    assert np.all(det > 0), f"Clockwise faces: {np.where(det <= 0)[0]}"


def test_unknown_label_raises():
    """D2.4: Unknown lift kind is rejected."""
    with pytest.raises(ValueError, match="Unknown lift label"):
        octagon_point(('X', 0))


# =============================================================================
# D3: Side pairing
# =============================================================================

def test_glue_side_is_involution():
    """D3.1: Gluing side k then side k+4 returns every label of side k."""
    for k in range(OCTAGON_SIDES):
        for lab in [('P', k), ('M', k), ('P', (k + 1) % OCTAGON_SIDES)]:
            image = glue_side(lab, k)
            assert glue_side(image, (k + 4) % OCTAGON_SIDES) == lab


def test_glue_side_reverses_traversal():
    """D3.2: P_k → P_{k+5}, P_{k+1} → P_{k+4}."""
    assert glue_side(('P', 0), 0) == ('P', 5)
    assert glue_side(('P', 1), 0) == ('P', 4)
    assert glue_side(('M', 0), 0) == ('M', 4)
    assert glue_side(('P', 0), 7) == ('P', 3)


def test_glue_side_rejects_foreign_label():
    """D3.3: A label not on the side raises."""
    with pytest.raises(ValueError, match="not on octagon side"):
        glue_side(('P', 3), 0)


# =============================================================================
# D4: Neighbour table
# =============================================================================

def test_neighbors_all_set(seed):
    """D4.1: Closed surface - no boundary edges."""
    assert np.all(seed['neighbors'] != NO_NEIGHBOR)


def test_neighbors_reciprocal(seed):
    """D4.2: Twin half-edges link back with reversed endpoints."""
    faces, nbr = seed['faces'], seed['neighbors']
    for f in range(len(faces)):
        for i in range(3):
            g = nbr[f, i]
            a, b = faces[f, ccw(i)], faces[f, cw(i)]
            twins = [j for j in range(3)
                     if nbr[g, j] == f and faces[g, ccw(j)] == b and faces[g, cw(j)] == a]
            assert len(twins) == 1, f"Half-edge ({f},{i}) has {len(twins)} twins"


def test_parallel_edges_present(seed):
    """D4.3: v–m_j is realised by two distinct edges (periodic images)."""
    faces, nbr = seed['faces'], seed['neighbors']
    v = seed['labels'].index("v")
    m0 = seed['labels'].index("m0")
    halves = [(f, i) for f in range(len(faces)) for i in range(3)
              if {faces[f, ccw(i)], faces[f, cw(i)]} == {v, m0}]
    # 2 edges × 2 half-edges
    assert len(halves) == 4


def test_missing_face_breaks_pairing(monkeypatch):
    """D4.4: Dropping a face leaves half-edges without twins → ValueError."""
    import hyperbolic_tri.builders.dummy_points as dp

    faces = build_dummy_faces()
    monkeypatch.setattr(dp, "build_dummy_faces", lambda: faces[:-1])
    with pytest.raises(ValueError, match="no twin"):
        dp.build_bolza_dummy_points()


def test_duplicate_face_rejected(monkeypatch):
    """D4.5: The same lifted triangle twice, re-wound, is caught before pairing."""
    import hyperbolic_tri.builders.dummy_points as dp

    faces = build_dummy_faces()
    a, b, c = faces[9]
    monkeypatch.setattr(dp, "build_dummy_faces", lambda: faces + [(a, c, b)])
    with pytest.raises(ValueError, match="listed twice \\(faces 9, 32\\)"):
        dp.build_bolza_dummy_points()
