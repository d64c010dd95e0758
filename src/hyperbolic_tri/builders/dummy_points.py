"""
Bolza Surface Dummy Points
==========================

14-point dummy seed on the Bolza surface (genus 2), built combinatorially
from the regular hyperbolic octagon.

GEOMETRY (Poincaré disk, lifts inside the fundamental octagon):
    O      : origin
    P_k    : octagon corners, radius 2^(-1/4), angle (2k - 1)π/8
    M_k    : side midpoints,  radius sqrt(sqrt(2) - 1), angle kπ/4
    Q_k    : inner ring on the ray of P_k, half the corner radius

    Side k runs from P_k to P_{k+1} through M_k.

SIDE PAIRING:
    Side k is glued to side k+4 with traversal reversed:
        P_k → P_{k+5},   M_k → M_{k+4},   P_{k+1} → P_{k+4}    (indices mod 8)

    Under this pairing all eight corners form ONE vertex class and the
    midpoints pair up as M_k ≡ M_{k+4}.

TOPOLOGY (verified by check_triangulation):
    V = 1 (O) + 8 (Q) + 1 (v) + 4 (m) = 14
    F = 8 fan + 24 sector = 32
    E = 48,  χ = V - E + F = -2  → genus 2
    Betti numbers (1, 4, 1)

    The edge v–m_j occurs TWICE (two periodic images), so edges are
    identified through half-edge pairing, not by vertex pairs.

NOTE: coordinates are representatives only. No hyperbolic predicate is
evaluated here; lifts are used for the orientation sanity check and for
plotting.

Oct 2026
"""

import numpy as np
from typing import Dict, List, Tuple

from ..spec.constants import (
    OCTAGON_SIDES,
    OCTAGON_VERTEX_RADIUS,
    OCTAGON_MIDPOINT_RADIUS,
    INNER_RING_FRACTION,
    NO_NEIGHBOR,
)
from ..spec.structures import ccw, cw, canonical_face

Label = Tuple[str, int]   # ('O', 0), ('P', k), ('M', k), ('Q', k)


def octagon_point(label: Label) -> np.ndarray:
    """Poincaré-disk coordinates of a lift label."""
    kind, k = label
    if kind == 'O':
        return np.zeros(2)
    if kind == 'P':
        r, theta = OCTAGON_VERTEX_RADIUS, (2 * k - 1) * np.pi / OCTAGON_SIDES
    elif kind == 'M':
        r, theta = OCTAGON_MIDPOINT_RADIUS, 2 * k * np.pi / OCTAGON_SIDES
    elif kind == 'Q':
        r, theta = INNER_RING_FRACTION * OCTAGON_VERTEX_RADIUS, (2 * k - 1) * np.pi / OCTAGON_SIDES
    else:
        raise ValueError(f"Unknown lift label: {label}")
    return np.array([r * np.cos(theta), r * np.sin(theta)])


def vertex_class(label: Label) -> str:
    """Name of the surface vertex a lift label projects to."""
    kind, k = label
    if kind == 'O':
        return "O"
    if kind == 'P':
        return "v"
    if kind == 'M':
        return f"m{k % (OCTAGON_SIDES // 2)}"
    if kind == 'Q':
        return f"q{k}"
    raise ValueError(f"Unknown lift label: {label}")


def glue_side(label: Label, side: int) -> Label:
    """
    Image of a boundary label of side `side` on the paired side.

    Raises:
        ValueError if the label is not on that side.
    """
    n = OCTAGON_SIDES
    half = n // 2
    kind, k = label
    if kind == 'M' and k == side % n:
        return ('M', (side + half) % n)
    if kind == 'P' and k == side % n:
        return ('P', (side + half + 1) % n)
    if kind == 'P' and k == (side + 1) % n:
        return ('P', (side + half) % n)
    raise ValueError(f"Label {label} is not on octagon side {side}")


def build_dummy_faces() -> List[Tuple[Label, Label, Label]]:
    """
    Counter-clockwise faces of the dummy seed, as lift labels.

    Order: the 8 fan triangles around O, then 3 triangles per sector.
    """
    n = OCTAGON_SIDES
    faces = []

    for k in range(n):
        faces.append((('O', 0), ('Q', k), ('Q', (k + 1) % n)))

    for k in range(n):
        q0, q1 = ('Q', k), ('Q', (k + 1) % n)
        p0, p1 = ('P', k), ('P', (k + 1) % n)
        m = ('M', k)
        faces.append((q0, p0, m))
        faces.append((q0, m, q1))
        faces.append((q1, m, p1))

    return faces


def _twin_key(start: Label, end: Label) -> Tuple[Label, Label]:
    """Directed label pair the twin of half-edge (start, end) must carry."""
    on_boundary = {start[0], end[0]} == {'P', 'M'}
    if on_boundary:
        side = start[1] if start[0] == 'M' else end[1]
        return glue_side(end, side), glue_side(start, side)
    return end, start


def build_bolza_dummy_points() -> Dict:
    """
    Build the 14-vertex dummy seed on the Bolza surface.

    Returns:
        dict with
            'points': (V, 2) representative coordinates per vertex
            'labels': list of V vertex names ("O", "q0", .., "v", "m0", ..)
            'faces': (F, 3) counter-clockwise vertex indices
            'neighbors': (F, 3) face across the edge opposite each corner
            'lifts': (F, 3, 2) corner coordinates inside the octagon

    Raises:
        ValueError if a lifted triangle is listed twice or a half-edge
        has no twin (broken side pairing).
    """
    label_faces = build_dummy_faces()
    F = len(label_faces)

    # Step 0: each lifted triangle listed once, in either winding
    seen: Dict[tuple, int] = {}
    for f_idx, face in enumerate(label_faces):
        key, _ = canonical_face(face)
        if key in seen:
            raise ValueError(f"Triangle {face} listed twice (faces {seen[key]}, {f_idx})")
        seen[key] = f_idx

    # Step 1: vertices by projection class, indexed in order of first use
    class_to_idx: Dict[str, int] = {}
    labels: List[str] = []
    points: List[np.ndarray] = []
    faces = np.zeros((F, 3), dtype=int)
    lifts = np.zeros((F, 3, 2))

    for f_idx, face in enumerate(label_faces):
        for i, lab in enumerate(face):
            name = vertex_class(lab)
            if name not in class_to_idx:
                class_to_idx[name] = len(labels)
                labels.append(name)
                points.append(octagon_point(lab))
            faces[f_idx, i] = class_to_idx[name]
            lifts[f_idx, i] = octagon_point(lab)

    # Step 2: half-edges keyed by directed lift labels
    half_edges: Dict[Tuple[Label, Label], Tuple[int, int]] = {}
    for f_idx, face in enumerate(label_faces):
        for i in range(3):
            key = (face[ccw(i)], face[cw(i)])
            if key in half_edges:
                raise ValueError(f"Half-edge {key} appears twice (faces {half_edges[key][0]}, {f_idx})")
            half_edges[key] = (f_idx, i)

    # Step 3: neighbours through twins (interior or glued boundary)
    neighbors = np.full((F, 3), NO_NEIGHBOR, dtype=int)
    for (start, end), (f_idx, i) in half_edges.items():
        twin = _twin_key(start, end)
        if twin not in half_edges:
            raise ValueError(f"Half-edge {start}->{end} of face {f_idx} has no twin {twin}")
        neighbors[f_idx, i] = half_edges[twin][0]

    return {
        'points': np.array(points),
        'labels': labels,
        'faces': faces,
        'neighbors': neighbors,
        'lifts': lifts,
    }
