"""
Structural Validity of Periodic Triangulations
==============================================

Pure check: check_triangulation() inspects a triangulation and returns a
ValidityReport listing EVERY violated invariant. It prints nothing and
raises nothing; format_report() renders the same report for humans.

INVARIANTS (closed orientable triangulated surface of genus g):
    1. Non-empty:       V > 0, F > 0
    2. Faces:           indices in [0, V), three distinct vertices
    3. Vertices:        every vertex has at least one incident face
    4. Links:           neighbour set, in range, symmetric
    5. Orientation:     shared edge traversed in opposite directions
    6. Manifold:        star of each vertex is ONE closed fan
    7. Connected:       face-adjacency graph has one component
    8. Two-sided edges: 3F = 2E
    9. Euler:           V - E + F = 2 - 2g
   10. Homology:        (β₀, β₁, β₂) = (1, 2g, 1),  d₁d₀ = 0
   11. Lifts:           representative triangles are counter-clockwise

Checks 6-10 run only when checks 4-5 pass. A neighbour table whose shape
differs from the face table stops the check after 4 (E is left at 0).

Date: Oct 2026
"""

import numpy as np
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from scipy.sparse import coo_matrix
from scipy.sparse.csgraph import connected_components

from ..spec.constants import EPS_ZERO, NO_NEIGHBOR
from ..spec.structures import ccw, cw
from ..operators.incidence import homology_summary


@dataclass
class ValidityReport:
    """Outcome of check_triangulation."""
    n_vertices: int
    n_faces: int
    n_edges: int
    genus: Optional[int] = None
    violations: List[str] = field(default_factory=list)
    betti: Optional[Tuple[int, int, int]] = None

    @property
    def ok(self) -> bool:
        return not self.violations

    @property
    def chi(self) -> int:
        return self.n_vertices - self.n_edges + self.n_faces


def euler_characteristic(genus: int) -> int:
    """χ = 2 - 2g for a closed orientable surface."""
    if genus < 0:
        raise ValueError(f"Genus must be ≥ 0, got {genus}")
    return 2 - 2 * genus


def expected_edges(n_vertices: int, n_faces: int, genus: int) -> int:
    """
    Edge count implied by the Euler relation.

        V - E + F = 2 - 2g   →   E = V + F + 2g - 2

    For the Bolza surface (g = 2) this is V + F + 2.
    """
    return n_vertices + n_faces - euler_characteristic(genus)


def _check_faces(tri) -> List[str]:
    errors = []
    V = tri.number_of_vertices()
    faces = tri.faces

    if faces.ndim != 2 or faces.shape[1] != 3:
        return [f"Face table has shape {faces.shape}, expected (F, 3)"]

    for f_idx, face in enumerate(faces):
        if np.any(face < 0) or np.any(face >= V):
            errors.append(f"Face {f_idx}: vertex index out of bounds [0, {V-1}]: {list(face)}")
        elif len(set(face.tolist())) != 3:
            errors.append(f"Face {f_idx}: repeated vertex {list(face)}")

    return errors


def _check_links(tri) -> List[str]:
    errors = []
    faces, neighbors = tri.faces, tri.neighbors
    F = len(faces)

    if neighbors.shape != faces.shape:
        return [f"Neighbor table has shape {neighbors.shape}, expected {faces.shape}"]

    for f_idx in range(F):
        for i in range(3):
            g = int(neighbors[f_idx, i])
            if g == NO_NEIGHBOR:
                errors.append(f"Face {f_idx}: no neighbor across edge {i} (boundary edge)")
                continue
            if g < 0 or g >= F:
                errors.append(f"Face {f_idx}: neighbor {g} across edge {i} out of bounds [0, {F-1}]")
                continue
            if tri.mirror_index(f_idx, i) is not None:
                continue
            a, b = faces[f_idx, ccw(i)], faces[f_idx, cw(i)]
            same_dir = any(
                neighbors[g, j] == f_idx and faces[g, ccw(j)] == a and faces[g, cw(j)] == b
                for j in range(3)
            )
            if same_dir:
                errors.append(
                    f"Face {f_idx} and face {g} traverse edge ({a},{b}) in the same direction "
                    f"(inconsistent orientation)"
                )
            else:
                errors.append(f"Face {f_idx}: neighbor {g} across edge {i} does not link back")

    return errors


def _check_vertex_stars(tri) -> List[str]:
    """Each vertex star must be one closed fan (no pinched vertices)."""
    errors = []
    faces, neighbors = tri.faces, tri.neighbors

    corners = [[] for _ in range(tri.number_of_vertices())]
    for f_idx, face in enumerate(faces):
        for i in range(3):
            corners[face[i]].append((f_idx, i))

    for v, star in enumerate(corners):
        if not star:
            continue
        start = star[0]
        f_idx, i = start
        steps = 0
        while True:
            g = int(neighbors[f_idx, cw(i)])
            i = int(np.where(faces[g] == v)[0][0])
            f_idx = g
            steps += 1
            if (f_idx, i) == start or steps > len(star):
                break
        if steps != len(star):
            errors.append(
                f"Vertex {v}: star is not a single fan "
                f"({min(steps, len(star))} of {len(star)} corners reachable)"
            )

    return errors


def _count_face_components(tri) -> int:
    """Connected components of the face-adjacency (dual) graph."""
    F = len(tri.faces)
    rows, cols = [], []
    for f_idx in range(F):
        for i in range(3):
            g = int(tri.neighbors[f_idx, i])
            if 0 <= g < F:
                rows.append(f_idx)
                cols.append(g)
    adj = coo_matrix((np.ones(len(rows)), (rows, cols)), shape=(F, F))
    n_components, _ = connected_components(adj, directed=False)
    return int(n_components)


def _check_lifts(tri) -> List[str]:
    errors = []
    lifts = tri.lifts
    if lifts.shape != (len(tri.faces), 3, 2):
        return [f"Lift table has shape {lifts.shape}, expected {(len(tri.faces), 3, 2)}"]

    e1 = lifts[:, 1] - lifts[:, 0]
    e2 = lifts[:, 2] - lifts[:, 0]
    det = e1[:, 0] * e2[:, 1] - e1[:, 1] * e2[:, 0]
    bad = np.where(det <= EPS_ZERO)[0]
    if len(bad) > 0:
        errors.append(
            f"{len(bad)} faces have non-positive lifted orientation "
            f"(first: face {bad[0]}, det={det[bad[0]]:.3e})"
        )
    return errors


def check_triangulation(tri) -> ValidityReport:
    """
    Check all structural invariants of a periodic triangulation.

    Args:
        tri: object exposing faces (F, 3), neighbors (F, 3), lifts or None,
             genus or None, number_of_vertices/faces/edges() and
             mirror_index(f, i)

    Returns:
        ValidityReport; report.ok is True iff no invariant is violated
    """
    V = tri.number_of_vertices()
    F = tri.number_of_faces()
    report = ValidityReport(n_vertices=V, n_faces=F, n_edges=0, genus=tri.genus)

    if V == 0 or F == 0:
        report.violations.append(f"Empty triangulation (V={V}, F={F})")
        return report

    face_errors = _check_faces(tri)
    report.violations.extend(face_errors)
    if face_errors:
        return report

    used = np.zeros(V, dtype=bool)
    used[tri.faces.ravel()] = True
    for v in np.where(~used)[0]:
        report.violations.append(f"Vertex {v}: not incident to any face")

    link_errors = _check_links(tri)
    report.violations.extend(link_errors)
    if tri.neighbors.shape != tri.faces.shape:
        # edges cannot be counted without one link per face side
        return report
    report.n_edges = tri.number_of_edges()

    if not link_errors:
        report.violations.extend(_check_vertex_stars(tri))

        n_components = _count_face_components(tri)
        if n_components != 1:
            report.violations.append(f"Triangulation is disconnected ({n_components} components)")

        E = report.n_edges
        if 3 * F != 2 * E:
            report.violations.append(f"3F = {3*F} ≠ 2E = {2*E}")

        if tri.genus is not None:
            chi_expected = euler_characteristic(tri.genus)
            if report.chi != chi_expected:
                report.violations.append(
                    f"Euler characteristic V - E + F = {report.chi}, "
                    f"expected 2 - 2g = {chi_expected} for genus {tri.genus}"
                )

        edges, face_edges = tri.edge_index()
        try:
            topo = homology_summary(V, tri.faces, edges, face_edges)
        except ValueError as exc:
            report.violations.append(f"Incidence matrices: {exc}")
        else:
            report.betti = topo['betti']
            if tri.genus is not None:
                expected = (1, 2 * tri.genus, 1)
                if report.betti != expected:
                    report.violations.append(f"Betti numbers {report.betti}, expected {expected}")

    if tri.lifts is not None:
        report.violations.extend(_check_lifts(tri))

    return report


def format_report(report: ValidityReport) -> str:
    """Human-readable rendering of a ValidityReport."""
    lines = [
        f"V = {report.n_vertices}, E = {report.n_edges}, F = {report.n_faces}, "
        f"chi = {report.chi}, genus = {report.genus}",
    ]
    if report.betti is not None:
        lines.append(f"Betti numbers: {report.betti}")
    if report.ok:
        lines.append("All structural invariants hold.")
    else:
        lines.append(f"{len(report.violations)} violation(s):")
        lines.extend(f"  - {msg}" for msg in report.violations)
    return "\n".join(lines)
