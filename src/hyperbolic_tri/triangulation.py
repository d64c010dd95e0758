"""
Periodic Triangulation (combinatorial)
======================================

Triangle data structure of a closed periodic surface:

    faces[f]      = (a, b, c)  counter-clockwise vertex indices
    neighbors[f,i] = face across the edge opposite corner i
    lifts[f]      = Poincaré-disk coordinates of the three corners
                    inside the fundamental domain (optional)

There is no edge table: an edge is a pair of twin half-edges (f, i) and
(g, j) with neighbors[f, i] = g and neighbors[g, j] = f. This keeps
parallel edges between the same two vertices distinct, which the Bolza
seed needs (v–m_j appears twice).

Periodic offsets and all geometric predicates are out of scope; the
structure is purely combinatorial.
"""

import sys
import numpy as np
from typing import List, Optional, Tuple

from .spec.constants import BOLZA_GENUS, NO_NEIGHBOR
from .spec.structures import ccw, cw, create_mesh
from .builders.dummy_points import build_bolza_dummy_points
from .analysis.validity import check_triangulation, format_report


class SeedingError(ValueError):
    """The dummy seed could not be built into a valid triangulation."""


class PeriodicTriangulation:
    """
    Combinatorial triangulation of a closed periodic surface.

    Usage:
        tri = PeriodicTriangulation()
        tri.insert_dummy_points()
        tri.number_of_vertices(), tri.number_of_faces(), tri.number_of_edges()
        tri.is_valid(verbose=True)
    """

    def __init__(self):
        self._clear()

    def _clear(self):
        self.faces = np.zeros((0, 3), dtype=int)
        self.neighbors = np.zeros((0, 3), dtype=int)
        self.points = np.zeros((0, 2))
        self.labels: List[str] = []
        self.lifts: Optional[np.ndarray] = None
        self.genus: Optional[int] = None
        self._n_vertices = 0

    @classmethod
    def construct(cls) -> "PeriodicTriangulation":
        """Empty triangulation."""
        return cls()

    @classmethod
    def from_arrays(cls, faces, neighbors, n_vertices: int = None, genus: int = None,
                    lifts=None, points=None, labels=None) -> "PeriodicTriangulation":
        """
        Wrap existing face/neighbour tables. Nothing is checked here;
        call is_valid() on the result.
        """
        tri = cls()
        tri.faces = np.array(faces, dtype=int).reshape(-1, 3)
        tri.neighbors = np.array(neighbors, dtype=int).reshape(-1, 3)
        if n_vertices is None:
            n_vertices = int(tri.faces.max()) + 1 if tri.faces.size else 0
        tri._n_vertices = n_vertices
        tri.genus = genus
        if lifts is not None:
            tri.lifts = np.asarray(lifts, dtype=float)
        if points is not None:
            tri.points = np.asarray(points, dtype=float)
        tri.labels = list(labels) if labels is not None else [str(v) for v in range(n_vertices)]
        return tri

    # -------------------------------------------------------------------------
    # Seeding
    # -------------------------------------------------------------------------

    def insert_dummy_points(self) -> List[int]:
        """
        Seed an empty triangulation with the 14 Bolza dummy points.

        Returns:
            vertex indices of the inserted dummy points

        Raises:
            SeedingError if the triangulation is not empty, or if the seed
            cannot be built or is not a valid genus-2 triangulation.
        """
        if self._n_vertices != 0 or len(self.faces) != 0:
            raise SeedingError(
                f"Dummy points require an empty triangulation, "
                f"got V={self._n_vertices}, F={len(self.faces)}"
            )

        try:
            seed = build_bolza_dummy_points()
        except ValueError as exc:
            raise SeedingError(f"Dummy seed construction failed: {exc}") from exc

        self.faces = seed['faces']
        self.neighbors = seed['neighbors']
        self.points = seed['points']
        self.labels = seed['labels']
        self.lifts = seed['lifts']
        self.genus = BOLZA_GENUS
        self._n_vertices = len(seed['points'])

        report = check_triangulation(self)
        if not report.ok:
            self._clear()
            raise SeedingError(
                "Dummy seed is not a valid triangulation:\n" + format_report(report)
            )

        return list(range(self._n_vertices))

    seed_with_dummy_points = insert_dummy_points

    # -------------------------------------------------------------------------
    # Counts
    # -------------------------------------------------------------------------

    def number_of_vertices(self) -> int:
        return self._n_vertices

    def number_of_faces(self) -> int:
        return len(self.faces)

    def number_of_edges(self) -> int:
        return len(self.edges())

    def euler_characteristic(self) -> int:
        return self.number_of_vertices() - self.number_of_edges() + self.number_of_faces()

    # -------------------------------------------------------------------------
    # Adjacency
    # -------------------------------------------------------------------------

    def mirror_index(self, f: int, i: int) -> Optional[int]:
        """
        Index j such that (neighbors[f, i], j) is the twin of half-edge (f, i),
        or None if the link is unset, out of range or not reciprocated.
        """
        g = int(self.neighbors[f, i])
        if g < 0 or g >= len(self.faces):
            return None
        a, b = self.faces[f, ccw(i)], self.faces[f, cw(i)]
        for j in range(3):
            if (g, j) == (f, i):
                continue
            if self.neighbors[g, j] == f and self.faces[g, ccw(j)] == b and self.faces[g, cw(j)] == a:
                return j
        return None

    def edges(self) -> List[Tuple[int, int]]:
        """
        One representative half-edge (f, i) per edge.

        A twin pair is represented by its lexicographically smaller half;
        an unpaired half-edge counts as an edge on its own.
        """
        reps = []
        for f in range(len(self.faces)):
            for i in range(3):
                g = int(self.neighbors[f, i])
                j = self.mirror_index(f, i) if g != NO_NEIGHBOR else None
                if j is None or (f, i) < (g, j):
                    reps.append((f, i))
        return reps

    def edge_index(self) -> Tuple[List[Tuple[int, int]], np.ndarray]:
        """
        Number the edges.

        Returns:
            edges: list of (min, max) vertex pairs, one per edge (may repeat)
            face_edges: (F, 3) edge index opposite each corner

        Raises:
            ValueError if a half-edge has no twin
        """
        face_edges = np.full(self.faces.shape, -1, dtype=int)
        edges = []
        for f, i in self.edges():
            j = self.mirror_index(f, i)
            if j is None:
                raise ValueError(f"Half-edge ({f}, {i}) has no twin")
            a, b = int(self.faces[f, ccw(i)]), int(self.faces[f, cw(i)])
            face_edges[f, i] = len(edges)
            face_edges[int(self.neighbors[f, i]), j] = len(edges)
            edges.append((min(a, b), max(a, b)))
        return edges, face_edges

    def incident_faces(self, v: int) -> List[Tuple[int, int]]:
        """Corners (f, i) with faces[f, i] == v."""
        rows, cols = np.where(self.faces == v)
        return [(int(f), int(i)) for f, i in zip(rows, cols)]

    def vertex_degree(self, v: int) -> int:
        """Number of edges at v (= incident corners on a closed manifold)."""
        return len(self.incident_faces(v))

    # -------------------------------------------------------------------------
    # Validity
    # -------------------------------------------------------------------------

    def is_valid(self, verbose: bool = False) -> bool:
        """
        Structural validity. With verbose=True the full report goes to stderr.
        """
        report = check_triangulation(self)
        if verbose:
            print(format_report(report), file=sys.stderr)
        return report.ok

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def to_mesh(self, name: str = "bolza_dummy_14") -> dict:
        """Contract-compliant mesh dict (see spec.structures)."""
        edges, face_edges = self.edge_index()
        return create_mesh(
            V=self.points,
            E=edges,
            F=self.faces.tolist(),
            face_edges=face_edges.tolist(),
            name=name,
            genus=self.genus,
            periodic=True,
        )
