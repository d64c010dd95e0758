"""Incidence operators - d₀, d₁, exactness, Betti numbers."""

from .incidence import (
    build_d0,
    build_d1,
    build_incidence_matrices,
    betti_numbers,
    homology_summary,
)
