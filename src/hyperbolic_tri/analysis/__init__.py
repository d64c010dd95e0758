"""
Analysis functions - depend on operators layer.

Includes:
- validity: structural invariants of a periodic triangulation,
  Euler relation helpers, report formatting
"""

from .validity import (
    ValidityReport,
    check_triangulation,
    format_report,
    euler_characteristic,
    expected_edges,
)
