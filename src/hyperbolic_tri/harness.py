"""
Dummy-Point Smoke Harness
=========================

Construct + validate smoke test for a periodic triangulation:

    1. construct an empty triangulation
    2. seed it with the dummy points
    3. report V, F, E and the Euler-relation edge count V + F + 2
    4. check validity once (report on stderr, YES/NO on stdout) and
       return an outcome

STATE MACHINE:
    UNINITIALIZED → SEEDED → VALIDATED → DONE
    No step may be skipped or repeated. Out-of-order calls raise RuntimeError.

EULER RELATION:
    V - E + F = 2 - 2g. The Bolza surface has g = 2, so E = V + F + 2.
    The printed value uses this literal offset (EULER_EDGE_OFFSET); it is
    informational only and never asserted.

OUTPUT (stdout):
    Triangulation successfully initialized with dummy points!
    ---------------------------------------------
    Number of vertices:                  14
    Number of faces:                     32
    Number of edges:                     48
    Expected edges (by Euler relation):  48
    Triangulation is valid: YES
"""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, TextIO, Union

from .spec.constants import (
    EULER_EDGE_OFFSET,
    MSG_SEEDED,
    SEPARATOR,
    LABEL_VERTICES,
    LABEL_FACES,
    LABEL_EDGES,
    LABEL_EXPECTED_EDGES,
    LABEL_VALID,
    EXIT_OK,
    EXIT_INVALID,
    EXIT_SEED_FAILED,
)
from .analysis.validity import ValidityReport, check_triangulation, format_report
from .triangulation import PeriodicTriangulation, SeedingError


class HarnessState(Enum):
    """Lifecycle of a ValidationHarness. Each state is entered exactly once."""
    UNINITIALIZED = "uninitialized"
    SEEDED = "seeded"
    VALIDATED = "validated"
    DONE = "done"


@dataclass
class Ok:
    """The seeded triangulation passed every structural check."""
    report: ValidityReport


@dataclass
class InvalidTopology:
    """
    The seeded triangulation failed the validity assertion.

    report.violations lists every broken invariant; main() prints it to
    stderr and exits with EXIT_INVALID.
    """
    report: ValidityReport


Outcome = Union[Ok, InvalidTopology]


class ValidationHarness:
    """
    Owns one triangulation for its whole lifetime.

    Args:
        factory: zero-argument callable returning an empty triangulation
        out: stream for the text report (default: sys.stdout)
    """

    def __init__(self, factory: Callable = PeriodicTriangulation.construct,
                 out: Optional[TextIO] = None):
        self.factory = factory
        self.out = out if out is not None else sys.stdout
        self.state = HarnessState.UNINITIALIZED
        self.triangulation = None
        self.stats: Optional[Dict[str, int]] = None
        self.outcome: Optional[Outcome] = None

    def _require(self, state: HarnessState, action: str):
        if self.state is not state:
            raise RuntimeError(f"Cannot {action} in state {self.state.value}, expected {state.value}")

    def _emit(self, line: str):
        print(line, file=self.out)

    def seed(self):
        """Construct and seed. SeedingError propagates (fatal)."""
        self._require(HarnessState.UNINITIALIZED, "seed")
        self.triangulation = self.factory()
        self.triangulation.insert_dummy_points()
        self.state = HarnessState.SEEDED

    def report_statistics(self) -> Dict[str, int]:
        """Query counts and print the four numeric report lines."""
        self._require(HarnessState.SEEDED, "report statistics")
        if self.stats is not None:
            raise RuntimeError("Statistics already reported")

        tri = self.triangulation
        V = tri.number_of_vertices()
        F = tri.number_of_faces()
        E = tri.number_of_edges()
        self.stats = {
            'V': V,
            'F': F,
            'E': E,
            'E_expected': V + F + EULER_EDGE_OFFSET,
        }

        self._emit(MSG_SEEDED)
        self._emit(SEPARATOR)
        self._emit(f"{LABEL_VERTICES}{V}")
        self._emit(f"{LABEL_FACES}{F}")
        self._emit(f"{LABEL_EDGES}{E}")
        self._emit(f"{LABEL_EXPECTED_EDGES}{self.stats['E_expected']}")
        return self.stats

    def validate(self) -> Outcome:
        """
        Check validity once: the full report goes to stderr, the verdict is
        printed as YES/NO and decides the outcome.
        """
        self._require(HarnessState.SEEDED, "validate")
        if self.stats is None:
            raise RuntimeError("Cannot validate before statistics are reported")

        report = check_triangulation(self.triangulation)
        print(format_report(report), file=sys.stderr)
        self._emit(f"{LABEL_VALID}{'YES' if report.ok else 'NO'}")

        self.outcome = Ok(report) if report.ok else InvalidTopology(report)
        self.state = HarnessState.VALIDATED
        return self.outcome

    def run(self) -> Outcome:
        """All steps in order. Returns the outcome; never retries."""
        self.seed()
        self.report_statistics()
        outcome = self.validate()
        self.state = HarnessState.DONE
        return outcome


def main(factory: Callable = PeriodicTriangulation.construct,
         out: Optional[TextIO] = None) -> int:
    """
    Run the harness and map the outcome to a process exit code.

    Returns:
        EXIT_OK, EXIT_INVALID (validity failed) or EXIT_SEED_FAILED
    """
    harness = ValidationHarness(factory=factory, out=out)
    try:
        outcome = harness.run()
    except SeedingError as exc:
        print(f"Seeding failed: {exc}", file=sys.stderr)
        return EXIT_SEED_FAILED

    if isinstance(outcome, InvalidTopology):
        print("Triangulation validity assertion failed:", file=sys.stderr)
        print(format_report(outcome.report), file=sys.stderr)
        return EXIT_INVALID
    return EXIT_OK


def _console_main():
    sys.exit(main())
