"""
step.py — Algorithm Step Snapshots
===================================
Every algorithm is a generator that yields one Step per instrumented
event, AFTER the event has been applied to the data it works on:

    • SortStep   – a comparison, swap, shift or write on the working list
    • SearchStep – a frontier expansion on the grid, plus a terminal step

The generator never sleeps, renders or checks cancellation.  Those are
the driver's job (engine/driver.py), so the algorithm bodies stay
testable by simply exhausting the generator.

Design decisions:
  - Steps are frozen dataclasses.  The generator is the only writer of
    the list / grid; the driver and renderer are pure readers.
  - `delay_ms` is the nominal pause the algorithm asks for after this
    step.  It is tuned for visual clarity and has no effect on results.
  - `observed` carries the value being compared (sort only) so the
    driver can feed the audio callback.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from grid.cell import Coord


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------
SORT_KINDS = ("compare", "swap", "shift", "write", "pivot")


@dataclass(frozen=True)
class SortStep:
    """
    Attributes:
        kind            : One of SORT_KINDS.
        indices         : Positions touched by this step (for highlighting).
        observed        : Value being compared, or None for pure mutations.
        delay_ms        : Nominal pause after this step.
        pseudocode_line : 0-based index into the algorithm's PSEUDOCODE.
        explanation     : Plain-English description of the step.
    """

    kind:            str
    indices:         Tuple[int, ...]  = ()
    observed:        Optional[Any]    = None
    delay_ms:        float            = 40.0
    pseudocode_line: int              = 0
    explanation:     str              = ""


# ---------------------------------------------------------------------------
# Searching
# ---------------------------------------------------------------------------
SEARCH_KINDS = ("expand", "found", "exhausted")


@dataclass(frozen=True)
class SearchStep:
    """
    Attributes:
        kind            : "expand" for a frontier pop, then exactly one
                          terminal "found" / "exhausted" step.
        cell            : Coordinate just expanded (None on "exhausted").
        frontier_size   : Entries left in the queue / stack / heap.
        delay_ms        : Nominal pause after this step (0 for terminals).
        pseudocode_line : 0-based index into the algorithm's PSEUDOCODE.
        explanation     : Plain-English description of the step.
    """

    kind:            str
    cell:            Optional[Coord]  = None
    frontier_size:   int              = 0
    delay_ms:        float            = 0.0
    pseudocode_line: int              = 0
    explanation:     str              = ""

    @property
    def is_final(self) -> bool:
        return self.kind in ("found", "exhausted")


@dataclass
class StepCounter:
    """Running tally the drivers keep while consuming a generator."""
    comparisons: int = 0
    mutations:   int = 0
    expansions:  int = 0
    by_kind:     dict = field(default_factory=dict)

    def record(self, step) -> None:
        self.by_kind[step.kind] = self.by_kind.get(step.kind, 0) + 1
        if isinstance(step, SortStep):
            if step.kind == "compare":
                self.comparisons += 1
            else:
                self.mutations += 1
        elif step.kind == "expand":
            self.expansions += 1

    @property
    def total(self) -> int:
        return sum(self.by_kind.values())
