"""
driver.py — Animated Execution Engine
======================================
Consumes an algorithm's step generator one Step at a time and wraps each
step with the observation / pacing / cancellation protocol:

    for step in generator:            # step already applied
        on_step(step)                 # pseudocode highlighting
        observe(step.observed)        # sorts only, feeds audio
        render(state)                 # full list or grid
        await gate.wait()             # sorts in step mode only
        await clock.wait(step.delay)  # the ONLY timed suspension
        if handle.cancelled: stop

The algorithms never sleep, render or look at handles; the driver never
compares or swaps.  Speed therefore changes pacing, never results.

    engine = AnimationEngine(PacingClock(SpeedControl()), RunRegistry())
    handle = engine.runs.start(values, "bubble")
    outcome = await engine.run_sort(AlgorithmId.BUBBLE, values, handle, render)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Union

from algorithms import AlgoInfo, AlgorithmId, AlgorithmKind, UnsupportedAlgorithmError, get_algorithm
from algorithms.path import reconstruct_path
from algorithms.step import StepCounter
from config import PATH_STEP_DELAY_MS
from engine.pacing import PacingClock, StepGate
from engine.runs import RunHandle, RunRegistry
from grid import Coord, Grid


logger = logging.getLogger(__name__)

Render  = Callable[[Any], None]
Observe = Callable[[Any], None]
OnStep  = Callable[[Any], None]     # receives the SortStep / SearchStep itself


def _noop(_state: Any) -> None:
    return None


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------
@dataclass
class SortOutcome:
    algorithm: AlgorithmId
    values:    list                      # sorted result, or partial snapshot if not completed
    completed: bool = False
    steps:     StepCounter = field(default_factory=StepCounter)


@dataclass
class SearchOutcome:
    algorithm: AlgorithmId
    path:      List[Coord] = field(default_factory=list)
    reached:   bool = False
    completed: bool = False
    steps:     StepCounter = field(default_factory=StepCounter)

    @property
    def path_length(self) -> int:
        """Hops on the path (cells - 1), 0 when there is no path."""
        return max(0, len(self.path) - 1)


Outcome = Union[SortOutcome, SearchOutcome]


def _resolve(algorithm: Union[str, AlgorithmId, AlgoInfo], kind: AlgorithmKind) -> AlgoInfo:
    info = algorithm if isinstance(algorithm, AlgoInfo) else get_algorithm(algorithm)
    if info.kind is not kind:
        raise UnsupportedAlgorithmError(f"{info.label} is not a {kind.value} algorithm")
    return info


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
class AnimationEngine:
    """
    Attributes:
        clock : PacingClock shared by every run (reads the live speed).
        runs  : RunRegistry the handles come from and are finished into.
    """

    def __init__(self, clock: PacingClock, runs: RunRegistry):
        self.clock = clock
        self.runs  = runs

    async def _pace(self, handle: RunHandle, delay_ms: float) -> bool:
        """Wait for one step; True if the run should stop."""
        await self.clock.wait(delay_ms)
        return self.runs.is_cancelled(handle)

    # ------------------------------------------------------------------
    # Sorting
    # ------------------------------------------------------------------
    async def run_sort(
        self,
        algorithm: Union[str, AlgorithmId, AlgoInfo],
        values: list,
        handle: RunHandle,
        render: Optional[Render] = None,
        observe: Optional[Observe] = None,
        delay_scale: float = 1.0,
        on_step: Optional[OnStep] = None,
        gate: Optional[StepGate] = None,
    ) -> SortOutcome:
        """
        Sort a private copy of `values`.  The caller's list is never touched;
        the sorted (or, if cancelled, partial) copy comes back in the outcome.
        With a `gate`, each rendered step waits for the gate before pacing.
        """
        try:
            info    = _resolve(algorithm, AlgorithmKind.SORT)
            render  = render or _noop
            observe = observe or _noop
            on_step = on_step or _noop
            working = list(values)
            outcome = SortOutcome(algorithm=info.id, values=working)

            for step in info.fn(working):
                outcome.steps.record(step)
                on_step(step)
                if step.observed is not None:
                    observe(step.observed)
                render(working)
                logger.debug("%s step %d: %s %s", info.key, outcome.steps.total, step.kind, step.indices)
                if gate is not None:
                    await gate.wait()
                    if self.runs.is_cancelled(handle):
                        return outcome
                if await self._pace(handle, step.delay_ms * delay_scale):
                    return outcome
            outcome.completed = True
            return outcome
        finally:
            self.runs.finish(handle)

    # ------------------------------------------------------------------
    # Searching
    # ------------------------------------------------------------------
    async def run_search(
        self,
        algorithm: Union[str, AlgorithmId, AlgoInfo],
        grid: Grid,
        handle: RunHandle,
        render: Optional[Render] = None,
        start: Optional[Coord] = None,
        goal: Optional[Coord] = None,
        delay_scale: float = 1.0,
        on_step: Optional[OnStep] = None,
    ) -> SearchOutcome:
        """
        Search `grid` in place from start to goal (default: the grid's own),
        then animate the reconstructed path start → goal.
        """
        try:
            info   = _resolve(algorithm, AlgorithmKind.SEARCH)
            render = render or _noop
            on_step = on_step or _noop
            start  = grid.start if start is None else start
            goal   = grid.goal if goal is None else goal
            outcome = SearchOutcome(algorithm=info.id)

            for step in info.fn(grid, start, goal):
                outcome.steps.record(step)
                on_step(step)
                render(grid)
                if step.is_final:
                    outcome.reached = step.kind == "found"
                    break
                logger.debug("%s expand %s (frontier=%d)", info.key, step.cell, step.frontier_size)
                if await self._pace(handle, step.delay_ms * delay_scale):
                    return outcome

            outcome.path = reconstruct_path(grid, start, goal) if outcome.reached else []
            for pos in outcome.path:
                grid.cell(pos).on_path = True
                render(grid)
                if await self._pace(handle, PATH_STEP_DELAY_MS * delay_scale):
                    return outcome

            outcome.completed = True
            logger.info(
                "%s %s: %d expansions, path of %d hop(s)",
                info.key, "reached goal" if outcome.reached else "found no path",
                outcome.steps.expansions, outcome.path_length,
            )
            return outcome
        finally:
            self.runs.finish(handle)

    # ------------------------------------------------------------------
    # Either
    # ------------------------------------------------------------------
    async def run(
        self,
        algorithm: Union[str, AlgorithmId, AlgoInfo],
        target: Any,
        handle: RunHandle,
        render: Optional[Render] = None,
        observe: Optional[Observe] = None,
        delay_scale: float = 1.0,
    ) -> Outcome:
        """Dispatch on the algorithm's kind."""
        info = algorithm if isinstance(algorithm, AlgoInfo) else get_algorithm(algorithm)
        if info.is_sort:
            return await self.run_sort(info, target, handle, render, observe, delay_scale)
        return await self.run_search(info, target, handle, render, delay_scale=delay_scale)
