"""
race.py — Side-by-Side Race Coordinator
========================================
Runs two algorithms at once, each on its OWN copy of value-equal data
and with its own render target, and announces exactly one winner: the
first side to reach natural completion.

    coordinator = RaceCoordinator(engine)
    result = await coordinator.race("bubble", "merge", RaceDataset(values, grid),
                                    render_left=..., render_right=...)
    result.winner          # "left" / "right"

The loser keeps animating to the end (unless `cancel_loser=True`), but
its completion can never overwrite the recorded winner.  `reset()`
cancels both sides first so a stale run can only ever touch data that
has already been discarded.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from algorithms import AlgoInfo, AlgorithmId, get_algorithm
from config import RACE_DELAY_SCALE
from engine.driver import AnimationEngine, Observe, Outcome, Render
from engine.runs import RunHandle
from grid import Grid


logger = logging.getLogger(__name__)

SIDES = ("left", "right")


# ---------------------------------------------------------------------------
# Data
# ---------------------------------------------------------------------------
@dataclass
class RaceDataset:
    """Base data both sides start from.  Each side gets its own copy."""
    values: List[Any]
    grid:   Optional[Grid] = None

    def copy_for(self, info: AlgoInfo) -> Any:
        if info.is_sort:
            return list(self.values)
        if self.grid is None:
            raise ValueError(f"{info.label} needs a grid but the race dataset has none")
        return self.grid.copy()


@dataclass
class RaceSide:
    name:      str
    algorithm: AlgoInfo
    target:    Any
    handle:    RunHandle
    outcome:   Optional[Outcome] = None


@dataclass
class RaceResult:
    left:    RaceSide
    right:   RaceSide
    handle:  Optional[RunHandle] = None      # the race as a whole
    winner:  Optional[str] = None

    @property
    def winner_side(self) -> Optional[RaceSide]:
        if self.winner is None:
            return None
        return self.left if self.winner == "left" else self.right

    @property
    def announcement(self) -> str:
        side = self.winner_side
        if side is None:
            return ""
        return f"Winner: {side.name.capitalize()} ({side.algorithm.key})"


# ---------------------------------------------------------------------------
# Coordinator
# ---------------------------------------------------------------------------
class RaceCoordinator:
    """
    Attributes:
        engine       : Shared AnimationEngine (and therefore shared speed).
        delay_scale  : Step-delay factor for race runs.
        cancel_loser : Stop the losing side as soon as a winner is declared.
        current      : RaceResult of the race in progress / last race.
    """

    def __init__(
        self,
        engine: AnimationEngine,
        delay_scale: float = RACE_DELAY_SCALE,
        cancel_loser: bool = False,
    ):
        self.engine       = engine
        self.delay_scale  = delay_scale
        self.cancel_loser = cancel_loser
        self.current: Optional[RaceResult] = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def running(self) -> bool:
        return self.engine.runs.is_active(self)

    @property
    def winner(self) -> Optional[str]:
        return self.current.winner if self.current else None

    # ------------------------------------------------------------------
    # Race
    # ------------------------------------------------------------------
    def prepare(
        self,
        algorithm_a: Union[str, AlgorithmId],
        algorithm_b: Union[str, AlgorithmId],
        dataset: RaceDataset,
    ) -> Optional[RaceResult]:
        """
        Validate both algorithms, copy the data and take the handles.
        Returns None (and changes nothing) if a race is already running.
        """
        info_a = get_algorithm(algorithm_a)
        info_b = get_algorithm(algorithm_b)
        targets = [dataset.copy_for(info_a), dataset.copy_for(info_b)]

        race_handle = self.engine.runs.start(self, f"race {info_a.key} vs {info_b.key}")
        if race_handle is None:
            return None

        sides = []
        for name, info, target in zip(SIDES, (info_a, info_b), targets):
            handle = self.engine.runs.start(target, f"race-{name} {info.key}")
            sides.append(RaceSide(name=name, algorithm=info, target=target, handle=handle))
        self.current = RaceResult(left=sides[0], right=sides[1], handle=race_handle)
        return self.current

    async def run(
        self,
        result: RaceResult,
        render_left: Optional[Render] = None,
        render_right: Optional[Render] = None,
        observe: Optional[Observe] = None,
    ) -> RaceResult:
        """Drive both sides of a prepared race concurrently until both settle."""
        try:
            await asyncio.gather(
                self._run_side(result, result.left, render_left, observe),
                self._run_side(result, result.right, render_right, observe),
            )
        finally:
            self.engine.runs.finish(result.handle)
        if result.winner is None:
            logger.info("Race ended without a winner (reset before completion)")
        return result

    async def race(
        self,
        algorithm_a: Union[str, AlgorithmId],
        algorithm_b: Union[str, AlgorithmId],
        dataset: RaceDataset,
        render_left: Optional[Render] = None,
        render_right: Optional[Render] = None,
        observe: Optional[Observe] = None,
    ) -> Optional[RaceResult]:
        """prepare() + run().  None if a race is already in progress."""
        result = self.prepare(algorithm_a, algorithm_b, dataset)
        if result is None:
            return None
        return await self.run(result, render_left, render_right, observe)

    def reset(self) -> None:
        """Cancel both sides (and the race itself) before new data is generated."""
        if self.current is None:
            return
        for side in (self.current.left, self.current.right):
            self.engine.runs.cancel(side.handle)
        self.engine.runs.cancel(self.current.handle)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    async def _run_side(
        self,
        result: RaceResult,
        side: RaceSide,
        render: Optional[Render],
        observe: Optional[Observe],
    ) -> None:
        handle = side.handle

        def guarded_render(state: Any) -> None:
            # a reset side may still finish its in-progress step; keep it off screen
            if render is not None and not handle.cancelled:
                render(state)

        side.outcome = await self.engine.run(
            side.algorithm, side.target, handle,
            render=guarded_render, observe=observe, delay_scale=self.delay_scale,
        )
        if side.outcome.completed:
            self._declare(result, side)

    def _declare(self, result: RaceResult, side: RaceSide) -> None:
        # one-shot: only the first natural completion is recorded
        if result.winner is not None:
            return
        result.winner = side.name
        logger.info("Race won by %s (%s)", side.name, side.algorithm.key)
        if self.cancel_loser:
            loser = result.right if side is result.left else result.left
            self.engine.runs.cancel(loser.handle)
