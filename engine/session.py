"""
session.py — Visualizer Session (the UI control surface)
=========================================================
The Session is the ONLY object the web layer talks to.  It owns the
canonical sort sequence, the maze grid, the race data, the shared speed
control and the run registry, and it turns UI actions into engine runs:

    start_sort / reset_sort          – sorting panel
    set_step_mode / next_step        – sorting panel, one step per click
    start_search / regenerate_grid / clear_grid / toggle_obstacle
                                     – maze panel
    set_speed                        – shared ×2 / ×½ buttons
    start_race / reset_race          – race panel
    snapshot                         – everything the page needs to draw

Every `begin_*` method is synchronous: it validates, takes a handle and
schedules the run as an asyncio Task on the running loop, returning the
Task (or None when rejected because the target is busy).  The matching
`start_*` coroutines simply await that Task.

Rendering: the render / observe callbacks store *copies* of the state in
`frames`, which `snapshot()` hands to the renderer.  They never keep a
reference to live engine data.

Thread safety:
  NOT thread-safe.  All calls must come from the event-loop thread
  (main.py marshals Flask requests onto it).
"""

import asyncio
import logging
import random
from typing import Any, Dict, List, Optional, Set, Union

from algorithms import AlgorithmId, AlgorithmKind, UnsupportedAlgorithmError, get_algorithm
from config import (
    DEFAULT_OBSTACLE_DENSITY,
    DEFAULT_RACE_SIZE,
    DEFAULT_SORT_SIZE,
    GRID_SIZE,
    MAX_SEQUENCE_SIZE,
    MIN_SEQUENCE_SIZE,
    VALUE_MAX,
    VALUE_MIN,
)
from engine.driver import AnimationEngine, SearchOutcome, SortOutcome
from engine.pacing import PacingClock, Sleep, SpeedControl, StepGate
from engine.race import RaceCoordinator, RaceDataset, RaceResult
from engine.runs import RunRegistry
from grid import Grid
from ui.audio import Tone, tone_for_value


logger = logging.getLogger(__name__)

AlgorithmKey = Union[str, AlgorithmId]


def random_sequence(n: int, rng: Optional[random.Random] = None) -> List[int]:
    """n random integers in [VALUE_MIN, VALUE_MAX]."""
    rng = rng or random
    return [rng.randint(VALUE_MIN, VALUE_MAX) for _ in range(n)]


def clamp_size(n: int) -> int:
    return max(MIN_SEQUENCE_SIZE, min(MAX_SEQUENCE_SIZE, int(n)))


class Session:
    """
    Attributes:
        speed     : SpeedControl shared by every run.
        engine    : AnimationEngine (clock + run registry).
        sequence  : Canonical sort sequence (replaced on reset, never aliased).
        grid      : The maze grid.
        race      : RaceCoordinator.
        frames    : Latest rendered copies per panel: "sort", "grid",
                    "race_left", "race_right".
        last_tone : Most recent audio cue (sequence-numbered).
    """

    def __init__(
        self,
        sort_size: int = DEFAULT_SORT_SIZE,
        race_size: int = DEFAULT_RACE_SIZE,
        grid_size: int = GRID_SIZE,
        obstacle_density: float = DEFAULT_OBSTACLE_DENSITY,
        sleep: Optional[Sleep] = None,
        seed: Optional[int] = None,
    ):
        self.rng    = random.Random(seed)
        self.speed  = SpeedControl()
        clock       = PacingClock(self.speed) if sleep is None else PacingClock(self.speed, sleep)
        self.runs   = RunRegistry()
        self.engine = AnimationEngine(clock, self.runs)
        self.race   = RaceCoordinator(self.engine)
        self.step_gate = StepGate()

        self.sequence: List[int] = random_sequence(clamp_size(sort_size), self.rng)
        self.grid = Grid(grid_size, grid_size)
        self.grid.generate_obstacles(obstacle_density, seed=self.rng.randrange(2 ** 32))

        self.race_size = clamp_size(race_size)
        self.race_dataset = RaceDataset(random_sequence(self.race_size, self.rng), self.grid.copy())
        self.race_algorithms = (AlgorithmId.BUBBLE.value, AlgorithmId.BUBBLE.value)

        self.sort_algorithm: AlgorithmId = AlgorithmId.BUBBLE
        self.search_algorithm: Optional[AlgorithmId] = None
        self.pseudocode_lines: Dict[str, int] = {"sort": -1, "grid": -1}
        self.last_tone: Optional[Tone] = None
        self._tone_seq = 0
        self._tasks: Set[asyncio.Task] = set()

        self.frames: Dict[str, Any] = {}
        self._render_sort(self.sequence)
        self._render_grid(self.grid)
        self._render_race_idle()

    # ==================================================================
    # SORTING
    # ==================================================================
    @property
    def sorting(self) -> bool:
        return self.runs.is_active(self.sequence)

    def begin_sort(self, algorithm: AlgorithmKey, size: Optional[int] = None) -> Optional[asyncio.Task]:
        info = self._require(algorithm, AlgorithmKind.SORT)
        if self.sorting:
            logger.info("Sort already running; ignoring start of %s", info.key)
            return None
        if size is not None and clamp_size(size) != len(self.sequence):
            self.reset_sort(size)

        target = self.sequence
        handle = self.runs.start(target, f"sort {info.key}")
        if handle is None:
            return None
        self.sort_algorithm = info.id

        async def _run() -> SortOutcome:
            outcome = await self.engine.run_sort(
                info, target, handle, render=self._render_sort, observe=self._observe,
                on_step=lambda step: self._trace("sort", step),
                gate=self.step_gate,
            )
            # only a natural completion on the still-current list is committed
            if outcome.completed and target is self.sequence:
                target[:] = outcome.values
                self._render_sort(target)
            return outcome

        return self._spawn(_run())

    async def start_sort(self, algorithm: AlgorithmKey, size: Optional[int] = None) -> Optional[SortOutcome]:
        task = self.begin_sort(algorithm, size)
        return await task if task is not None else None

    def reset_sort(self, size: Optional[int] = None) -> List[int]:
        """Cancel any sort in progress and deal a fresh sequence."""
        self.runs.cancel_target(self.sequence)
        # a run held by step mode has to wake up to see its cancellation
        self.step_gate.release()
        n = clamp_size(size) if size is not None else len(self.sequence)
        self.sequence = random_sequence(n, self.rng)
        self._render_sort(self.sequence)
        return self.sequence

    def set_step_mode(self, on: bool) -> bool:
        """Hold the sort after every step until next_step(); off lets it play on."""
        return self.step_gate.set_enabled(on)

    def next_step(self) -> bool:
        """Advance a held sort by one step; False when no sort is waiting."""
        return self.step_gate.advance()

    # ==================================================================
    # SEARCHING
    # ==================================================================
    @property
    def searching(self) -> bool:
        return self.runs.is_active(self.grid)

    def begin_search(self, algorithm: AlgorithmKey) -> Optional[asyncio.Task]:
        info = self._require(algorithm, AlgorithmKind.SEARCH)
        handle = self.runs.start(self.grid, f"search {info.key}")
        if handle is None:
            return None
        self.search_algorithm = info.id
        return self._spawn(self.engine.run_search(
            info, self.grid, handle, render=self._render_grid,
            on_step=lambda step: self._trace("grid", step),
        ))

    async def start_search(self, algorithm: AlgorithmKey) -> Optional[SearchOutcome]:
        task = self.begin_search(algorithm)
        return await task if task is not None else None

    def regenerate_grid(self, density: float = DEFAULT_OBSTACLE_DENSITY) -> bool:
        """New random obstacles; rejected while a search is running."""
        if self.searching:
            logger.info("Search running; ignoring grid regeneration")
            return False
        self.grid.generate_obstacles(density, seed=self.rng.randrange(2 ** 32))
        self.search_algorithm = None
        self._render_grid(self.grid)
        return True

    def clear_grid(self) -> bool:
        if self.searching:
            logger.info("Search running; ignoring grid clear")
            return False
        self.grid.clear_obstacles()
        self.search_algorithm = None
        self._render_grid(self.grid)
        return True

    def toggle_obstacle(self, row: int, col: int) -> bool:
        """Flip one wall; rejected while a search is running or for start / goal."""
        if self.searching:
            logger.info("Search running; ignoring obstacle toggle at (%s, %s)", row, col)
            return False
        if not self.grid.toggle_obstacle(row, col):
            return False
        self.grid.reset_search_state()
        self._render_grid(self.grid)
        return True

    # ==================================================================
    # SPEED
    # ==================================================================
    def set_speed(self, factor: float) -> float:
        """Scale the shared multiplier (×2 faster, ×0.5 slower)."""
        return self.speed.scale(factor)

    # ==================================================================
    # RACE
    # ==================================================================
    def begin_race(
        self,
        algorithm_a: AlgorithmKey,
        algorithm_b: AlgorithmKey,
        size: Optional[int] = None,
    ) -> Optional[asyncio.Task]:
        get_algorithm(algorithm_a)
        get_algorithm(algorithm_b)
        if self.race.running:
            logger.info("Race already running; ignoring start")
            return None

        self.race_size = clamp_size(size) if size is not None else self.race_size
        self.race_dataset = RaceDataset(random_sequence(self.race_size, self.rng), self.grid.copy())
        result = self.race.prepare(algorithm_a, algorithm_b, self.race_dataset)
        if result is None:
            return None
        self.race_algorithms = (result.left.algorithm.key, result.right.algorithm.key)
        self._render_race_side("race_left", result.left.target)
        self._render_race_side("race_right", result.right.target)

        return self._spawn(self.race.run(
            result,
            render_left=lambda state: self._render_race_side("race_left", state),
            render_right=lambda state: self._render_race_side("race_right", state),
        ))

    async def start_race(
        self,
        algorithm_a: AlgorithmKey,
        algorithm_b: AlgorithmKey,
        size: Optional[int] = None,
    ) -> Optional[RaceResult]:
        task = self.begin_race(algorithm_a, algorithm_b, size)
        return await task if task is not None else None

    def reset_race(self, size: Optional[int] = None) -> RaceDataset:
        """Cancel both race runs FIRST, then deal fresh, value-equal data."""
        self.race.reset()
        self.race.current = None
        if size is not None:
            self.race_size = clamp_size(size)
        self.race_dataset = RaceDataset(random_sequence(self.race_size, self.rng), self.grid.copy())
        self._render_race_idle()
        return self.race_dataset

    # ==================================================================
    # SNAPSHOT
    # ==================================================================
    def snapshot(self) -> Dict[str, Any]:
        """Plain-data view of every panel (copies, safe to serialise)."""
        race = self.race.current
        return {
            "sort": {
                "values":    list(self.frames["sort"]),
                "running":   self.sorting,
                "algorithm": self.sort_algorithm.value,
                "pseudocode_line": self.pseudocode_lines["sort"],
                "step_mode": self.step_gate.enabled,
                "awaiting_step": self.step_gate.waiting,
            },
            "grid": {
                "state":     self.frames["grid"],
                "running":   self.searching,
                "algorithm": self.search_algorithm.value if self.search_algorithm else None,
                "pseudocode_line": self.pseudocode_lines["grid"],
            },
            "race": {
                "left":       self.frames["race_left"],
                "right":      self.frames["race_right"],
                "algorithms": list(self.race_algorithms),
                "running":    self.race.running,
                "winner":     race.winner if race else None,
                "announcement": race.announcement if race else "",
            },
            "speed": {
                "multiplier": self.speed.multiplier,
                "label":      self.speed.label,
            },
            "tone": self.last_tone.to_dict() if self.last_tone else None,
        }

    # ==================================================================
    # Internal
    # ==================================================================
    def _require(self, algorithm: AlgorithmKey, kind: AlgorithmKind):
        info = get_algorithm(algorithm)
        if info.kind is not kind:
            raise UnsupportedAlgorithmError(f"{info.label} is not a {kind.value} algorithm")
        return info

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Animation task failed", exc_info=task.exception())

    def _trace(self, panel: str, step: Any) -> None:
        self.pseudocode_lines[panel] = step.pseudocode_line

    def _observe(self, value: Any) -> None:
        self._tone_seq += 1
        self.last_tone = tone_for_value(value, seq=self._tone_seq)

    def _render_sort(self, values: List[Any]) -> None:
        self.frames["sort"] = list(values)

    def _render_grid(self, grid: Grid) -> None:
        self.frames["grid"] = grid.to_dict()

    def _render_race_side(self, key: str, state: Any) -> None:
        self.frames[key] = state.to_dict() if isinstance(state, Grid) else {"values": list(state)}

    def _render_race_idle(self) -> None:
        for key, algorithm in zip(("race_left", "race_right"), self.race_algorithms):
            self._render_race_side(key, self.race_dataset.copy_for(get_algorithm(algorithm)))
