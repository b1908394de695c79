import asyncio

import pytest

from engine.race import SIDES, RaceCoordinator, RaceDataset
from grid import Grid
from tests.helpers import make_engine


def test_bubble_vs_bubble_declares_exactly_one_winner():
    engine, _, sleep = make_engine()
    coordinator = RaceCoordinator(engine)
    dataset = RaceDataset([40, 10, 30, 20])

    result = asyncio.run(coordinator.race("bubble", "bubble", dataset))

    assert result.winner in SIDES
    assert coordinator.winner == result.winner
    assert result.left.outcome.completed and result.right.outcome.completed
    assert result.left.outcome.values == result.right.outcome.values == [10, 20, 30, 40]
    assert result.announcement == f"Winner: {result.winner.capitalize()} (bubble)"
    assert dataset.values == [40, 10, 30, 20]
    assert not coordinator.running


def test_race_runs_at_half_the_solo_delay():
    engine, _, sleep = make_engine()
    coordinator = RaceCoordinator(engine)
    asyncio.run(coordinator.race("bubble", "bubble", RaceDataset([40, 10, 30, 20])))
    assert len(sleep.calls) == 12
    assert all(c == pytest.approx(0.03) for c in sleep.calls)


def test_sides_work_on_independent_copies():
    engine, _, _ = make_engine()
    coordinator = RaceCoordinator(engine)
    result = coordinator.prepare("merge", "heap", RaceDataset([3, 2, 1]))
    assert result.left.target == result.right.target == [3, 2, 1]
    assert result.left.target is not result.right.target
    asyncio.run(coordinator.run(result))
    assert result.winner in SIDES


def test_cancel_loser_stops_the_other_side():
    engine, _, _ = make_engine()
    coordinator = RaceCoordinator(engine, cancel_loser=True)
    result = asyncio.run(coordinator.race("merge", "bubble", RaceDataset([9, 4, 7, 1, 8, 2])))
    loser = result.right if result.winner == "left" else result.left
    assert loser.handle.cancelled
    assert not loser.outcome.completed
    assert result.winner_side.outcome.completed


def test_reset_cancels_both_sides_and_no_winner_is_declared():
    engine, _, sleep = make_engine()
    coordinator = RaceCoordinator(engine)

    def reset_on_third(n):
        if n == 3:
            coordinator.reset()

    sleep.on_call = reset_on_third
    result = asyncio.run(coordinator.race("bubble", "selection", RaceDataset([40, 10, 30, 20, 50, 5])))

    assert result.winner is None
    assert result.announcement == ""
    assert result.left.handle.cancelled and result.right.handle.cancelled
    assert not result.left.handle.finished and not result.right.handle.finished
    assert not coordinator.running


def test_second_race_rejected_while_running():
    engine, _, _ = make_engine()
    coordinator = RaceCoordinator(engine)
    first = coordinator.prepare("bubble", "quick", RaceDataset([2, 1]))
    assert coordinator.running
    assert coordinator.prepare("heap", "merge", RaceDataset([2, 1])) is None
    assert coordinator.current is first
    asyncio.run(coordinator.run(first))
    assert not coordinator.running


def test_search_race_uses_separate_grids():
    engine, _, _ = make_engine()
    coordinator = RaceCoordinator(engine)
    grid = Grid(6, 6)
    result = asyncio.run(coordinator.race("bfs", "dijkstra", RaceDataset([], grid)))
    assert result.winner in SIDES
    assert result.left.target is not grid and result.right.target is not grid
    assert not any(c.visited for c in grid)
    assert result.left.outcome.path_length == result.right.outcome.path_length == 10


def test_search_side_without_grid_is_rejected():
    engine, _, _ = make_engine()
    coordinator = RaceCoordinator(engine)
    with pytest.raises(ValueError):
        coordinator.prepare("bubble", "bfs", RaceDataset([1, 2]))
    assert not coordinator.running
