import asyncio

import pytest

from algorithms import UnsupportedAlgorithmError
from config import MAX_SEQUENCE_SIZE, VALUE_MAX, VALUE_MIN
from engine.race import SIDES
from engine.session import Session, clamp_size, random_sequence
from tests.helpers import RecordingSleep


def make_session(**kwargs):
    return Session(sleep=RecordingSleep(), seed=7, **kwargs)


async def _ticks(n):
    for _ in range(n):
        await asyncio.sleep(0)


def test_initial_state():
    session = make_session()
    snap = session.snapshot()
    assert len(snap["sort"]["values"]) == 20
    assert all(VALUE_MIN <= v <= VALUE_MAX for v in snap["sort"]["values"])
    assert snap["grid"]["state"]["rows"] == 15
    assert snap["grid"]["running"] is False
    assert snap["race"]["winner"] is None
    assert snap["speed"]["label"] == "1×"
    assert snap["tone"] is None


def test_helpers():
    assert clamp_size(1) == 5
    assert clamp_size(500) == MAX_SEQUENCE_SIZE
    assert len(random_sequence(12)) == 12


def test_start_sort_commits_sorted_sequence():
    session = make_session()
    original = list(session.sequence)

    async def scenario():
        return await session.start_sort("heap")

    outcome = asyncio.run(scenario())
    assert outcome.completed
    assert session.sequence == sorted(original)
    assert session.snapshot()["sort"]["values"] == sorted(original)
    assert not session.sorting
    tone = session.snapshot()["tone"]
    assert tone["seq"] > 0
    assert (tone["frequency_hz"] - 200) % 12 == 0


def test_second_sort_is_rejected_while_running():
    session = make_session()

    async def scenario():
        task = session.begin_sort("bubble")
        assert task is not None
        await _ticks(2)
        assert session.sorting
        assert session.begin_sort("merge") is None
        return await task

    outcome = asyncio.run(scenario())
    assert outcome.completed
    assert session.sequence == sorted(session.sequence)


def test_reset_during_sort_discards_partial_result():
    session = make_session()

    async def scenario():
        task = session.begin_sort("bubble")
        await _ticks(3)
        old = session.sequence
        fresh = session.reset_sort()
        outcome = await task
        return old, fresh, outcome

    old, fresh, outcome = asyncio.run(scenario())
    assert not outcome.completed
    assert fresh is session.sequence and fresh is not old
    assert session.snapshot()["sort"]["values"] == fresh
    assert not session.sorting


def test_sort_with_new_size_deals_new_sequence():
    session = make_session()

    async def scenario():
        return await session.start_sort("insertion", size=30)

    outcome = asyncio.run(scenario())
    assert len(session.sequence) == 30
    assert outcome.values == session.sequence


def test_wrong_kind_and_unknown_algorithms_raise():
    session = make_session()

    async def scenario():
        with pytest.raises(UnsupportedAlgorithmError):
            session.begin_sort("bfs")
        with pytest.raises(UnsupportedAlgorithmError):
            session.begin_search("bubble")
        with pytest.raises(UnsupportedAlgorithmError):
            session.begin_race("bubble", "shell")

    asyncio.run(scenario())
    assert not session.sorting and not session.searching


def test_grid_edits_rejected_while_searching():
    session = make_session()
    session.clear_grid()

    async def scenario():
        task = session.begin_search("bfs")
        await _ticks(2)
        assert session.searching
        assert session.begin_search("dfs") is None
        assert session.toggle_obstacle(5, 5) is False
        assert session.regenerate_grid() is False
        assert session.clear_grid() is False
        return await task

    outcome = asyncio.run(scenario())
    assert outcome.reached
    assert outcome.path_length == 28
    assert session.snapshot()["grid"]["algorithm"] == "bfs"
    assert session.toggle_obstacle(5, 5) is True
    assert session.grid.cell((5, 5)).obstacle


def test_toggle_endpoints_and_out_of_range_are_ignored():
    session = make_session()
    assert session.toggle_obstacle(0, 0) is False
    assert session.toggle_obstacle(14, 14) is False
    assert session.toggle_obstacle(-1, 3) is False
    assert session.toggle_obstacle(3, 15) is False


def test_regenerate_and_clear_grid():
    session = make_session()
    assert session.regenerate_grid(0.5) is True
    assert session.grid.obstacle_count() > 0
    assert session.clear_grid() is True
    assert session.grid.obstacle_count() == 0
    assert not session.grid.cell(session.grid.start).obstacle


def test_set_speed_is_shared_and_clamped():
    session = make_session()
    assert session.set_speed(2) == 2
    assert session.snapshot()["speed"]["label"] == "2×"
    for _ in range(5):
        session.set_speed(2)
    assert session.speed.multiplier == 8.0


def test_race_declares_winner():
    session = make_session()

    async def scenario():
        return await session.start_race("bubble", "bubble", size=5)

    result = asyncio.run(scenario())
    assert result.winner in SIDES
    snap = session.snapshot()["race"]
    assert snap["winner"] == result.winner
    assert snap["announcement"].startswith("Winner: ")
    assert snap["left"]["values"] == sorted(snap["left"]["values"])
    assert not snap["running"]


def test_reset_race_cancels_both_sides():
    session = make_session()

    async def scenario():
        task = session.begin_race("selection", "insertion", size=10)
        await _ticks(3)
        assert session.race.running
        assert session.begin_race("bubble", "bubble") is None
        dataset = session.reset_race(size=8)
        result = await task
        return dataset, result

    dataset, result = asyncio.run(scenario())
    assert result.winner is None
    assert result.left.handle.cancelled and result.right.handle.cancelled
    assert len(dataset.values) == 8
    snap = session.snapshot()["race"]
    assert snap["winner"] is None
    assert snap["left"]["values"] == dataset.values
    assert not snap["running"]


def test_step_mode_advances_one_step_per_next_step():
    sleep = RecordingSleep()
    session = Session(sort_size=6, sleep=sleep, seed=7)
    original = list(session.sequence)

    async def scenario():
        assert session.set_step_mode(True) is True
        task = session.begin_sort("bubble")
        await _ticks(3)
        assert session.snapshot()["sort"]["awaiting_step"]
        assert sleep.calls == []

        for n in range(1, 4):
            assert session.next_step() is True
            await _ticks(3)
            assert len(sleep.calls) == n
            assert session.snapshot()["sort"]["awaiting_step"]

        advanced = 3
        while not task.done():
            if session.next_step():
                advanced += 1
            await _ticks(1)
        return await task, advanced

    outcome, advanced = asyncio.run(scenario())
    assert outcome.completed
    assert advanced == outcome.steps.total == len(sleep.calls)
    assert session.sequence == sorted(original)
    assert session.snapshot()["sort"]["step_mode"] is True


def test_next_step_without_held_sort_is_rejected():
    session = make_session()
    assert session.next_step() is False
    session.set_step_mode(True)
    assert session.next_step() is False


def test_step_mode_off_lets_held_sort_finish():
    session = make_session()

    async def scenario():
        session.set_step_mode(True)
        task = session.begin_sort("merge")
        await _ticks(3)
        assert session.step_gate.waiting
        session.set_step_mode(False)
        return await task

    outcome = asyncio.run(scenario())
    assert outcome.completed
    assert session.sequence == sorted(session.sequence)


def test_reset_releases_sort_held_in_step_mode():
    session = make_session()

    async def scenario():
        session.set_step_mode(True)
        task = session.begin_sort("quick")
        await _ticks(3)
        assert session.step_gate.waiting
        session.reset_sort()
        return await task

    outcome = asyncio.run(scenario())
    assert not outcome.completed
    assert not session.sorting
    assert session.step_gate.enabled
