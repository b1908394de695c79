from engine.runs import RunRegistry


def test_second_start_on_same_target_is_rejected():
    runs = RunRegistry()
    values = [3, 1, 2]
    first = runs.start(values, "bubble")
    assert first is not None and first.active
    assert runs.start(values, "merge") is None
    assert runs.handle_for(values) is first


def test_distinct_targets_run_independently():
    runs = RunRegistry()
    a, b = [1, 2], [1, 2]
    assert runs.start(a) is not None
    assert runs.start(b) is not None
    assert len(runs) == 2


def test_finish_after_natural_completion():
    runs = RunRegistry()
    values = [1]
    handle = runs.start(values)
    runs.finish(handle)
    assert handle.finished
    assert not handle.cancelled
    assert not runs.is_active(values)
    assert len(runs) == 0


def test_cancelled_run_is_never_finished():
    runs = RunRegistry()
    values = [1]
    handle = runs.start(values)
    runs.cancel(handle)
    assert runs.is_cancelled(handle)
    assert not runs.is_active(values)
    runs.finish(handle)
    assert handle.cancelled
    assert not handle.finished
    assert handle.released


def test_cancel_is_idempotent_and_accepts_none():
    runs = RunRegistry()
    handle = runs.start([1])
    runs.cancel(handle)
    runs.cancel(handle)
    runs.cancel(None)
    assert handle.cancelled


def test_finish_twice_is_harmless():
    runs = RunRegistry()
    handle = runs.start([1])
    runs.finish(handle)
    runs.finish(handle)
    assert handle.finished


def test_cancelled_target_can_be_restarted_and_stale_finish_keeps_new_holder():
    runs = RunRegistry()
    values = [1, 2]
    old = runs.start(values)
    runs.cancel_target(values)
    new = runs.start(values)
    assert new is not None and new is not old
    runs.finish(old)
    assert runs.handle_for(values) is new
    assert runs.is_active(values)
