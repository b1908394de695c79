import time

import pytest

from engine import BackgroundLoop, Session
from main import create_app
from tests.helpers import RecordingSleep


@pytest.fixture
def client():
    bg = BackgroundLoop().start()
    session = Session(sleep=RecordingSleep(), seed=3)
    app = create_app(session, bg)
    app.testing = True
    with app.test_client() as c:
        yield c
    bg.stop()


def wait_until_idle(client, panel, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        state = client.get("/api/state").get_json()
        if not state[panel]["running"]:
            return state
        time.sleep(0.01)
    raise AssertionError(f"{panel} still running after {timeout}s")


def test_index_renders_page(client):
    res = client.get("/")
    assert res.status_code == 200
    body = res.get_data(as_text=True)
    assert "Algorithm Animator" in body
    assert "btn-sort-run" in body


def test_state_carries_svg_for_every_panel(client):
    state = client.get("/api/state").get_json()
    for key in ("sort", "grid", "race_left", "race_right"):
        assert state["svg"][key].startswith("<svg")
    assert state["speed"]["label"] == "1×"


def test_sort_start_runs_to_completion(client):
    res = client.post("/api/sort/start", json={"algorithm": "merge"})
    assert res.status_code == 200
    assert res.get_json() == {"accepted": True}
    state = wait_until_idle(client, "sort")
    values = state["sort"]["values"]
    assert values == sorted(values)


def test_sort_reset_resizes(client):
    res = client.post("/api/sort/reset", json={"size": 12})
    assert res.get_json()["accepted"] is True
    assert len(client.get("/api/state").get_json()["sort"]["values"]) == 12


@pytest.mark.parametrize("payload", [
    {"algorithm": "shell"},
    {"algorithm": "bfs"},
    {},
    {"algorithm": "bubble", "size": "many"},
])
def test_sort_start_bad_input(client, payload):
    res = client.post("/api/sort/start", json=payload)
    assert res.status_code == 400
    assert "error" in res.get_json()


def test_search_and_grid_routes(client):
    assert client.post("/api/grid/clear").get_json() == {"accepted": True}
    assert client.post("/api/search/start", json={"algorithm": "dijkstra"}).get_json() == {"accepted": True}
    state = wait_until_idle(client, "grid")
    assert state["grid"]["algorithm"] == "dijkstra"
    assert any(cell["on_path"] for row in state["grid"]["state"]["cells"] for cell in row)

    assert client.post("/api/grid/generate", json={"density": 0.3}).get_json() == {"accepted": True}
    assert client.post("/api/grid/generate", json={"density": 2}).status_code == 400
    assert client.post("/api/search/start", json={"algorithm": "quick"}).status_code == 400


def test_toggle_route(client):
    client.post("/api/grid/clear")
    assert client.post("/api/grid/toggle", json={"row": 3, "col": 4}).get_json() == {"accepted": True}
    assert client.post("/api/grid/toggle", json={"row": 0, "col": 0}).get_json() == {"accepted": False}
    assert client.post("/api/grid/toggle", json={"row": 99, "col": 0}).get_json() == {"accepted": False}
    assert client.post("/api/grid/toggle", json={"row": 1}).status_code == 400
    cells = client.get("/api/state").get_json()["grid"]["state"]["cells"]
    assert cells[3][4]["obstacle"] is True


def test_speed_route(client):
    res = client.post("/api/speed", json={"factor": 2})
    assert res.get_json() == {"accepted": True, "multiplier": 2.0, "label": "2×"}
    assert client.post("/api/speed", json={"factor": 0}).status_code == 400
    assert client.post("/api/speed", json={"factor": "fast"}).status_code == 400
    assert client.post("/api/speed", json={}).status_code == 400


def test_race_routes(client):
    res = client.post("/api/race/start", json={"a": "bubble", "b": "heap", "size": 6})
    assert res.get_json() == {"accepted": True}
    state = wait_until_idle(client, "race")
    assert state["race"]["winner"] in ("left", "right")
    assert state["race"]["announcement"].startswith("Winner: ")

    assert client.post("/api/race/reset", json={"size": 7}).get_json() == {"accepted": True}
    state = client.get("/api/state").get_json()
    assert state["race"]["winner"] is None
    assert len(state["race"]["left"]["values"]) == 7
    assert client.post("/api/race/start", json={"a": "bubble"}).status_code == 400


def test_pseudocode_route(client):
    html = client.get("/api/pseudocode/heap").get_json()["html"]
    assert "Heap Sort" in html
    assert client.get("/api/pseudocode/nope").status_code == 400


def wait_for(client, predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        state = client.get("/api/state").get_json()
        if predicate(state):
            return state
        time.sleep(0.01)
    raise AssertionError(f"state never matched within {timeout}s")


def test_step_mode_routes(client):
    assert "btn-step-mode" in client.get("/").get_data(as_text=True)
    assert client.post("/api/sort/next").get_json() == {"accepted": False}
    res = client.post("/api/sort/step-mode", json={"on": True})
    assert res.get_json() == {"accepted": True, "step_mode": True}

    client.post("/api/sort/start", json={"algorithm": "selection", "size": 5})
    wait_for(client, lambda s: s["sort"]["awaiting_step"])
    assert client.post("/api/sort/next").get_json() == {"accepted": True}
    state = wait_for(client, lambda s: s["sort"]["awaiting_step"])
    assert state["sort"]["running"] and state["sort"]["step_mode"]

    client.post("/api/sort/step-mode", json={"on": False})
    state = wait_until_idle(client, "sort")
    assert state["sort"]["values"] == sorted(state["sort"]["values"])
    assert client.post("/api/sort/step-mode", json={"on": "yes"}).status_code == 400


def test_search_pseudocode_follows_the_maze(client):
    state = client.get("/api/state").get_json()
    assert state["pseudocode"]["grid"] == ""
    assert 'id="grid-pseudocode"' in client.get("/").get_data(as_text=True)

    client.post("/api/grid/clear")
    client.post("/api/search/start", json={"algorithm": "bfs"})
    state = wait_until_idle(client, "grid")
    html = state["pseudocode"]["grid"]
    assert "Breadth" in html
    assert "pc-line active" in html
