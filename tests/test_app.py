import sys
import threading

import pytest
from flask import session

import main
from main import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def run_until_done(client, limit=1000):
    data = None
    for _ in range(limit):
        data = client.post("/api/step", json={}).get_json()
        if data["outcome"] != "running":
            return data
    return data


def test_index_renders_board(client):
    res = client.get("/")
    assert res.status_code == 200
    assert b"<svg" in res.data
    assert b"Breadth-First Search" in res.data


def test_algorithms_endpoint(client):
    keys = [a["key"] for a in client.get("/api/algorithms").get_json()]
    assert keys == ["bfs", "dfs", "greedy", "astar"]


def test_initial_state_is_idle(client):
    data = client.get("/api/state").get_json()
    assert data["driver"] == "idle"
    assert data["board"]["rows"] == 30
    assert data["outcome"] is None


def test_step_lazily_starts_a_paused_run(client):
    client.post("/api/grid/resize", json={"size": 10})
    data = client.post("/api/step", json={"algo": "bfs"}).get_json()
    assert data["algo"] == "bfs"
    assert data["driver"] == "paused"
    assert data["metrics"]["steps_taken"] == 1

    data = run_until_done(client)
    assert data["outcome"] == "found"
    assert data["driver"] == "finished"
    assert data["metrics"]["path_length"] == 5
    assert data["path"][0] == [5, 2] and data["path"][-1] == [5, 7]


def test_walled_off_goal_reports_no_path(client):
    client.post("/api/grid/resize", json={"size": 10})
    for r in range(10):
        client.post("/api/grid/cell", json={"row": r, "col": 5, "tool": "wall"})
    client.post("/api/run", json={"algo": "astar"})
    client.post("/api/play")
    data = run_until_done(client)
    assert data["outcome"] == "no_path"
    assert data["path"] is None
    assert data["status"] == "Done: no path"


def test_run_starts_playing_and_reset_goes_idle(client):
    data = client.post("/api/run", json={"algo": "greedy"}).get_json()
    assert data["driver"] == "playing"
    assert client.post("/api/tick").get_json()["taken"] >= 0
    assert client.post("/api/reset").get_json()["driver"] == "idle"


def test_board_editing(client):
    client.post("/api/grid/resize", json={"size": 20})
    data = client.post("/api/grid/cell", json={"row": 0, "col": 0, "tool": "start"}).get_json()
    assert data["board"]["start"] == [0, 0]
    data = client.post("/api/grid/maze", json={"wall_prob": 0.5, "seed": 4}).get_json()
    assert data["board"]["walls"]
    assert [0, 0] not in data["board"]["walls"]
    data = client.post("/api/grid/clear").get_json()
    assert data["board"]["walls"] == []


def test_bad_requests(client):
    assert client.post("/api/grid/cell", json={"row": 0, "col": 0, "tool": "paint"}).status_code == 400
    assert client.post("/api/grid/cell", json={"row": 99, "col": 0}).status_code == 400
    assert client.post("/api/grid/cell", json={}).status_code == 400
    assert client.post("/api/grid/resize", json={"size": 7}).status_code == 400
    res = client.post("/api/run", json={"algo": "dijkstra"})
    assert res.status_code == 400
    assert "dijkstra" in res.get_json()["error"]


def test_speed_endpoint(client):
    assert client.post("/api/speed", json={"rate": 60}).get_json()["rate"] == 60
    assert client.post("/api/speed", json={"preset": "slow"}).get_json()["rate"] == 2


def test_compare_endpoint(client):
    client.post("/api/grid/resize", json={"size": 20})
    data = client.post("/api/compare", json={"left": "bfs", "right": "astar"}).get_json()
    assert data["winner_path"] == "tie"
    assert data["winner_expanded"] == "A* Search"
    assert data["left"]["algo_key"] == "bfs"


def test_algorithms_endpoint_carries_heuristic_and_complexity(client):
    cards = {a["key"]: a for a in client.get("/api/algorithms").get_json()}
    assert cards["astar"]["has_heuristic"] and cards["greedy"]["has_heuristic"]
    assert not cards["bfs"]["has_heuristic"]
    assert cards["bfs"]["complexity_time"] == "O(V + E)"
    assert cards["astar"]["complexity_time"] == "O(V log V)"


def test_state_carries_astar_scores(client):
    client.post("/api/grid/resize", json={"size": 10})
    assert client.get("/api/state").get_json()["scores"] is None

    data = client.post("/api/step", json={"algo": "astar"}).get_json()
    rows = {tuple(r["cell"]): r for r in data["scores"]}
    # start (5, 2), goal (5, 7): first expansion puts its right neighbour at g=1, h=4
    assert rows[(5, 2)] == {"cell": [5, 2], "g": 0, "h": 5, "f": 5}
    assert rows[(5, 3)] == {"cell": [5, 3], "g": 1, "h": 4, "f": 5}

    client.post("/api/reset")
    data = client.post("/api/step", json={"algo": "bfs"}).get_json()
    assert data["scores"] is None


@pytest.mark.parametrize("url, body", [
    ("/api/grid/resize", {"size": None}),
    ("/api/grid/resize", {"size": [10]}),
    ("/api/grid/maze", {"seed": [1]}),
    ("/api/grid/maze", {"wall_prob": None}),
    ("/api/speed", {"rate": None}),
    ("/api/speed", {"rate": [60]}),
    ("/api/speed", {"preset": ["slow"]}),
])
def test_wrongly_typed_fields_are_rejected(client, url, body):
    res = client.post(url, json=body)
    assert res.status_code == 400
    assert "error" in res.get_json()


def test_workspaces_are_bounded(client):
    saved = app.config["MAX_WORKSPACES"]
    app.config["MAX_WORKSPACES"] = 5
    try:
        main._WORKSPACES.clear()
        # a session that keeps coming back is the most recent one, never evicted
        client.post("/api/grid/resize", json={"size": 10})
        for _ in range(20):
            app.test_client().get("/api/state")
            assert client.get("/api/state").get_json()["board"]["rows"] == 10
        assert len(main._WORKSPACES) == 5
    finally:
        app.config["MAX_WORKSPACES"] = saved
        main._WORKSPACES.clear()


def test_concurrent_steps_keep_the_run_consistent():
    with app.test_request_context("/api/state"):
        ws = main.get_workspace()
        sid = session["sid"]
    ws.board.resize(10)

    def hammer():
        for _ in range(60):
            with app.test_request_context("/api/step", method="POST", json={"algo": "bfs"}):
                session["sid"] = sid
                main.api_step()

    switch = sys.getswitchinterval()
    sys.setswitchinterval(1e-6)
    try:
        threads = [threading.Thread(target=hammer) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
    finally:
        sys.setswitchinterval(switch)

    runner = ws.driver.runner
    assert runner.done
    assert runner.snapshot.is_final
    assert runner.snapshot.step_number == runner.steps_taken - 1
    assert runner.path is not None and len(runner.path) - 1 == 5
