"""JSON API smoke tests through Flask's test client."""

import pytest

from main import _recordings, app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def test_algorithms_metadata(client):
    res = client.get("/api/algorithms")
    assert res.status_code == 200
    keys = [a["key"] for a in res.get_json()["algorithms"]]
    assert keys == ["bubble", "selection", "insertion", "merge", "quick", "heap"]
    assert res.get_json()["algorithms"][0]["complexity"]["timeBest"] == "O(n)"


def test_generate_and_import_array(client):
    res = client.post("/api/array/generate", json={"size": 12, "seed": 5})
    assert res.status_code == 200
    assert len(res.get_json()["array"]) == 12

    res = client.post("/api/array/import", json={"text": "5, 3, 8, 1"})
    assert res.get_json()["array"] == [5, 3, 8, 1]
    assert client.get("/api/state").get_json()["array"] == [5, 3, 8, 1]


def test_bad_input_returns_400(client):
    assert client.post("/api/array/import", json={"text": "1, x"}).status_code == 400
    assert client.post("/api/array/import", json={"text": "3, nan, 1"}).status_code == 400
    assert client.post("/api/array/generate", json={"size": 10_000}).status_code == 400
    assert client.post("/api/config/algo", json={"algo_key": "bogo"}).status_code == 400
    assert client.post("/api/config/speed", json={"speed": "ludicrous"}).status_code == 400
    assert client.post("/api/step/next").status_code == 400


@pytest.mark.parametrize("payload", [
    {"size": 3, "seed": [1]},
    {"size": 3, "seed": "abc"},
    {"size": 3, "min": None},
    {"size": [3]},
    {"size": 3, "min": 10, "max": 5},
])
def test_generate_rejects_malformed_fields(client, payload):
    res = client.post("/api/array/generate", json=payload)
    assert res.status_code == 400
    assert "error" in res.get_json()


def test_run_and_step_through(client):
    client.post("/api/array/import", json={"text": "5 3 8 1"})
    client.post("/api/config/algo", json={"algo_key": "quick"})

    res = client.post("/api/run")
    body = res.get_json()
    assert res.status_code == 200
    assert body["metrics"]["swaps"] == 2
    assert body["total_steps"] == 12
    assert body["current_step"] == -1
    assert body["array"] == [5, 3, 8, 1]

    stored = next(reversed(_recordings.values()))
    assert stored["stepper"] is stored["recorder"].stepper
    assert stored["recorder"].final_array == [1, 3, 5, 8]

    res = client.post("/api/step/goto", json={"index": 4})
    assert res.get_json()["event"] == {"kind": "swap", "i": 0, "j": 3}
    assert res.get_json()["array"] == [1, 3, 8, 5]

    res = client.post("/api/step/prev")
    assert res.get_json()["array"] == [5, 3, 8, 1]

    res = client.post("/api/step/goto", json={"index": 11})
    assert res.get_json()["event"]["kind"] == "done"
    assert res.get_json()["is_finished"]
    assert client.post("/api/step/next").status_code == 400

    state = client.get("/api/state").get_json()
    assert state["current_step"] == 11
    assert state["selected_algo"] == "quick"


def test_speed_config(client):
    res = client.post("/api/config/speed", json={"speed": "slow"})
    assert res.get_json() == {"speed": 1, "delay": pytest.approx(0.017)}


def test_compare_endpoint(client):
    client.post("/api/array/import", json={"text": "1 2 3 4 5"})
    res = client.post("/api/compare", json={"left": "bubble", "right": "insertion"})
    body = res.get_json()
    assert body["left"]["comparisons"] == 4
    assert body["right"]["comparisons"] == 4
    assert body["winner_comparisons"] == "tie"
    assert client.post("/api/compare", json={"left": "bubble"}).status_code == 400
