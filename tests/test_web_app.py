import json

import pytest
from fastapi.testclient import TestClient

from web.backend.app import app


@pytest.fixture
def client():
    return TestClient(app)


def test_config(client):
    response = client.get("/config")
    assert response.status_code == 200
    assert response.json() == {"num_levels": 3, "time_quanta": [2, 4, 8], "boost_interval": 100}


def test_simulate(client):
    response = client.post("/simulate", json={
        "processes": [{"pid": 1, "priority": 0, "total_work": 5},
                      {"pid": 2, "priority": 0, "total_work": 3}]
    })

    assert response.status_code == 200
    body = response.json()
    assert [e["pid"] for e in body["gantt_chart"]] == [1, 2, 1, 2]
    assert {p["pid"]: p["finish_time"] for p in body["processes"]} == {1: 7, 2: 8}
    assert body["statistics"]["avg_waiting_time"] == pytest.approx(3.5)


def test_simulate_rejects_mismatched_quanta(client):
    response = client.post("/simulate", json={
        "processes": [{"pid": 1, "total_work": 5}],
        "num_levels": 3,
        "time_quanta": [2, 4]
    })
    assert response.status_code == 400


def test_simulate_validates_process_input(client):
    response = client.post("/simulate", json={"processes": [{"pid": 1, "total_work": 0}]})
    assert response.status_code == 422


def test_sample_processes_run(client):
    samples = client.get("/sample-processes").json()["samples"]
    for sample in samples:
        response = client.post("/simulate", json={"processes": sample["processes"]})
        assert response.status_code == 200
        assert len(response.json()["processes"]) == len(sample["processes"])


def test_realtime_steps(client):
    with client.websocket_connect("/ws/realtime") as websocket:
        websocket.send_text(json.dumps({
            "action": "init",
            "request": {"processes": [{"pid": 1, "priority": 0, "total_work": 3}]}
        }))
        assert websocket.receive_json()["type"] == "initialized"

        websocket.send_text(json.dumps({"action": "step"}))
        first = websocket.receive_json()
        assert first["complete"] is False
        assert [p["pid"] for p in first["queues"][1]] == [1]

        websocket.send_text(json.dumps({"action": "step"}))
        second = websocket.receive_json()
        assert second["complete"] is True
        assert second["stats"]["completed"] == 1


def test_realtime_reports_bad_configuration(client):
    with client.websocket_connect("/ws/realtime") as websocket:
        websocket.send_text(json.dumps({
            "action": "init",
            "request": {"processes": [], "num_levels": 2, "time_quanta": [1]}
        }))
        message = websocket.receive_json()
        assert message["type"] == "error"


def test_realtime_rejects_non_positive_speed(client):
    with client.websocket_connect("/ws/realtime") as websocket:
        websocket.send_text(json.dumps({
            "action": "init",
            "request": {"processes": [{"pid": 1, "total_work": 3}]}
        }))
        assert websocket.receive_json()["type"] == "initialized"

        websocket.send_text(json.dumps({"action": "run", "speed": 0}))
        message = websocket.receive_json()
        assert message["type"] == "error"
        assert "speed" in message["message"]

        websocket.send_text(json.dumps({"action": "step"}))
        assert websocket.receive_json()["type"] == "step_result"
