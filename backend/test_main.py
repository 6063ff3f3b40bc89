"""HTTP surface: snapshot, toggles and automation settings."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

import main
from simulation.ticker import Ticker


@pytest.fixture
def client() -> Iterator[TestClient]:
    # No context manager: the background ticker stays off and state only
    # changes through the requests below.
    yield TestClient(main.app)


@pytest.fixture(autouse=True)
def _restore_settings() -> Iterator[None]:
    settings = main.orchestrator.settings
    saved = (settings.lights_off_label, settings.occupancy_control, settings.target_temp_c, settings.tolerance_c)
    yield
    settings.update(
        lights_off_time=saved[0],
        occupancy_control=saved[1],
        target_temp_c=saved[2],
        tolerance_c=saved[3],
    )


def test_snapshot_shape(client: TestClient) -> None:
    response = client.get("/snapshot")
    assert response.status_code == 200
    body = response.json()

    assert [room["id"] for room in body["rooms"]] == [f"r-0{i}" for i in range(1, 9)]
    assert len(body["hourly"]) == 24
    assert set(body["totals"]) == {
        "energy_kwh",
        "water_l",
        "cost",
        "co2_kg",
        "power_kw",
        "water_flow_lpm",
        "energy_saved_kwh",
    }
    assert body["settings"]["lights_off_time"] == "22:00"


def test_snapshot_status_filter(client: TestClient) -> None:
    body = client.get("/snapshot", params={"status_filter": "high"}).json()
    assert all(room["status"] == "danger" for room in body["rooms"])

    assert client.get("/snapshot", params={"status_filter": "bogus"}).status_code == 422


def test_toggle_flips_device(client: TestClient) -> None:
    before = client.get("/rooms/r-03").json()
    fan_before = next(d for d in before["devices"] if d["kind"] == "fan")

    response = client.post("/rooms/r-03/devices/fan/toggle")
    assert response.status_code == 200
    fan_after = next(d for d in response.json()["devices"] if d["kind"] == "fan")
    assert fan_after["on"] is not fan_before["on"]

    restored = client.post("/rooms/r-03/devices/fan/toggle").json()
    assert restored["power_kw"] == before["power_kw"]


@pytest.mark.parametrize(
    ("path", "detail"),
    [
        ("/rooms/r-99/devices/fan/toggle", "Unknown room: r-99"),
        ("/rooms/r-01/devices/heater/toggle", "Unknown device: heater in room r-01"),
        ("/rooms/r-01/devices/motor/toggle", "Unknown device: motor in room r-01"),
    ],
)
def test_toggle_unknown_ids_return_404(client: TestClient, path: str, detail: str) -> None:
    response = client.post(path)
    assert response.status_code == 404
    assert response.json()["detail"] == detail


def test_unknown_room_lookup_returns_404(client: TestClient) -> None:
    assert client.get("/rooms/nope").status_code == 404


def test_update_automation(client: TestClient) -> None:
    response = client.patch("/automation", json={"lights_off_time": "21:30", "tolerance_c": 2})
    assert response.status_code == 200
    assert response.json() == {
        "lights_off_time": "21:30",
        "occupancy_control": True,
        "target_temp_c": 24,
        "tolerance_c": 2,
    }
    assert client.get("/automation").json()["lights_off_time"] == "21:30"


@pytest.mark.parametrize(
    "payload",
    [
        {"lights_off_time": "25:00"},
        {"lights_off_time": "soon"},
        {"target_temp_c": "24"},
        {"target_temp_c": 23.5},
        {"tolerance_c": -1},
        {"occupancy_control": "yes"},
    ],
)
def test_invalid_automation_update_is_rejected(client: TestClient, payload: dict[str, object]) -> None:
    before = client.get("/automation").json()

    response = client.patch("/automation", json=payload)

    assert response.status_code == 422
    assert client.get("/automation").json() == before


def test_websocket_pushes_snapshot_after_each_tick(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main, "ticker", Ticker(main.orchestrator, interval_s=0.01))

    # Context manager runs the lifespan, which starts the ticker.
    with TestClient(main.app) as client, client.websocket_connect("/ws") as websocket:
        first = websocket.receive_json()
        second = websocket.receive_json()

    assert second["tick"] > first["tick"]
    assert [room["id"] for room in second["rooms"]] == [f"r-0{i}" for i in range(1, 9)]
    assert main.ticker.running is False
