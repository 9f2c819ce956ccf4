import pytest

from factories import add_walk, make_user


def _authenticate(client, user_id: int) -> None:
    with client.session_transaction() as s:
        s["_user_id"] = str(user_id)
        s["_fresh"] = True


@pytest.fixture()
def walker_id(seed):
    return seed(lambda r: make_user(r, "maria.silva", display_name="Maria Silva").id)


def test_create_walk_requires_login(client):
    resp = client.post("/api/walks", json={"distance": 1.0, "duration": 60})
    assert resp.status_code == 401
    assert resp.get_json()["ok"] is False


def test_create_walk_for_current_user(client, walker_id):
    _authenticate(client, walker_id)

    resp = client.post("/api/walks", json={"distance": "1,5", "duration": 600})
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["userId"] == walker_id
    assert body["energy"] == pytest.approx(75.0)

    totals = client.get(f"/api/users/{walker_id}/totals").get_json()
    assert totals == {"totalWalks": 1, "totalDistance": 1.5, "totalEnergy": 75.0}


@pytest.mark.parametrize("payload", [
    {"distance": -1, "duration": 60},
    {"distance": "far", "duration": 60},
    {"distance": 1.0, "duration": 1.5},
    {"duration": 60},
    {"distance": 1.0, "duration": 60, "energy": -5},
    {"distance": "1e400", "duration": 60},
    {"distance": 1.0, "duration": "1e30"},
    {"distance": "1e308", "duration": 60},
    {"distance": 1.0, "duration": 60, "energy": "-1e400"},
])
def test_invalid_walk_is_rejected_without_writing(client, walker_id, payload):
    _authenticate(client, walker_id)

    resp = client.post("/api/walks", json=payload)
    assert resp.status_code == 400

    assert client.get(f"/api/walks/user/{walker_id}").get_json() == []


def test_list_walks(client, seed, walker_id):
    seed(lambda r: add_walk(r, r.get_user(walker_id), 45.3, energy=2265).id)
    _authenticate(client, walker_id)

    walks = client.get(f"/api/walks/user/{walker_id}").get_json()
    assert len(walks) == 1
    assert walks[0]["distance"] == pytest.approx(45.3)

    assert client.get("/api/walks/user/999").status_code == 404
