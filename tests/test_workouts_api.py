import pytest

from helpers import LEGS_WORKOUT, assert_error


@pytest.fixture
def alice(make_user):
    return make_user("alice")


@pytest.fixture
def alice_headers(alice, login):
    return login("alice")


@pytest.fixture
def bob_headers(make_user, login):
    make_user("bob")
    return login("bob")


@pytest.fixture
def legs(client, alice_headers):
    resp = client.post("/workouts", json=LEGS_WORKOUT, headers=alice_headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["workout"]


def test_login_then_create_workout(client, alice):
    resp = client.post(
        "/tokens/authentication",
        json={"username": "alice", "password": "correct horse battery"},
    )
    assert resp.status_code == 201
    token = resp.json()["auth_token"]

    resp = client.post("/workouts", json=LEGS_WORKOUT, headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 201
    workout = resp.json()["workout"]
    assert workout["user_id"] == alice.id
    assert workout["title"] == "Legs"
    assert workout["duration"] == 45
    assert len(workout["entries"]) == 1
    entry = workout["entries"][0]
    assert entry["exercise_name"] == "Squat"
    assert entry["reps"] == 8
    assert entry["duration_seconds"] is None
    assert isinstance(entry["id"], int)


def test_create_requires_authentication(client):
    resp = client.post("/workouts", json=LEGS_WORKOUT)
    assert_error(resp, 401)


def test_create_rejects_ambiguous_entry(client, alice_headers):
    body = dict(LEGS_WORKOUT, entries=[
        {"exercise_name": "Squat", "sets": 3, "reps": 8, "duration_seconds": 30, "order_index": 1},
    ])
    assert_error(client.post("/workouts", json=body, headers=alice_headers), 400)

    body = dict(LEGS_WORKOUT, entries=[{"exercise_name": "Squat", "sets": 3, "order_index": 1}])
    assert_error(client.post("/workouts", json=body, headers=alice_headers), 400)


def test_get_workout_returns_entries_in_order(client, alice_headers):
    body = dict(LEGS_WORKOUT, entries=[
        {"exercise_name": "Calf Raise", "sets": 3, "reps": 15, "order_index": 3},
        {"exercise_name": "Squat", "sets": 3, "reps": 8, "order_index": 1},
        {"exercise_name": "Wall Sit", "sets": 2, "duration_seconds": 60, "order_index": 2},
    ])
    created = client.post("/workouts", json=body, headers=alice_headers).json()["workout"]

    resp = client.get(f"/workouts/{created['id']}")

    assert resp.status_code == 200
    names = [e["exercise_name"] for e in resp.json()["workout"]["entries"]]
    assert names == ["Squat", "Wall Sit", "Calf Raise"]


@pytest.mark.parametrize("workout_id", ["abc", "0", "-3", "1.5", "2147483648", "99999999999999999999999"])
def test_get_workout_bad_id(client, workout_id):
    assert_error(client.get(f"/workouts/{workout_id}"), 400)


def test_get_workout_not_found(client):
    assert_error(client.get("/workouts/999"), 404)


def test_owner_can_partially_update(client, alice_headers, legs):
    resp = client.patch(
        f"/workouts/{legs['id']}",
        json={"title": "Leg day", "calories_burned": 0},
        headers=alice_headers,
    )

    assert resp.status_code == 200
    workout = resp.json()["workout"]
    assert workout["title"] == "Leg day"
    assert workout["calories_burned"] == 0
    assert workout["duration"] == 45
    assert workout["entries"] == legs["entries"]


def test_owner_can_replace_entries(client, alice_headers, legs):
    squat = legs["entries"][0]
    resp = client.patch(
        f"/workouts/{legs['id']}",
        json={"entries": [
            {"exercise_name": "Lunge", "sets": 2, "reps": 12, "order_index": 1},
            dict(squat, sets=5, order_index=2),
        ]},
        headers=alice_headers,
    )

    assert resp.status_code == 200
    entries = resp.json()["workout"]["entries"]
    assert [e["exercise_name"] for e in entries] == ["Lunge", "Squat"]
    assert entries[1]["id"] == squat["id"]
    assert entries[1]["sets"] == 5


def test_update_rejects_null_field(client, alice_headers, legs):
    resp = client.patch(f"/workouts/{legs['id']}", json={"title": None}, headers=alice_headers)
    assert_error(resp, 400)


def test_non_owner_cannot_update_or_delete(client, bob_headers, legs):
    resp = client.patch(f"/workouts/{legs['id']}", json={"title": "Mine now"}, headers=bob_headers)
    assert_error(resp, 403)

    resp = client.delete(f"/workouts/{legs['id']}", headers=bob_headers)
    assert_error(resp, 403)

    unchanged = client.get(f"/workouts/{legs['id']}").json()["workout"]
    assert unchanged == legs


def test_anonymous_cannot_update_or_delete(client, legs):
    assert_error(client.patch(f"/workouts/{legs['id']}", json={"title": "x"}), 401)
    assert_error(client.delete(f"/workouts/{legs['id']}"), 401)
    assert client.get(f"/workouts/{legs['id']}").json()["workout"] == legs


def test_update_and_delete_missing_workout(client, alice_headers):
    assert_error(client.patch("/workouts/999", json={"title": "x"}, headers=alice_headers), 404)
    assert_error(client.delete("/workouts/999", headers=alice_headers), 404)


def test_owner_can_delete(client, alice_headers, legs):
    resp = client.delete(f"/workouts/{legs['id']}", headers=alice_headers)

    assert resp.status_code == 204
    assert_error(client.get(f"/workouts/{legs['id']}"), 404)


@pytest.mark.parametrize("method", ["patch", "delete"])
def test_mutations_reject_out_of_range_id(client, alice_headers, method):
    kwargs = {"json": {"title": "x"}} if method == "patch" else {}
    resp = getattr(client, method)("/workouts/99999999999999999999999", headers=alice_headers, **kwargs)
    assert_error(resp, 400)


def test_update_rejects_repeated_entry_id(client, alice_headers, legs):
    squat = legs["entries"][0]
    resp = client.patch(
        f"/workouts/{legs['id']}",
        json={"entries": [
            dict(squat, exercise_name="A", order_index=1),
            dict(squat, exercise_name="B", order_index=2),
        ]},
        headers=alice_headers,
    )

    assert_error(resp, 400)
    assert client.get(f"/workouts/{legs['id']}").json()["workout"] == legs


def test_server_error_varies_on_authorization(session_factory):
    from fastapi.testclient import TestClient
    from sqlalchemy.exc import OperationalError

    from workout_api.interfaces.deps import get_workout_repository
    from workout_api.main import create_app

    class BrokenRepository:
        def get_by_id(self, id):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    app = create_app(session_factory)
    app.dependency_overrides[get_workout_repository] = lambda: BrokenRepository()

    resp = TestClient(app, raise_server_exceptions=False).get("/workouts/1")

    assert_error(resp, 500)
    assert resp.json()["error"] == "internal server error"
    assert "Authorization" in resp.headers["vary"]
