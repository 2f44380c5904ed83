def assert_error(resp, status_code):
    assert resp.status_code == status_code, resp.text
    body = resp.json()
    assert set(body) == {"error"}
    assert isinstance(body["error"], str) and body["error"]


LEGS_WORKOUT = {
    "title": "Legs",
    "description": "",
    "duration": 45,
    "calories_burned": 300,
    "entries": [{"exercise_name": "Squat", "sets": 3, "reps": 8, "order_index": 1}],
}
