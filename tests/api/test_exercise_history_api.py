"""API tests for exercise history and trend endpoints."""

from gymflow.db.models import Exercise


def test_history_with_improving_strength_trend(client, make_exercise, add_logs):
    exercise = make_exercise("strength")
    # Oldest first: 8 sessions at 800 volume, then 8 at 1000
    add_logs(exercise, [(80, 10, 1)] * 8 + [(100, 10, 1)] * 8)

    response = client.get(f"/api/exercise/{exercise.id}/history")

    assert response.status_code == 200
    body = response.json()
    assert body["exercise"]["name"] == "Bench Press"
    assert body["exercise"]["category_name"] == "Upper Body"
    assert body["exercise"]["trend_metric"] == "total volume"
    assert body["exercise"]["metric_labels"] == ["Weight (lbs)", "Reps", "Sets", None]
    trend = body["trend"]
    assert trend["state"] == "classified"
    assert trend["direction"] == "improving"
    assert trend["recent_avg"] == 1000.0
    assert trend["previous_avg"] == 800.0
    assert trend["percent_change"] == 25.0
    assert trend["session_count"] == 16
    assert body["logs"][0]["summary"] == "100 lbs × 10 reps × 1 sets"
    assert len(body["logs"]) == 16


def test_history_display_window_is_independent_of_trend_window(client, make_exercise, add_logs):
    exercise = make_exercise("timed", name="Plank")
    add_logs(exercise, [(60,)] * 35)

    body = client.get(f"/api/exercise/{exercise.id}/history").json()

    assert len(body["logs"]) == 30
    # Trend only looks at the most recent 20 logs
    assert body["trend"]["session_count"] == 20
    assert body["trend"]["direction"] == "maintaining"


def test_history_not_enough_data(client, make_exercise, add_logs):
    exercise = make_exercise("bodyweight", name="Pull-ups")
    add_logs(exercise, [(10, 3)] * 5)

    trend = client.get(f"/api/exercise/{exercise.id}/history").json()["trend"]

    assert trend["state"] == "insufficient_data"
    assert trend["direction"] is None
    assert trend["recent_avg"] is None
    assert trend["session_count"] == 5
    assert trend["summary"] == "Not enough data: log 11 more workouts to see your trend"


def test_trend_endpoint(client, make_exercise, add_logs):
    exercise = make_exercise("cardio_machine", name="Rowing Machine")
    add_logs(exercise, [(5, 1, 1200, 300)] * 8 + [(5, 1, 1200, 250)] * 8)

    response = client.get(f"/api/exercise/{exercise.id}/trend")

    assert response.status_code == 200
    trend = response.json()
    assert trend["direction"] == "declining"
    assert trend["percent_change"] == -16.7


def test_history_unknown_template_type(client, db_session, category, add_logs):
    # Rows written before the template set was closed still load
    exercise = Exercise(category_id=category.id, name="Legacy", template_type="yoga")
    db_session.add(exercise)
    db_session.commit()
    add_logs(exercise, [(30, 1, 1, 1)] * 20)

    body = client.get(f"/api/exercise/{exercise.id}/history").json()

    assert body["trend"]["direction"] is None
    assert body["trend"]["session_count"] == 0
    assert body["exercise"]["trend_metric"] is None
    assert body["logs"][0]["summary"] == "Unknown template type"


def test_missing_exercise_returns_404(client):
    assert client.get("/api/exercise/999/history").status_code == 404
    assert client.get("/api/exercise/999/trend").status_code == 404


def test_trend_with_near_max_distances(client, make_exercise):
    exercise = make_exercise("cardio", name="Running")
    for _ in range(16):
        assert client.post("/api/logs", json={"exercise_id": exercise.id, "metric_1": 1e308}).status_code == 201

    response = client.get(f"/api/exercise/{exercise.id}/trend")

    assert response.status_code == 200
    trend = response.json()
    assert trend["state"] == "classified"
    assert trend["direction"] == "maintaining"
    assert trend["percent_change"] == 0.0
