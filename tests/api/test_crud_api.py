"""API tests for category, exercise and log endpoints."""


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


class TestCategories:
    def test_create_and_list_sorted(self, client):
        client.post("/api/categories", json={"name": "Core", "color": "#EF4444", "sort_order": 4})
        created = client.post("/api/categories", json={"name": "Legs", "color": "#10B981", "sort_order": 2})

        assert created.status_code == 201
        names = [c["name"] for c in client.get("/api/categories").json()]
        assert names == ["Legs", "Core"]

    def test_create_requires_name_and_color(self, client):
        assert client.post("/api/categories", json={"name": "Core"}).status_code == 422

    def test_update_fields(self, client, category):
        response = client.put(f"/api/categories/{category.id}", json={"name": "Push", "sort_order": 7})

        assert response.status_code == 200
        assert response.json() == {"id": category.id, "name": "Push", "color": "#3B82F6", "sort_order": 7}

    def test_update_without_fields(self, client, category):
        assert client.put(f"/api/categories/{category.id}", json={}).status_code == 400

    def test_update_missing(self, client):
        assert client.put("/api/categories/999", json={"color": "#000000"}).status_code == 404

    def test_delete_missing(self, client):
        assert client.delete("/api/categories/999").status_code == 404


class TestExercises:
    def test_create_get_and_list(self, client, category):
        response = client.post(
            "/api/exercises",
            json={"category_id": category.id, "name": "Rowing", "template_type": "cardio_machine"},
        )

        assert response.status_code == 201
        exercise = response.json()
        assert exercise["template_type"] == "cardio_machine"
        assert exercise["last_used_at"] is None
        assert client.get(f"/api/exercises/{exercise['id']}").json()["name"] == "Rowing"
        listed = client.get("/api/exercises", params={"category_id": category.id}).json()
        assert [e["id"] for e in listed] == [exercise["id"]]

    def test_create_rejects_unknown_template_type(self, client, category):
        response = client.post(
            "/api/exercises",
            json={"category_id": category.id, "name": "Yoga", "template_type": "yoga"},
        )

        assert response.status_code == 422

    def test_create_in_missing_category(self, client):
        response = client.post("/api/exercises", json={"category_id": 999, "name": "Squat", "template_type": "strength"})

        assert response.status_code == 404

    def test_list_requires_category(self, client):
        assert client.get("/api/exercises").status_code == 422

    def test_update_without_fields(self, client, make_exercise):
        exercise = make_exercise()

        assert client.put(f"/api/exercises/{exercise.id}", json={}).status_code == 400

    def test_template_type_change_allowed_without_logs(self, client, make_exercise):
        exercise = make_exercise("cardio", name="Bike")

        response = client.put(f"/api/exercises/{exercise.id}", json={"template_type": "cardio_machine"})

        assert response.status_code == 200
        assert response.json()["template_type"] == "cardio_machine"

    def test_template_type_change_conflicts_once_logged(self, client, make_exercise, add_logs):
        exercise = make_exercise("strength")
        add_logs(exercise, [(100, 10, 3)])

        response = client.put(f"/api/exercises/{exercise.id}", json={"name": "Bench", "template_type": "bodyweight"})

        assert response.status_code == 409
        unchanged = client.get(f"/api/exercises/{exercise.id}").json()
        assert unchanged["template_type"] == "strength"
        assert unchanged["name"] == "Bench Press"

    def test_delete(self, client, make_exercise):
        exercise = make_exercise()

        assert client.delete(f"/api/exercises/{exercise.id}").json() == {"success": True}
        assert client.get(f"/api/exercises/{exercise.id}").status_code == 404


class TestLogs:
    def test_create_log_coerces_and_updates_last_used(self, client, make_exercise):
        exercise = make_exercise()

        response = client.post(
            "/api/logs",
            json={"exercise_id": exercise.id, "metric_1": "135", "metric_2": 8, "metric_3": "", "notes": "felt good"},
        )

        assert response.status_code == 201
        log = response.json()
        assert log["metric_1"] == 135.0
        assert log["metric_2"] == 8
        assert log["metric_3"] is None
        assert log["summary"] == "135 lbs × 8 reps × 0 sets"
        assert client.get(f"/api/exercises/{exercise.id}").json()["last_used_at"] is not None

    def test_create_log_with_out_of_range_integer_slot(self, client, make_exercise):
        exercise = make_exercise()

        response = client.post(
            "/api/logs",
            json={"exercise_id": exercise.id, "metric_1": 100, "metric_2": 1e30, "metric_3": 1},
        )

        assert response.status_code == 201
        log = response.json()
        assert log["metric_1"] == 100.0
        assert log["metric_2"] is None
        assert log["metric_3"] == 1

    def test_create_log_for_missing_exercise(self, client):
        assert client.post("/api/logs", json={"exercise_id": 999, "metric_1": 1}).status_code == 404

    def test_recent_logs_default_limit(self, client, make_exercise, add_logs):
        exercise = make_exercise("timed", name="Plank")
        add_logs(exercise, [(30,), (40,), (50,), (60,)])

        logs = client.get("/api/logs", params={"exercise_id": exercise.id}).json()

        assert [log["metric_1"] for log in logs] == [60.0, 50.0, 40.0]
        assert logs[0]["summary"] == "1:00"

    def test_all_logs_paginated(self, client, make_exercise, add_logs):
        exercise = make_exercise("timed", name="Plank")
        add_logs(exercise, [(30,), (40,), (50,)])

        body = client.get("/api/logs/all", params={"limit": 2, "offset": 1}).json()

        assert body["total"] == 3
        assert body["limit"] == 2
        assert body["offset"] == 1
        assert [log["metric_1"] for log in body["logs"]] == [40.0, 30.0]

    def test_delete_log(self, client, make_exercise, add_logs):
        exercise = make_exercise("timed", name="Plank")
        [log] = add_logs(exercise, [(30,)])

        assert client.delete(f"/api/logs/{log.id}").status_code == 200
        assert client.delete(f"/api/logs/{log.id}").status_code == 404
