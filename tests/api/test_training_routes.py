"""Tests for the curriculum and progress routes."""

import pytest


@pytest.fixture
def step_ids(client, auth_headers):
    """Map of (day number, step number) -> (day id, step id) from the API."""
    ids = {}
    for day in client.get("/api/training/days", headers=auth_headers).json()["days"]:
        detail = client.get(f"/api/training/days/{day['id']}", headers=auth_headers).json()
        for step in detail["steps"]:
            ids[(day["order_num"], step["step_number"])] = (day["id"], step["id"])
    return ids


class TestCurriculum:

    def test_requires_auth(self, client):
        assert client.get("/api/training/days").status_code == 401
        assert client.get("/api/training/tools").status_code == 401

    def test_days(self, client, auth_headers):
        days = client.get("/api/training/days", headers=auth_headers).json()["days"]
        assert [d["order_num"] for d in days] == [1, 2, 3, 4, 5, 6]

    def test_day_detail(self, client, auth_headers, step_ids):
        day_id, _ = step_ids[(1, 1)]
        data = client.get(f"/api/training/days/{day_id}", headers=auth_headers).json()
        assert data["day"]["order_num"] == 1
        assert len(data["steps"]) == 8
        assert data["steps"][0]["tools"] == ["Brainstorming"]

    def test_unknown_day(self, client, auth_headers):
        response = client.get("/api/training/days/999", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["code"] == "DAY_NOT_FOUND"

    def test_step(self, client, auth_headers, step_ids):
        _, step_id = step_ids[(1, 8)]
        step = client.get(f"/api/training/steps/{step_id}", headers=auth_headers).json()["step"]
        assert step["title"] == "Root cause analysis"

    def test_unknown_step(self, client, auth_headers):
        response = client.get("/api/training/steps/999", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["code"] == "STEP_NOT_FOUND"

    def test_tools(self, client, auth_headers):
        tools = client.get("/api/training/tools", headers=auth_headers).json()["tools"]
        assert "5 Whys" in tools

        card = client.get("/api/training/tools/5 Whys", headers=auth_headers).json()
        assert card["tool"]["title"] == "5 Whys"
        assert client.get("/api/training/tools/Nope", headers=auth_headers).status_code == 404


class TestStepForms:

    def test_submit_then_form(self, client, auth_headers, step_ids):
        _, s1 = step_ids[(1, 1)]
        _, s4 = step_ids[(1, 4)]
        _, s5 = step_ids[(1, 5)]

        problems = {f"problem_{i}": f"Problem {i}" for i in range(1, 6)}
        submitted = client.post(
            f"/api/training/steps/{s1}/submit",
            json={"values": problems, "action": "complete"},
            headers=auth_headers,
        )
        assert submitted.status_code == 200
        assert submitted.json()["count"] == 5
        assert submitted.json()["progress"]["status"] == "completed"

        client.post(
            f"/api/training/steps/{s4}/submit",
            json={"values": {"selected_priority_problem": "2"}},
            headers=auth_headers,
        )

        form = client.get(f"/api/training/steps/{s5}/form", headers=auth_headers).json()
        assert form["context"][0]["value"] == "Problem 2"
        assert form["warnings"] == []

    def test_invalid_action(self, client, auth_headers, step_ids):
        _, s1 = step_ids[(1, 1)]
        response = client.post(
            f"/api/training/steps/{s1}/submit",
            json={"values": {}, "action": "publish"},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_submit_rejects_bad_scores(self, client, auth_headers, step_ids):
        _, s2 = step_ids[(1, 2)]
        response = client.post(
            f"/api/training/steps/{s2}/submit",
            json={"values": {"impact_1": "99", "frequency_1": "not a number"}},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 0
        assert all("error" in r for r in data["results"])
        assert client.get(f"/api/responses/step/{s2}", headers=auth_headers).json()["responses"] == []

    def test_complete_with_missing_required_fields(self, client, auth_headers, step_ids):
        _, s1 = step_ids[(1, 1)]
        response = client.post(
            f"/api/training/steps/{s1}/submit",
            json={"values": {"problem_1": "Late deliveries"}, "action": "complete"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["error"].startswith("Required fields are empty")
        assert body["details"]["missing"] == ["problem_2", "problem_3", "problem_4", "problem_5"]

    def test_locked_form(self, client, auth_headers, step_ids):
        _, s2 = step_ids[(1, 2)]
        form = client.get(f"/api/training/steps/{s2}/form", headers=auth_headers).json()
        assert form["locked"] is True
        assert form["warnings"][0]["message"].startswith("Complete day 1 step 1")


class TestProgressRoutes:

    def test_transitions(self, client, auth_headers, step_ids):
        day_id, step_id = step_ids[(1, 1)]
        url = f"/api/progress/step/{step_id}"

        saved = client.post(url, json={"status": "in_progress", "day_id": day_id}, headers=auth_headers)
        assert saved.status_code == 200
        started_at = saved.json()["progress"]["started_at"]
        assert started_at

        done = client.post(url, json={"status": "completed", "day_id": day_id}, headers=auth_headers)
        assert done.json()["progress"]["started_at"] == started_at
        assert done.json()["progress"]["completed_at"]

        back = client.post(url, json={"status": "not_started", "day_id": day_id}, headers=auth_headers)
        assert back.status_code == 400
        assert back.json()["code"] == "INVALID_TRANSITION"

    def test_invalid_status(self, client, auth_headers, step_ids):
        day_id, step_id = step_ids[(1, 1)]
        response = client.post(
            f"/api/progress/step/{step_id}",
            json={"status": "finished", "day_id": day_id},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_list(self, client, auth_headers, step_ids):
        day_id, step_id = step_ids[(1, 3)]
        client.post(f"/api/progress/step/{step_id}", json={"status": "in_progress"}, headers=auth_headers)

        records = client.get("/api/progress", headers=auth_headers).json()["progress"]
        assert [r["step_title"] for r in records] == ["Problem analysis"]
        by_day = client.get(f"/api/progress/day/{day_id}", headers=auth_headers).json()["progress"]
        assert len(by_day) == 1

    def test_progress_is_per_user(self, client, auth_headers, other_headers, step_ids):
        _, step_id = step_ids[(1, 1)]
        client.post(f"/api/progress/step/{step_id}", json={"status": "completed"}, headers=auth_headers)
        assert client.get("/api/progress", headers=other_headers).json()["progress"] == []
