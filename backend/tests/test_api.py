"""HTTP API tests against a throwaway SQLite database."""

from datetime import date

from sqlalchemy import delete

from greatsage.models.user import User

from factories import OTHER_USER_ID, USER_ID

API = "/api/v1"


async def test_health(client):
    response = await client.get(f"{API}/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["app"] == "Great Sage System"
    assert "x-request-id" in response.headers


async def test_readiness(client):
    response = await client.get(f"{API}/health/ready")

    assert response.status_code == 200
    assert response.json()["checks"]["database"] == "healthy"
    assert response.json()["checks"]["default_user"] == "healthy"
    assert response.json()["status"] == "healthy"


async def test_readiness_without_default_user(client, db):
    await db.execute(delete(User).where(User.id == USER_ID))
    await db.commit()

    body = (await client.get(f"{API}/health/ready")).json()

    assert body["status"] == "unhealthy"
    assert body["checks"] == {"database": "healthy", "default_user": "missing"}


async def test_request_id_is_echoed(client):
    response = await client.get(f"{API}/health", headers={"X-Request-ID": "abc-123"})

    assert response.headers["x-request-id"] == "abc-123"


class TestTasksAPI:
    async def test_create_and_get(self, client):
        response = await client.post(
            f"{API}/tasks/",
            json={"title": "Plan week", "priority": "HIGH", "dueDate": "2026-10-20T09:00:00", "requestedBy": "Me"},
        )

        assert response.status_code == 201
        task = response.json()
        assert task["status"] == "TODO"
        assert task["completedAt"] is None
        assert task["requestedBy"] == "Me"

        fetched = await client.get(f"{API}/tasks/{task['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["title"] == "Plan week"

    async def test_validation_error(self, client):
        response = await client.post(f"{API}/tasks/", json={"title": ""})

        assert response.status_code == 422

    async def test_unknown_priority_rejected(self, client):
        response = await client.post(f"{API}/tasks/", json={"title": "x", "priority": "SOMEDAY"})

        assert response.status_code == 422

    async def test_list_filters_and_order(self, client):
        for title, priority in (("low one", "LOW"), ("urgent one", "URGENT"), ("medium", "MEDIUM")):
            await client.post(f"{API}/tasks/", json={"title": title, "priority": priority})

        everything = (await client.get(f"{API}/tasks/")).json()
        searched = (await client.get(f"{API}/tasks/", params={"search": "ONE"})).json()
        urgent = (await client.get(f"{API}/tasks/", params={"priority": "URGENT"})).json()

        assert [t["title"] for t in everything] == ["urgent one", "medium", "low one"]
        assert [t["title"] for t in searched] == ["urgent one", "low one"]
        assert [t["title"] for t in urgent] == ["urgent one"]

    async def test_status_transitions(self, client):
        task = (await client.post(f"{API}/tasks/", json={"title": "Finish"})).json()

        done = (await client.post(f"{API}/tasks/{task['id']}/status", json={"status": "DONE"})).json()
        assert done["status"] == "DONE"
        assert done["completedAt"] is not None

        reopened = (await client.patch(f"{API}/tasks/{task['id']}", json={"status": "TODO"})).json()
        assert reopened["completedAt"] is None

    async def test_patch_null_required_field_rejected(self, client):
        task = (await client.post(f"{API}/tasks/", json={"title": "Keep me"})).json()

        for payload in ({"title": None}, {"status": None}):
            response = await client.patch(f"{API}/tasks/{task['id']}", json=payload)
            assert response.status_code == 422

        unchanged = (await client.get(f"{API}/tasks/{task['id']}")).json()
        assert unchanged["title"] == "Keep me"
        assert unchanged["status"] == "TODO"

    async def test_patch_null_clears_due_date(self, client):
        task = (
            await client.post(f"{API}/tasks/", json={"title": "x", "dueDate": "2026-10-20T09:00:00"})
        ).json()

        response = await client.patch(f"{API}/tasks/{task['id']}", json={"dueDate": None})

        assert response.status_code == 200
        assert response.json()["dueDate"] is None

    async def test_patch_missing_task(self, client):
        response = await client.patch(f"{API}/tasks/999", json={"title": "x"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Task not found"

    async def test_unknown_project_rejected(self, client):
        response = await client.post(f"{API}/tasks/", json={"title": "x", "projectId": 999})

        assert response.status_code == 404

    async def test_user_scoping(self, client):
        task = (
            await client.post(f"{API}/tasks/", params={"userId": OTHER_USER_ID}, json={"title": "theirs"})
        ).json()

        assert (await client.get(f"{API}/tasks/{task['id']}")).status_code == 404
        assert (await client.get(f"{API}/tasks/{task['id']}", params={"userId": OTHER_USER_ID})).status_code == 200

    async def test_delete(self, client):
        task = (await client.post(f"{API}/tasks/", json={"title": "gone"})).json()

        assert (await client.delete(f"{API}/tasks/{task['id']}")).status_code == 204
        assert (await client.delete(f"{API}/tasks/{task['id']}")).status_code == 404


class TestProjectsAPI:
    async def test_detail_includes_progress(self, client):
        project = (await client.post(f"{API}/projects/", json={"name": "Thesis", "targetHours": 100})).json()
        assert project["status"] == "ACTIVE"

        for title in ("a", "b"):
            await client.post(f"{API}/tasks/", json={"title": title, "projectId": project["id"]})
        task = (await client.get(f"{API}/tasks/", params={"projectId": project["id"]})).json()[0]
        await client.post(f"{API}/tasks/{task['id']}/status", json={"status": "DONE"})

        detail = (await client.get(f"{API}/projects/{project['id']}")).json()

        assert detail["totalTasks"] == 2
        assert detail["completedTasks"] == 1
        assert detail["progressPercentage"] == 50
        assert len(detail["tasks"]) == 2

    async def test_list_orders_by_status(self, client):
        held = (await client.post(f"{API}/projects/", json={"name": "Held"})).json()
        await client.post(f"{API}/projects/", json={"name": "Live"})
        await client.patch(f"{API}/projects/{held['id']}", json={"status": "ON_HOLD"})

        projects = (await client.get(f"{API}/projects/")).json()
        active = (await client.get(f"{API}/projects/", params={"status": "ACTIVE"})).json()

        assert [p["name"] for p in projects] == ["Live", "Held"]
        assert [p["name"] for p in active] == ["Live"]

    async def test_patch_null_name_rejected(self, client):
        project = (await client.post(f"{API}/projects/", json={"name": "Thesis"})).json()

        response = await client.patch(f"{API}/projects/{project['id']}", json={"name": None})

        assert response.status_code == 422

    async def test_missing(self, client):
        assert (await client.get(f"{API}/projects/999")).status_code == 404
        assert (await client.delete(f"{API}/projects/999")).status_code == 404


class TestStudyAPI:
    async def test_weekly_schedule_has_seven_days(self, client):
        item = (await client.post(f"{API}/study/items", json={"name": "Go", "type": "COURSE"})).json()
        await client.post(
            f"{API}/study/schedules",
            json={"studyItemId": item["id"], "dayOfWeek": 1, "startTime": "20:00", "endTime": "21:30"},
        )
        await client.post(
            f"{API}/study/schedules",
            json={"studyItemId": item["id"], "dayOfWeek": 1, "startTime": "06:00", "endTime": "07:00"},
        )

        weekly = (await client.get(f"{API}/study/schedules/weekly")).json()

        assert [d["dayOfWeek"] for d in weekly] == list(range(7))
        assert weekly[0]["dayName"] == "Chủ nhật"
        assert [s["startTime"] for s in weekly[1]["schedules"]] == ["06:00", "20:00"]

        labels = (await client.get(f"{API}/study/schedules/labels")).json()
        assert labels["1"] == ["06:00 - 07:00", "20:00 - 21:30"]

    async def test_bad_time_rejected(self, client):
        item = (await client.post(f"{API}/study/items", json={"name": "Go"})).json()

        response = await client.post(
            f"{API}/study/schedules",
            json={"studyItemId": item["id"], "dayOfWeek": 7, "startTime": "25:00", "endTime": "21:30"},
        )

        assert response.status_code == 422

    async def test_schedule_for_missing_item(self, client):
        response = await client.post(
            f"{API}/study/schedules",
            json={"studyItemId": 999, "dayOfWeek": 1, "startTime": "06:00", "endTime": "07:00"},
        )

        assert response.status_code == 404

    async def test_logs_and_summary(self, client):
        item = (
            await client.post(f"{API}/study/items", json={"name": "Go", "targetHoursPerWeek": 4})
        ).json()
        log = await client.post(
            f"{API}/study/logs",
            json={"studyItemId": item["id"], "studyDate": "2026-01-05", "durationHours": 1.5},
        )
        assert log.status_code == 201

        summary = (await client.get(f"{API}/study/summary")).json()

        assert summary["activeItems"] == 1
        assert summary["targetHoursPerWeek"] == 4
        assert summary["totalHoursLogged"] == 1.5

    async def test_non_positive_duration_rejected(self, client):
        item = (await client.post(f"{API}/study/items", json={"name": "Go"})).json()

        response = await client.post(
            f"{API}/study/logs",
            json={"studyItemId": item["id"], "studyDate": "2026-01-05", "durationHours": 0},
        )

        assert response.status_code == 422


class TestHabitsAPI:
    async def test_log_and_streak(self, client):
        habit = (await client.post(f"{API}/habits/", json={"name": "Read", "unit": "pages"})).json()
        today = date.today().isoformat()

        logged = await client.post(f"{API}/habits/{habit['id']}/logs", json={})
        assert logged.status_code == 201
        assert logged.json()["logDate"] == today

        habits = (await client.get(f"{API}/habits/")).json()
        assert habits[0]["currentStreak"] == 1
        assert habits[0]["todayCompleted"] is True

        assert (await client.delete(f"{API}/habits/{habit['id']}/logs/{today}")).status_code == 204
        assert (await client.get(f"{API}/habits/{habit['id']}/logs")).json() == []

    async def test_missing_habit(self, client):
        assert (await client.post(f"{API}/habits/999/logs", json={})).status_code == 404
        assert (await client.get(f"{API}/habits/999/logs")).status_code == 404


class TestNotesAPI:
    async def test_note_preview(self, client):
        content = "x" * 200
        note = (await client.post(f"{API}/notes/", json={"content": content})).json()

        assert note["content"] == content
        assert len(note["preview"]) == 120
        assert note["preview"].endswith("...")

    async def test_bookmark_filters(self, client):
        await client.post(
            f"{API}/bookmarks/",
            json={"title": "Lofi", "url": "https://youtube.com/x", "sourceType": "YOUTUBE", "category": "music"},
        )
        await client.post(f"{API}/bookmarks/", json={"title": "Docs", "url": "https://docs.example"})

        youtube = (await client.get(f"{API}/bookmarks/", params={"sourceType": "YOUTUBE"})).json()
        everything = (await client.get(f"{API}/bookmarks/", params={"sourceType": "ALL"})).json()

        assert [b["title"] for b in youtube] == ["Lofi"]
        assert len(everything) == 2


async def test_dashboard(client):
    response = await client.get(f"{API}/dashboard/")

    assert response.status_code == 200
    body = response.json()
    assert body["habitCompletionRate"] == 0
    assert body["todayTasks"] == []
    assert set(body["labels"]) == {"today", "week", "studyHours", "studyHoursValue", "habitCompletionRate"}
