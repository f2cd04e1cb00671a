"""
Supervisor analytics tests
"""
from datetime import datetime, timedelta, timezone

from httpx import AsyncClient

from app.core.analytics import summarize_tasks
from app.db.models import Task, Role, TaskType, TaskPriority, TaskStatus

NOW = datetime(2026, 3, 8, 12, 0, tzinfo=timezone.utc)


def make_task(priority=TaskPriority.MEDIUM, status=TaskStatus.NEW, created_at=NOW, **fields) -> Task:
    return Task(
        type=fields.pop("type", TaskType.TRANSPORT),
        priority=priority,
        status=status,
        created_by=fields.pop("created_by", Role.NURSE),
        created_at=created_at,
        **fields
    )


class TestSummarizeTasks:

    def test_empty(self):
        summary = summarize_tasks([], now=NOW)
        assert summary["total_tasks"] == 0
        assert summary["status_counts"] == {"new": 0, "accepted": 0, "in_progress": 0, "done": 0}
        assert set(summary["role_counts"]) == {"patient", "nurse", "porter", "supervisor"}

    def test_urgent_counts_only_open_work(self):
        tasks = [
            make_task(TaskPriority.URGENT),
            make_task(TaskPriority.URGENT, TaskStatus.IN_PROGRESS),
            make_task(TaskPriority.URGENT, TaskStatus.DONE),
        ]
        summary = summarize_tasks(tasks, now=NOW)
        assert summary["urgent_tasks"] == 2
        assert summary["priority_counts"]["urgent"] == 3

    def test_recent_window(self):
        tasks = [
            make_task(created_at=NOW - timedelta(days=1)),
            make_task(created_at=NOW - timedelta(days=8)),
            # SQLite hands back naive UTC timestamps
            make_task(created_at=(NOW - timedelta(days=2)).replace(tzinfo=None)),
        ]
        assert summarize_tasks(tasks, now=NOW, window_days=7)["recent_tasks_count"] == 2
        assert summarize_tasks(tasks, now=NOW, window_days=30)["recent_tasks_count"] == 3

    def test_breakdowns(self):
        tasks = [
            make_task(type=TaskType.MEAL, created_by=Role.PATIENT),
            make_task(type=TaskType.MEAL, created_by=Role.NURSE, status=TaskStatus.DONE),
            make_task(type=TaskType.NURSING, created_by=Role.NURSE),
        ]
        summary = summarize_tasks(tasks, now=NOW)
        assert summary["type_counts"]["meal"] == 2
        assert summary["type_counts"]["nursing"] == 1
        assert summary["type_counts"]["transport"] == 0
        assert summary["role_counts"] == {"patient": 1, "nurse": 2, "porter": 0, "supervisor": 0}
        assert summary["active_tasks"] == 2
        assert summary["completed_tasks"] == 1


class TestAnalyticsEndpoint:

    async def test_supervisor_rollup(
            self, client: AsyncClient, nurse_headers, porter_headers, supervisor_headers, create_task
    ):
        await create_task(nurse_headers, priority="urgent")
        await create_task(nurse_headers, priority="urgent")
        done = await create_task(nurse_headers, priority="low")

        url = f"/api/v1/tasks/{done['id']}"
        await client.post(f"{url}/accept", headers=porter_headers)
        await client.patch(f"{url}/status", json={"status": "in_progress"}, headers=porter_headers)
        await client.patch(f"{url}/status", json={"status": "done"}, headers=porter_headers)

        response = await client.get("/api/v1/analytics", headers=supervisor_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["total_tasks"] == 3
        assert data["urgent_tasks"] == 2
        assert data["completed_tasks"] == 1
        assert data["active_tasks"] == 2
        assert data["recent_tasks_count"] == 3
        assert data["status_counts"]["done"] == 1
        assert data["role_counts"]["nurse"] == 3
        assert "generated_at" in data

    async def test_non_supervisor_refused(self, client: AsyncClient, nurse_headers):
        response = await client.get("/api/v1/analytics", headers=nurse_headers)
        assert response.status_code == 403

    async def test_anonymous_refused(self, client: AsyncClient):
        response = await client.get("/api/v1/analytics")
        assert response.status_code == 401
