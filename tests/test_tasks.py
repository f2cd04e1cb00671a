"""
Task endpoint tests for CareRelay API
"""
from httpx import AsyncClient


class TestTaskCreation:

    async def test_nurse_creates_task(self, client: AsyncClient, nurse_headers, create_task):
        created = await create_task(
            nurse_headers,
            type="nursing",
            priority="high",
            bed_number="5",
            patient_name="J. Doe",
            description="assist ambulation",
            location=None,
            case_number=None
        )
        assert created["id"]
        assert created["task_code"].startswith("TASK-")

        task = (await client.get(f"/api/v1/tasks/{created['id']}", headers=nurse_headers)).json()
        assert task["status"] == "new"
        assert task["assigned_to"] is None
        assert task["created_by"] == "nurse"
        assert task["created_by_name"] == "Nina Nurse"
        assert task["accepted_at"] is None
        assert task["location"] is None

    async def test_blank_optional_fields_become_null(self, client: AsyncClient, nurse_headers, create_task):
        created = await create_task(nurse_headers, location="  ", case_number="")
        task = (await client.get(f"/api/v1/tasks/{created['id']}", headers=nurse_headers)).json()
        assert task["location"] is None
        assert task["case_number"] is None

    async def test_unknown_type_rejected(self, client: AsyncClient, nurse_headers, task_payload):
        response = await client.post(
            "/api/v1/tasks", json={**task_payload, "type": "surgery"}, headers=nurse_headers
        )
        assert response.status_code == 422

    async def test_missing_description_rejected(self, client: AsyncClient, nurse_headers, task_payload):
        payload = {k: v for k, v in task_payload.items() if k != "description"}
        response = await client.post("/api/v1/tasks", json=payload, headers=nurse_headers)
        assert response.status_code == 422

    async def test_anonymous_rejected(self, client: AsyncClient, task_payload):
        response = await client.post("/api/v1/tasks", json=task_payload)
        assert response.status_code == 401

    async def test_task_codes_differ(self, nurse_headers, create_task):
        first = await create_task(nurse_headers)
        second = await create_task(nurse_headers)
        assert first["id"] != second["id"]
        assert first["task_code"] != second["task_code"]


class TestTaskListing:

    async def test_newest_first(self, client: AsyncClient, nurse_headers, create_task):
        first = await create_task(nurse_headers, description="first")
        second = await create_task(nurse_headers, description="second")

        tasks = (await client.get("/api/v1/tasks", headers=nurse_headers)).json()
        assert [t["id"] for t in tasks] == [second["id"], first["id"]]

    async def test_supervisor_sees_everything(
            self, client: AsyncClient, nurse_headers, patient_headers, supervisor_headers, create_task
    ):
        await create_task(nurse_headers)
        await create_task(patient_headers, type="meal")

        tasks = (await client.get("/api/v1/tasks", headers=supervisor_headers)).json()
        assert len(tasks) == 2

    async def test_hidden_task_looks_missing(self, client: AsyncClient, nurse_headers, porter_headers, create_task):
        created = await create_task(nurse_headers, type="nursing")

        response = await client.get(f"/api/v1/tasks/{created['id']}", headers=porter_headers)
        assert response.status_code == 404

    async def test_unknown_task(self, client: AsyncClient, nurse_headers):
        response = await client.get(
            "/api/v1/tasks/00000000-0000-4000-8000-000000000000", headers=nurse_headers
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Task not found"


class TestAcceptTask:

    async def test_porter_accepts_transport(self, client: AsyncClient, nurse_headers, porter_headers, create_task):
        created = await create_task(nurse_headers, type="transport")

        response = await client.post(f"/api/v1/tasks/{created['id']}/accept", headers=porter_headers)
        assert response.status_code == 200
        task = response.json()
        assert task["status"] == "accepted"
        assert task["assigned_to"] == "Bob"
        assert task["assigned_to_name"] == "Bob"
        assert task["accepted_at"] is not None

        again = await client.post(f"/api/v1/tasks/{created['id']}/accept", headers=porter_headers)
        assert again.status_code == 409

    async def test_accepted_task_stays_visible_to_assignee(
            self, client: AsyncClient, nurse_headers, porter_headers, create_task
    ):
        created = await create_task(nurse_headers, type="transport")
        await client.post(f"/api/v1/tasks/{created['id']}/accept", headers=porter_headers)

        tasks = (await client.get("/api/v1/tasks", headers=porter_headers)).json()
        assert [t["id"] for t in tasks] == [created["id"]]

    async def test_accept_unknown_task(self, client: AsyncClient, porter_headers):
        response = await client.post(
            "/api/v1/tasks/00000000-0000-4000-8000-000000000000/accept", headers=porter_headers
        )
        assert response.status_code == 404


class TestAssignTask:

    async def test_supervisor_assigns_new_task(
            self, client: AsyncClient, nurse_headers, supervisor_headers, create_task
    ):
        created = await create_task(nurse_headers)

        response = await client.post(
            f"/api/v1/tasks/{created['id']}/assign",
            json={"assigned_to": "Alice"},
            headers=supervisor_headers
        )
        assert response.status_code == 200
        task = response.json()
        assert task["status"] == "accepted"
        assert task["assigned_to"] == "Alice"
        assert task["accepted_at"] is not None

    async def test_reassign_keeps_status_and_accepted_at(
            self, client: AsyncClient, nurse_headers, porter_headers, supervisor_headers, create_task
    ):
        created = await create_task(nurse_headers)
        accepted = (await client.post(f"/api/v1/tasks/{created['id']}/accept", headers=porter_headers)).json()
        await client.patch(
            f"/api/v1/tasks/{created['id']}/status", json={"status": "in_progress"}, headers=porter_headers
        )

        response = await client.post(
            f"/api/v1/tasks/{created['id']}/assign",
            json={"assigned_to": "Alice"},
            headers=supervisor_headers
        )
        task = response.json()
        assert task["status"] == "in_progress"
        assert task["assigned_to"] == "Alice"
        assert task["accepted_at"] == accepted["accepted_at"]

    async def test_non_supervisor_cannot_assign(self, client: AsyncClient, nurse_headers, create_task):
        created = await create_task(nurse_headers)

        response = await client.post(
            f"/api/v1/tasks/{created['id']}/assign",
            json={"assigned_to": "Alice"},
            headers=nurse_headers
        )
        assert response.status_code == 403

    async def test_blank_assignee_rejected(self, client: AsyncClient, nurse_headers, supervisor_headers, create_task):
        created = await create_task(nurse_headers)

        response = await client.post(
            f"/api/v1/tasks/{created['id']}/assign",
            json={"assigned_to": ""},
            headers=supervisor_headers
        )
        assert response.status_code == 422


class TestTaskStatus:

    async def test_forward_path_stamps_each_timestamp(
            self, client: AsyncClient, nurse_headers, porter_headers, create_task
    ):
        created = await create_task(nurse_headers)
        url = f"/api/v1/tasks/{created['id']}"
        await client.post(f"{url}/accept", headers=porter_headers)

        started = await client.patch(f"{url}/status", json={"status": "in_progress"}, headers=porter_headers)
        assert started.status_code == 200
        assert started.json()["started_at"] is not None
        assert started.json()["completed_at"] is None

        done = await client.patch(f"{url}/status", json={"status": "done"}, headers=porter_headers)
        assert done.status_code == 200
        assert done.json()["status"] == "done"
        assert done.json()["completed_at"] is not None

    async def test_repeating_status_keeps_timestamp(
            self, client: AsyncClient, nurse_headers, porter_headers, create_task
    ):
        created = await create_task(nurse_headers)
        url = f"/api/v1/tasks/{created['id']}"
        await client.post(f"{url}/accept", headers=porter_headers)

        first = (await client.patch(f"{url}/status", json={"status": "in_progress"}, headers=porter_headers)).json()
        second = await client.patch(f"{url}/status", json={"status": "in_progress"}, headers=porter_headers)

        assert second.status_code == 200
        assert second.json()["started_at"] == first["started_at"]

    async def test_cannot_move_backwards(self, client: AsyncClient, nurse_headers, porter_headers, create_task):
        created = await create_task(nurse_headers)
        url = f"/api/v1/tasks/{created['id']}"
        await client.post(f"{url}/accept", headers=porter_headers)
        await client.patch(f"{url}/status", json={"status": "in_progress"}, headers=porter_headers)

        response = await client.patch(f"{url}/status", json={"status": "accepted"}, headers=porter_headers)
        assert response.status_code == 409

    async def test_cannot_skip_states(self, client: AsyncClient, nurse_headers, create_task):
        created = await create_task(nurse_headers)

        response = await client.patch(
            f"/api/v1/tasks/{created['id']}/status", json={"status": "done"}, headers=nurse_headers
        )
        assert response.status_code == 409
        assert response.json()["detail"].endswith("allowed: accepted")

    async def test_new_is_not_a_target(self, client: AsyncClient, nurse_headers, create_task):
        created = await create_task(nurse_headers)

        response = await client.patch(
            f"/api/v1/tasks/{created['id']}/status", json={"status": "new"}, headers=nurse_headers
        )
        assert response.status_code == 422

    async def test_unrelated_porter_cannot_update(
            self, client: AsyncClient, make_profile, nurse_headers, porter_headers, create_task
    ):
        other_porter = await make_profile("porter2@example.com", "porter", "Carl")
        created = await create_task(nurse_headers)
        await client.post(f"/api/v1/tasks/{created['id']}/accept", headers=porter_headers)

        response = await client.patch(
            f"/api/v1/tasks/{created['id']}/status", json={"status": "in_progress"}, headers=other_porter
        )
        assert response.status_code == 403

    async def test_any_nurse_may_update_nurse_task(
            self, client: AsyncClient, make_profile, nurse_headers, create_task
    ):
        other_nurse = await make_profile("nurse2@example.com", "nurse", "Nora")
        created = await create_task(nurse_headers)

        response = await client.patch(
            f"/api/v1/tasks/{created['id']}/status", json={"status": "accepted"}, headers=other_nurse
        )
        assert response.status_code == 200
        assert response.json()["accepted_at"] is not None
        assert response.json()["assigned_to"] is None


class TestTaskNotes:

    async def test_creator_role_updates_notes(self, client: AsyncClient, nurse_headers, create_task):
        created = await create_task(nurse_headers)

        response = await client.patch(
            f"/api/v1/tasks/{created['id']}/notes", json={"notes": "Patient prefers left side"}, headers=nurse_headers
        )
        assert response.status_code == 200
        assert response.json()["notes"] == "Patient prefers left side"
        assert response.json()["status"] == "new"

    async def test_patient_cannot_update_nurse_task(
            self, client: AsyncClient, nurse_headers, patient_headers, create_task
    ):
        created = await create_task(nurse_headers)

        response = await client.patch(
            f"/api/v1/tasks/{created['id']}/notes", json={"notes": "hello"}, headers=patient_headers
        )
        assert response.status_code == 403


class TestDeleteTask:

    async def test_supervisor_deletes(self, client: AsyncClient, nurse_headers, supervisor_headers, create_task):
        created = await create_task(nurse_headers)

        response = await client.delete(f"/api/v1/tasks/{created['id']}", headers=supervisor_headers)
        assert response.status_code == 204

        missing = await client.get(f"/api/v1/tasks/{created['id']}", headers=supervisor_headers)
        assert missing.status_code == 404

    async def test_creator_role_deletes(self, client: AsyncClient, nurse_headers, create_task):
        created = await create_task(nurse_headers)

        response = await client.delete(f"/api/v1/tasks/{created['id']}", headers=nurse_headers)
        assert response.status_code == 204

    async def test_assignee_cannot_delete(self, client: AsyncClient, nurse_headers, porter_headers, create_task):
        created = await create_task(nurse_headers)
        await client.post(f"/api/v1/tasks/{created['id']}/accept", headers=porter_headers)

        response = await client.delete(f"/api/v1/tasks/{created['id']}", headers=porter_headers)
        assert response.status_code == 403

    async def test_delete_unknown_task(self, client: AsyncClient, supervisor_headers):
        response = await client.delete(
            "/api/v1/tasks/00000000-0000-4000-8000-000000000000", headers=supervisor_headers
        )
        assert response.status_code == 404
