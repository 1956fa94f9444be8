from typing import Any
import pytest
from fastapi.testclient import TestClient
from pytest_mock import MockerFixture

from src.common.exceptions import RowStoreError


class TestTasksApi:
    @pytest.fixture
    def task_data(self) -> dict[str, Any]:
        return {
            "title": "Write report",
            "content": "Quarterly numbers",
            "dueDate": "2024-06-20T10:00",
            "category": "work",
            "priority": "high",
        }

    def create_task(self, test_client: TestClient, data: dict[str, Any]) -> dict[str, Any]:
        response = test_client.post("/api/tasks", json=data)
        assert response.status_code == 201
        return response.json()

    def test_list_tasks_empty(self, test_client: TestClient) -> None:
        response = test_client.get("/api/tasks")
        assert response.status_code == 200
        assert response.json() == []

    def test_create_then_list(
        self, test_client: TestClient, task_data: dict[str, Any]
    ) -> None:
        created = self.create_task(test_client, task_data)

        assert created == {**task_data, "id": "001", "completed": False}

        tasks = test_client.get("/api/tasks").json()
        matches = [task for task in tasks if task["id"] == created["id"]]
        assert matches == [created]

    def test_sequential_ids(self, test_client: TestClient) -> None:
        first = self.create_task(test_client, {"title": "One"})
        second = self.create_task(test_client, {"title": "Two"})

        assert (first["id"], second["id"]) == ("001", "002")
        assert second["priority"] == "medium"
        assert second["dueDate"] is None

    def test_create_without_title(self, test_client: TestClient) -> None:
        response = test_client.post("/api/tasks", json={"content": "No title"})

        assert response.status_code == 400
        assert response.json() == {"error": "title is required"}
        assert test_client.get("/api/tasks").json() == []

    def test_create_with_invalid_priority(self, test_client: TestClient) -> None:
        response = test_client.post(
            "/api/tasks", json={"title": "x", "priority": "urgent"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Validation error"

    def test_update_completed_only(
        self, test_client: TestClient, task_data: dict[str, Any]
    ) -> None:
        created = self.create_task(test_client, task_data)

        response = test_client.put(
            f"/api/tasks/{created['id']}", json={"completed": True}
        )

        assert response.status_code == 200
        assert response.json() == {**created, "completed": True}

    def test_update_accepts_string_completed_flag(
        self, test_client: TestClient
    ) -> None:
        created = self.create_task(test_client, {"title": "Flag"})

        response = test_client.put(f"/api/tasks/{created['id']}", json={"completed": "1"})

        assert response.json()["completed"] is True

    def test_update_unknown_task(self, test_client: TestClient) -> None:
        response = test_client.put("/api/tasks/999", json={"title": "Nope"})

        assert response.status_code == 404
        assert response.json() == {"error": "Task '999' not found"}

    def test_update_blank_title(self, test_client: TestClient) -> None:
        created = self.create_task(test_client, {"title": "Keep me"})

        response = test_client.put(f"/api/tasks/{created['id']}", json={"title": ""})

        assert response.status_code == 400
        assert response.json() == {"error": "title is required"}
        assert test_client.get("/api/tasks").json() == [created]

    def test_delete_task(
        self, test_client: TestClient, task_data: dict[str, Any]
    ) -> None:
        created = self.create_task(test_client, task_data)

        response = test_client.delete(f"/api/tasks/{created['id']}")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert test_client.get("/api/tasks").json() == []

    def test_delete_unknown_task_leaves_store(
        self, test_client: TestClient, task_data: dict[str, Any]
    ) -> None:
        self.create_task(test_client, task_data)
        count_before = len(test_client.get("/api/tasks").json())

        response = test_client.delete("/api/tasks/404")

        assert response.status_code == 404
        assert len(test_client.get("/api/tasks").json()) == count_before

    def test_store_failure_hides_raw_error(
        self, test_client: TestClient, mocker: MockerFixture
    ) -> None:
        row_store = test_client.app.state.row_store  # type: ignore
        mocker.patch.object(
            row_store, "read_rows", side_effect=RowStoreError("secret quota detail")
        )

        response = test_client.get("/api/tasks")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to load tasks"}


class TestShellAndHealth:
    def test_healthcheck(self, test_client: TestClient) -> None:
        response = test_client.get("/healthcheck")

        assert response.status_code == 200
        assert response.json()["row_store"] == {"status": "ok", "backend": "memory"}

    def test_healthcheck_store_down(
        self, test_client: TestClient, mocker: MockerFixture
    ) -> None:
        row_store = test_client.app.state.row_store  # type: ignore
        mocker.patch.object(
            row_store,
            "read_rows",
            side_effect=RowStoreError(
                "Failed to read rows: <HttpError 403 quota secret-detail>"
            ),
        )

        response = test_client.get("/healthcheck")

        assert response.status_code == 503
        assert response.json()["row_store"]["status"] == "error"
        assert response.json()["row_store"]["message"] == "Row store unavailable"
        assert "secret-detail" not in response.text
        assert "HttpError" not in response.text

    def test_unknown_path_serves_shell(self, test_client: TestClient) -> None:
        response = test_client.get("/list")

        assert response.status_code == 200
        assert "Tasksheet" in response.text

    def test_root_serves_shell(self, test_client: TestClient) -> None:
        response = test_client.get("/")

        assert response.status_code == 200
        assert "<html>" in response.text

    def test_static_asset(self, test_client: TestClient) -> None:
        response = test_client.get("/assets/app.js")

        assert response.status_code == 200
        assert "tasksheet" in response.text

    def test_path_traversal_serves_shell(self, test_client: TestClient) -> None:
        response = test_client.get("/../pyproject.toml")

        assert "Tasksheet" in response.text
