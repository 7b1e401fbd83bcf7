"""可观测性测试 -- request_id 与 task_id 追踪"""

from httpx import AsyncClient
from structlog.testing import capture_logs
from taskcoin.gateway.middleware.trace_mw import extract_task_id


class TestObservability:
    async def test_request_id_in_response_header(self, client: AsyncClient):
        """每个请求响应包含 X-Request-ID"""
        resp = await client.get("/api/tasks")
        assert resp.status_code == 200
        # ULID 格式：26 字符
        assert len(resp.headers["x-request-id"]) == 26

    async def test_request_ids_are_unique(self, client: AsyncClient):
        ids = set()
        for _ in range(3):
            resp = await client.get("/health")
            ids.add(resp.headers["x-request-id"])
        assert len(ids) == 3

    async def test_error_responses_carry_request_id(self, client: AsyncClient):
        resp = await client.get("/api/users/me")
        assert resp.status_code == 401
        assert "x-request-id" in resp.headers


class TestRequestLogging:
    """request_completed 携带调用者与业务错误码"""

    @staticmethod
    def _completed(logs: list[dict]) -> dict:
        entries = [e for e in logs if e["event"] == "request_completed"]
        assert len(entries) == 1
        return entries[0]

    async def test_rejected_request_logs_user_and_code(
        self, client: AsyncClient, auth_headers
    ):
        alice = await auth_headers("alice")
        task = (
            await client.post(
                "/api/tasks",
                json={"link": "https://example.com", "coin_reward": "5.00"},
                headers=alice,
            )
        ).json()
        me = (await client.get("/api/users/me", headers=alice)).json()

        with capture_logs() as logs:
            resp = await client.post(
                f"/api/tasks/{task['task_id']}/complete", headers=alice
            )

        assert resp.status_code == 403
        entry = self._completed(logs)
        assert entry["log_level"] == "warning"
        assert entry["status_code"] == 403
        assert entry["error_code"] == "CANNOT_COMPLETE_OWN_TASK"
        assert entry["user_id"] == me["user_id"]
        rejected = [e for e in logs if e["event"] == "task_completion_rejected"]
        assert rejected[0]["reason"] == "CANNOT_COMPLETE_OWN_TASK"

    async def test_successful_request_has_no_error_code(self, client: AsyncClient):
        with capture_logs() as logs:
            resp = await client.get("/api/tasks")

        assert resp.status_code == 200
        entry = self._completed(logs)
        assert entry["log_level"] == "info"
        assert "error_code" not in entry
        assert "user_id" not in entry
        assert entry["duration_ms"] >= 0

    async def test_missing_token_logs_unauthorized(self, client: AsyncClient):
        with capture_logs() as logs:
            resp = await client.get("/api/dashboard")

        assert resp.status_code == 401
        entry = self._completed(logs)
        assert entry["error_code"] == "UNAUTHORIZED"
        assert "user_id" not in entry

    async def test_login_failure_logged(self, client: AsyncClient, auth_headers):
        await auth_headers("alice")

        with capture_logs() as logs:
            resp = await client.post(
                "/api/auth/login",
                json={"username": "alice", "password": "wrong-pass"},
            )

        assert resp.status_code == 401
        failures = [e for e in logs if e["event"] == "login_failed"]
        assert len(failures) == 1
        assert failures[0]["username"] == "alice"
        assert "password" not in failures[0]


class TestExtractTaskId:
    def test_task_paths(self):
        assert extract_task_id("/api/tasks/42/complete") == 42
        assert extract_task_id("/api/tasks/7") == 7

    def test_other_paths(self):
        assert extract_task_id("/api/tasks") is None
        assert extract_task_id("/api/tasks/abc/complete") is None
        assert extract_task_id("/health") is None
