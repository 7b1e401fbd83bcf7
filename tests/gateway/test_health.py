"""健康检查测试"""

from httpx import ASGITransport, AsyncClient
from taskcoin.core.store import create_store_group


class TestHealthCheck:
    async def test_health_returns_200(self, client: AsyncClient):
        """GET /health 永远返回 200"""
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    async def test_ready_returns_checks(self, client: AsyncClient):
        resp = await client.get("/ready")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ready"
        assert data["checks"]["sqlite"] == "ok"
        assert data["checks"]["wal_mode"] == "ok"
        assert isinstance(data["checks"]["disk_space_mb"], int)

    async def test_ready_503_when_sqlite_down(self, test_app, tmp_path):
        """SQLite 连接关闭后 /ready 返回 503"""
        broken = await create_store_group(str(tmp_path / "broken.db"))
        await broken.close()
        test_app.state.store_group = broken

        async with AsyncClient(
            transport=ASGITransport(app=test_app),
            base_url="http://test",
        ) as ac:
            resp = await ac.get("/ready")
        assert resp.status_code == 503
        assert resp.json()["status"] == "not_ready"
