"""gateway 测试配置 -- FastAPI app + httpx AsyncClient fixture"""

from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

AuthHeaders = Callable[[str, str], Awaitable[dict[str, str]]]


@pytest_asyncio.fixture
async def test_app(store_group, tmp_db_path, monkeypatch):
    monkeypatch.setenv("TASKCOIN_DB_PATH", str(tmp_db_path))
    monkeypatch.setenv("TASKCOIN_JWT_SECRET", "test-secret")
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")

    from taskcoin.gateway.main import create_app

    app = create_app()

    # 手动初始化（绕过 lifespan）
    app.state.store_group = store_group
    yield app


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def auth_headers(client: AsyncClient) -> AuthHeaders:
    """注册并登录用户，返回带 Bearer 令牌的请求头"""

    async def _register_and_login(username: str, password: str = "secret123") -> dict[str, str]:
        resp = await client.post(
            "/api/auth/register",
            json={"username": username, "password": password},
        )
        assert resp.status_code == 201, resp.text
        resp = await client.post(
            "/api/auth/login",
            json={"username": username, "password": password},
        )
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    return _register_and_login
