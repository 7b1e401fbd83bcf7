"""core 测试配置 -- 注册用户的辅助 fixture"""

import pytest_asyncio
from taskcoin.core.accounts import AccountService
from taskcoin.core.lifecycle import TaskLifecycle
from taskcoin.core.queries import MarketplaceQueries


@pytest_asyncio.fixture
async def accounts(store_group) -> AccountService:
    return AccountService(store_group)


@pytest_asyncio.fixture
async def lifecycle(store_group) -> TaskLifecycle:
    return TaskLifecycle(store_group)


@pytest_asyncio.fixture
async def queries(store_group) -> MarketplaceQueries:
    return MarketplaceQueries(store_group)


@pytest_asyncio.fixture
async def alice(accounts):
    """初始余额 100.00 的用户"""
    return await accounts.register_user("alice", "hash:salt")


@pytest_asyncio.fixture
async def bob(accounts):
    return await accounts.register_user("bob", "hash:salt")
