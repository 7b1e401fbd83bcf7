"""只读查询与聚合

所有查询都直接读取 SQLite，无缓存；可重复调用，反映当前已提交状态。
"""

from .config import STARTING_BALANCE
from .exceptions import UserNotFoundError
from .models import (
    DashboardData,
    LedgerAudit,
    PublicUser,
    TaskStatus,
    TaskWithCreator,
)
from .money import from_cents, to_cents
from .store import StoreGroup


class MarketplaceQueries:
    """任务市场查询服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def list_open_tasks(self) -> list[TaskWithCreator]:
        """全部 open 任务（附创建者用户名），按创建时间倒序"""
        async with self._stores.reading():
            return await self._stores.task_store.list_open_tasks()

    async def get_user_profile(self, user_id: int) -> PublicUser:
        """用户公开信息

        Raises:
            UserNotFoundError: 用户不存在
        """
        async with self._stores.reading():
            user = await self._stores.user_store.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user.to_public()

    async def get_dashboard(self, user_id: int) -> DashboardData:
        """用户面板：个人信息 + 我发布的任务 + 他人发布的 open 任务 + 完成数

        Raises:
            UserNotFoundError: 用户不存在
        """
        async with self._stores.reading():
            user = await self._stores.user_store.get_user(user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            created_tasks = await self._stores.task_store.list_tasks_by_creator(user_id)
            available_tasks = await self._stores.task_store.list_open_tasks(
                exclude_creator=user_id
            )
            completed_count = await self._stores.task_log_store.count_for_executor(
                user_id
            )

        return DashboardData(
            user=user.to_public(),
            created_tasks=created_tasks,
            available_tasks=available_tasks,
            completed_tasks_count=completed_count,
        )

    async def audit_ledger(self) -> LedgerAudit:
        """账本守恒校验（只读）"""
        async with self._stores.reading():
            user_count, balance_cents = (
                await self._stores.user_store.get_balance_totals()
            )
            totals = await self._stores.task_store.get_reward_totals()
            record_count = await self._stores.task_log_store.count_all()

        _, open_cents = totals[TaskStatus.OPEN]
        completed_count, completed_cents = totals[TaskStatus.COMPLETED]
        expected_cents = to_cents(STARTING_BALANCE) * user_count - open_cents

        return LedgerAudit(
            user_count=user_count,
            total_balance=from_cents(balance_cents),
            open_reward_total=from_cents(open_cents),
            completed_reward_total=from_cents(completed_cents),
            expected_balance=from_cents(expected_cents),
            completed_task_count=completed_count,
            completion_record_count=record_count,
        )
