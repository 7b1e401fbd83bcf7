"""任务生命周期引擎 -- 创建与完成任务

创建任务：扣减创建者余额 + 写入 open 任务。
完成任务：open -> completed + 完成者入账 + 写入一条 task_log。
两者都在单个写事务内完成，任一步失败整体回滚。
"""

from datetime import UTC, datetime
from decimal import Decimal

import structlog

from .exceptions import (
    ExecutorNotFoundError,
    InsufficientFundsError,
    InvalidRewardError,
    SelfCompletionError,
    TaskAlreadyCompletedError,
    TaskCoinError,
    TaskNotFoundError,
    UserNotFoundError,
)
from .models import Task, TaskStatus, validate_transition
from .money import from_cents, to_cents
from .store import StoreGroup

log = structlog.get_logger()


class TaskLifecycle:
    """任务生命周期业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def create_task(
        self, creator_id: int, link: str, reward: Decimal
    ) -> Task:
        """发布任务

        Args:
            creator_id: 创建者用户 ID
            link: 任务目标链接（格式已由网关校验）
            reward: 悬赏金币，必须为正数且至多两位小数

        Returns:
            新建的 open 任务

        Raises:
            InvalidRewardError: 悬赏非正数或精度超限
            UserNotFoundError: 创建者不存在
            InsufficientFundsError: 余额不足
        """
        reward_cents = self._reward_to_cents(reward)

        async with self._stores.transaction():
            # 持锁后取时间，created_at 与提交顺序一致
            now = datetime.now(UTC)
            balance_cents = await self._stores.user_store.get_coin_cents(creator_id)
            if balance_cents is None:
                raise UserNotFoundError(creator_id)
            if balance_cents < reward_cents:
                raise InsufficientFundsError(
                    balance=from_cents(balance_cents),
                    required=from_cents(reward_cents),
                )

            await self._stores.user_store.update_coin(
                creator_id, balance_cents - reward_cents
            )
            task_id = await self._stores.task_store.create_task(
                creator_user_id=creator_id,
                link=link,
                coin_reward_cents=reward_cents,
                created_at=now,
            )

        log.info(
            "task_created",
            task_id=task_id,
            creator_user_id=creator_id,
            coin_reward=str(from_cents(reward_cents)),
        )
        return Task(
            task_id=task_id,
            creator_user_id=creator_id,
            link=link,
            coin_reward=from_cents(reward_cents),
            status=TaskStatus.OPEN,
            created_at=now,
        )

    async def complete_task(self, task_id: int, executor_id: int) -> Task:
        """完成任务并向完成者发放悬赏

        所有检查都基于事务开始后读到的任务行。

        Returns:
            状态为 completed 的任务

        Raises:
            TaskNotFoundError: 任务不存在
            SelfCompletionError: 完成者即创建者
            TaskAlreadyCompletedError: 任务已完成
            ExecutorNotFoundError: 完成者不存在
        """
        try:
            async with self._stores.transaction():
                task = await self._stores.task_store.get_task(task_id)
                if task is None:
                    raise TaskNotFoundError(task_id)
                if task.creator_user_id == executor_id:
                    raise SelfCompletionError(task_id)
                if not validate_transition(task.status, TaskStatus.COMPLETED):
                    raise TaskAlreadyCompletedError(task_id)

                balance_cents = await self._stores.user_store.get_coin_cents(
                    executor_id
                )
                if balance_cents is None:
                    raise ExecutorNotFoundError(executor_id)

                # 带状态条件的更新，未命中说明已被其他事务完成
                if not await self._stores.task_store.mark_completed(task_id):
                    raise TaskAlreadyCompletedError(task_id)

                await self._stores.user_store.update_coin(
                    executor_id, balance_cents + to_cents(task.coin_reward)
                )
                record = await self._stores.task_log_store.append(
                    task_id=task_id,
                    executor_user_id=executor_id,
                    completed_at=datetime.now(UTC),
                )
        except TaskCoinError as e:
            log.info(
                "task_completion_rejected",
                task_id=task_id,
                executor_user_id=executor_id,
                reason=e.code,
            )
            raise

        log.info(
            "task_completed",
            task_id=task_id,
            executor_user_id=executor_id,
            log_id=record.log_id,
            coin_reward=str(task.coin_reward),
        )
        return task.model_copy(update={"status": TaskStatus.COMPLETED})

    @staticmethod
    def _reward_to_cents(reward: Decimal) -> int:
        try:
            reward_cents = to_cents(reward)
        except ValueError as e:
            raise InvalidRewardError(str(e)) from e
        if reward_cents <= 0:
            raise InvalidRewardError("Coin reward must be positive")
        return reward_cents
