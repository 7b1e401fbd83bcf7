"""TaskStore SQLite 实现

悬赏金额以整数分存储在 coin_reward_cents 列，创建后不再更新。
状态只能通过 mark_completed 从 open 推进到 completed。
"""

from datetime import datetime

import aiosqlite

from ..models.enums import TaskStatus
from ..models.task import Task, TaskWithCreator
from ..money import from_cents

_TASK_COLUMNS = (
    "t.task_id, t.creator_user_id, t.link, t.coin_reward_cents, t.status, t.created_at"
)


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_task(
        self,
        creator_user_id: int,
        link: str,
        coin_reward_cents: int,
        created_at: datetime,
    ) -> int:
        """创建 open 状态的任务记录，返回新 task_id"""
        cursor = await self._conn.execute(
            """
            INSERT INTO tasks (creator_user_id, link, coin_reward_cents, status, created_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                creator_user_id,
                link,
                coin_reward_cents,
                TaskStatus.OPEN.value,
                created_at.isoformat(timespec="microseconds"),
            ),
        )
        return cursor.lastrowid

    async def get_task(self, task_id: int) -> Task | None:
        """根据 task_id 查询任务"""
        cursor = await self._conn.execute(
            f"SELECT {_TASK_COLUMNS} FROM tasks t WHERE t.task_id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    async def list_open_tasks(
        self, exclude_creator: int | None = None
    ) -> list[TaskWithCreator]:
        """查询 open 任务（附创建者用户名），按 created_at 倒序

        Args:
            exclude_creator: 排除该用户创建的任务
        """
        sql = f"""
            SELECT {_TASK_COLUMNS}, u.username
            FROM tasks t
            JOIN users u ON u.user_id = t.creator_user_id
            WHERE t.status = ?
        """
        params: list = [TaskStatus.OPEN.value]
        if exclude_creator is not None:
            sql += " AND t.creator_user_id != ?"
            params.append(exclude_creator)
        sql += " ORDER BY t.created_at DESC, t.task_id DESC"

        cursor = await self._conn.execute(sql, params)
        rows = await cursor.fetchall()
        return [
            TaskWithCreator(
                **self._row_to_task(row).model_dump(),
                creator_username=row[6],
            )
            for row in rows
        ]

    async def list_tasks_by_creator(self, creator_user_id: int) -> list[Task]:
        """查询用户创建的全部任务（任意状态），按 created_at 倒序"""
        cursor = await self._conn.execute(
            f"""
            SELECT {_TASK_COLUMNS} FROM tasks t
            WHERE t.creator_user_id = ?
            ORDER BY t.created_at DESC, t.task_id DESC
            """,
            (creator_user_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def mark_completed(self, task_id: int) -> bool:
        """将任务从 open 推进到 completed

        带状态条件更新：只有当前仍为 open 时才会修改。

        Returns:
            True 如果本次调用完成了状态流转
        """
        cursor = await self._conn.execute(
            "UPDATE tasks SET status = ? WHERE task_id = ? AND status = ?",
            (TaskStatus.COMPLETED.value, task_id, TaskStatus.OPEN.value),
        )
        return cursor.rowcount == 1

    async def get_reward_totals(self) -> dict[TaskStatus, tuple[int, int]]:
        """按状态汇总任务：status -> (任务数, 悬赏总和分)"""
        cursor = await self._conn.execute(
            """
            SELECT status, COUNT(*), COALESCE(SUM(coin_reward_cents), 0)
            FROM tasks GROUP BY status
            """
        )
        rows = await cursor.fetchall()
        totals = {status: (0, 0) for status in TaskStatus}
        for row in rows:
            totals[TaskStatus(row[0])] = (row[1], row[2])
        return totals

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            task_id=row[0],
            creator_user_id=row[1],
            link=row[2],
            coin_reward=from_cents(row[3]),
            status=TaskStatus(row[4]),
            created_at=datetime.fromisoformat(row[5]),
        )
