"""TaskLogStore SQLite 实现

task_log 表 append-only：只允许插入，不允许更新或删除。
"""

from datetime import datetime

import aiosqlite

from ..models.task import TaskLog


class SqliteTaskLogStore:
    """TaskLogStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def append(
        self,
        task_id: int,
        executor_user_id: int,
        completed_at: datetime,
    ) -> TaskLog:
        """追加完成记录（append-only）

        注意：此方法不自动提交事务，需由调用方管理事务。

        Raises:
            aiosqlite.IntegrityError: 该任务已有完成记录
        """
        cursor = await self._conn.execute(
            """
            INSERT INTO task_log (task_id, executor_user_id, completed_at)
            VALUES (?, ?, ?)
            """,
            (
                task_id,
                executor_user_id,
                completed_at.isoformat(timespec="microseconds"),
            ),
        )
        return TaskLog(
            log_id=cursor.lastrowid,
            task_id=task_id,
            executor_user_id=executor_user_id,
            completed_at=completed_at,
        )

    async def list_for_task(self, task_id: int) -> list[TaskLog]:
        """查询指定任务的完成记录"""
        cursor = await self._conn.execute(
            """
            SELECT log_id, task_id, executor_user_id, completed_at
            FROM task_log WHERE task_id = ? ORDER BY log_id ASC
            """,
            (task_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_log(row) for row in rows]

    async def count_for_executor(self, executor_user_id: int) -> int:
        """统计用户作为完成者的记录数"""
        cursor = await self._conn.execute(
            "SELECT COUNT(*) FROM task_log WHERE executor_user_id = ?",
            (executor_user_id,),
        )
        row = await cursor.fetchone()
        return row[0] if row else 0

    async def count_all(self) -> int:
        cursor = await self._conn.execute("SELECT COUNT(*) FROM task_log")
        row = await cursor.fetchone()
        return row[0] if row else 0

    @staticmethod
    def _row_to_log(row: aiosqlite.Row) -> TaskLog:
        return TaskLog(
            log_id=row[0],
            task_id=row[1],
            executor_user_id=row[2],
            completed_at=datetime.fromisoformat(row[3]),
        )
