"""TaskCoin Core Store -- SQLite 持久化实现

提供工厂函数创建共享数据库连接的 Store 实例组。
"""

import asyncio
from contextlib import AbstractAsyncContextManager
from pathlib import Path

import aiosqlite

from .sqlite_init import init_db
from .task_log_store import SqliteTaskLogStore
from .task_store import SqliteTaskStore
from .transaction import read_scope, write_transaction
from .user_store import SqliteUserStore


class StoreGroup:
    """Store 实例组 -- 共享同一个数据库连接"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self.conn = conn
        self.user_store = SqliteUserStore(conn)
        self.task_store = SqliteTaskStore(conn)
        self.task_log_store = SqliteTaskLogStore(conn)
        self._lock = asyncio.Lock()

    def transaction(self) -> AbstractAsyncContextManager[aiosqlite.Connection]:
        """写事务作用域（BEGIN IMMEDIATE，异常整体回滚）"""
        return write_transaction(self.conn, self._lock)

    def reading(self) -> AbstractAsyncContextManager[aiosqlite.Connection]:
        """只读作用域"""
        return read_scope(self.conn, self._lock)

    async def close(self) -> None:
        await self.conn.close()


async def create_store_group(db_path: str) -> StoreGroup:
    """创建 Store 实例组

    Args:
        db_path: SQLite 数据库文件路径

    Returns:
        StoreGroup 实例
    """
    # 确保数据库目录存在
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    conn.row_factory = aiosqlite.Row
    await init_db(conn)

    return StoreGroup(conn=conn)


__all__ = [
    "StoreGroup",
    "create_store_group",
    "SqliteUserStore",
    "SqliteTaskStore",
    "SqliteTaskLogStore",
    "init_db",
    "write_transaction",
    "read_scope",
]
