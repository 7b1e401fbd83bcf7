"""UserStore SQLite 实现

余额以整数分存储在 coin_cents 列。
注意：写方法均不自动提交事务，需由调用方在 StoreGroup.transaction() 内调用。
"""

from datetime import datetime

import aiosqlite

from ..models.user import User
from ..money import from_cents

_USER_COLUMNS = "user_id, username, password_hash, coin_cents, created_at"


class SqliteUserStore:
    """UserStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_user(
        self,
        username: str,
        password_hash: str,
        coin_cents: int,
        created_at: datetime,
    ) -> int:
        """创建用户记录，返回新 user_id

        Raises:
            aiosqlite.IntegrityError: 用户名已存在
        """
        cursor = await self._conn.execute(
            """
            INSERT INTO users (username, password_hash, coin_cents, created_at)
            VALUES (?, ?, ?, ?)
            """,
            (
                username,
                password_hash,
                coin_cents,
                created_at.isoformat(timespec="microseconds"),
            ),
        )
        return cursor.lastrowid

    async def get_user(self, user_id: int) -> User | None:
        """根据 user_id 查询用户"""
        cursor = await self._conn.execute(
            f"SELECT {_USER_COLUMNS} FROM users WHERE user_id = ?",
            (user_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_user(row)

    async def get_user_by_username(self, username: str) -> User | None:
        """根据用户名查询用户"""
        cursor = await self._conn.execute(
            f"SELECT {_USER_COLUMNS} FROM users WHERE username = ?",
            (username,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_user(row)

    async def get_coin_cents(self, user_id: int) -> int | None:
        """读取用户当前余额（分），用户不存在返回 None"""
        cursor = await self._conn.execute(
            "SELECT coin_cents FROM users WHERE user_id = ?",
            (user_id,),
        )
        row = await cursor.fetchone()
        return row[0] if row else None

    async def update_coin(self, user_id: int, coin_cents: int) -> None:
        """覆盖写入用户余额（分）"""
        await self._conn.execute(
            "UPDATE users SET coin_cents = ? WHERE user_id = ?",
            (coin_cents, user_id),
        )

    async def get_balance_totals(self) -> tuple[int, int]:
        """返回 (用户数, 余额总和分)"""
        cursor = await self._conn.execute(
            "SELECT COUNT(*), COALESCE(SUM(coin_cents), 0) FROM users"
        )
        row = await cursor.fetchone()
        return row[0], row[1]

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        """将数据库行转换为 User 模型"""
        return User(
            user_id=row[0],
            username=row[1],
            password_hash=row[2],
            coin=from_cents(row[3]),
            created_at=datetime.fromisoformat(row[4]),
        )
