"""账户服务 -- 注册与按用户名查找

密码哈希方案由网关层的鉴权服务负责，核心层只保存不透明的凭证密文。
"""

from datetime import UTC, datetime

import aiosqlite
import structlog

from .config import STARTING_BALANCE
from .exceptions import UsernameExistsError
from .models import PublicUser, User
from .money import to_cents
from .store import StoreGroup

log = structlog.get_logger()


class AccountService:
    """账户业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def register_user(self, username: str, password_hash: str) -> PublicUser:
        """注册用户并发放初始金币

        Raises:
            UsernameExistsError: 用户名已被占用
        """
        try:
            async with self._stores.transaction():
                now = datetime.now(UTC)
                user_id = await self._stores.user_store.create_user(
                    username=username,
                    password_hash=password_hash,
                    coin_cents=to_cents(STARTING_BALANCE),
                    created_at=now,
                )
        except aiosqlite.IntegrityError as e:
            if self._is_username_conflict(e):
                raise UsernameExistsError(username) from e
            raise

        log.info("user_registered", user_id=user_id, username=username)
        return PublicUser(
            user_id=user_id,
            username=username,
            coin=STARTING_BALANCE,
            created_at=now,
        )

    async def find_user_by_username(self, username: str) -> User | None:
        """按用户名查找完整用户记录（含凭证密文，仅供登录校验）"""
        async with self._stores.reading():
            return await self._stores.user_store.get_user_by_username(username)

    @staticmethod
    def _is_username_conflict(error: Exception) -> bool:
        return "users.username" in str(error)
