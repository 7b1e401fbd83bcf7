"""User Domain Model

余额只由任务生命周期修改：创建任务时扣减，完成任务时入账。
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class PublicUser(BaseModel):
    """对外公开的用户信息（不含密码哈希）"""

    user_id: int = Field(description="用户 ID")
    username: str = Field(description="用户名，全局唯一")
    coin: Decimal = Field(ge=0, decimal_places=2, description="金币余额")
    created_at: datetime = Field(description="注册时间")


class User(PublicUser):
    """完整用户记录"""

    password_hash: str = Field(description="凭证密文，对核心层不透明")

    def to_public(self) -> PublicUser:
        return PublicUser(
            user_id=self.user_id,
            username=self.username,
            coin=self.coin,
            created_at=self.created_at,
        )
