"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store 实例与当前用户

Store 实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

import structlog
from fastapi import Header, Request
from taskcoin.core.exceptions import AuthenticationError
from taskcoin.core.store import StoreGroup

from .services.auth_service import decode_access_token


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


async def get_current_user_id(
    request: Request,
    authorization: str | None = Header(default=None),
) -> int:
    """解析 Authorization: Bearer <token>，返回当前用户 ID

    user_id 同时绑定到日志上下文，并写入 request.state 供 LoggingMiddleware 使用。
    """
    if not authorization:
        raise AuthenticationError("Authentication required")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Authentication required")

    user_id = decode_access_token(token.strip())
    structlog.contextvars.bind_contextvars(user_id=user_id)
    request.state.user_id = user_id
    return user_id
