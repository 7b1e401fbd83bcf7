"""AuthService -- 注册、登录与访问令牌

密码以 sha256(password + salt) 加盐摘要存储，格式为 "hash:salt"。
访问令牌为 HS256 JWT，sub 为用户 ID。
登录失败统一返回 "Invalid username or password"，不区分用户名或密码错误。
"""

import hashlib
import hmac
import secrets
from datetime import UTC, datetime, timedelta

import jwt
import structlog
from pydantic import BaseModel
from taskcoin.core.accounts import AccountService
from taskcoin.core.config import JWT_ALGORITHM, get_jwt_secret, get_token_ttl_hours
from taskcoin.core.exceptions import AuthenticationError
from taskcoin.core.models import PublicUser
from taskcoin.core.store import StoreGroup

log = structlog.get_logger()


class LoginResult(BaseModel):
    """登录结果"""

    user: PublicUser
    token: str


def hash_password(password: str, salt: str | None = None) -> str:
    """生成加盐密码摘要"""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.sha256((password + salt).encode("utf-8")).hexdigest()
    return f"{digest}:{salt}"


def verify_password(password: str, password_hash: str) -> bool:
    """常量时间校验密码"""
    digest, sep, salt = password_hash.partition(":")
    if not sep or not salt:
        return False
    expected = hash_password(password, salt).partition(":")[0]
    return hmac.compare_digest(digest, expected)


def create_access_token(user_id: int, username: str) -> str:
    """签发访问令牌"""
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "username": username,
        "iat": now,
        "exp": now + timedelta(hours=get_token_ttl_hours()),
    }
    return jwt.encode(payload, get_jwt_secret(), algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> int:
    """校验访问令牌并返回用户 ID

    Raises:
        AuthenticationError: 令牌无效或已过期
    """
    try:
        payload = jwt.decode(token, get_jwt_secret(), algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationError("Token expired") from e
    except jwt.InvalidTokenError as e:
        raise AuthenticationError("Invalid token") from e

    try:
        return int(payload["sub"])
    except (KeyError, ValueError) as e:
        raise AuthenticationError("Invalid token") from e


class AuthService:
    """鉴权业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._accounts = AccountService(store_group)

    async def register(self, username: str, password: str) -> PublicUser:
        """注册新用户（初始余额由核心层发放）"""
        return await self._accounts.register_user(username, hash_password(password))

    async def login(self, username: str, password: str) -> LoginResult:
        """校验用户名密码并签发令牌

        Raises:
            AuthenticationError: 用户名或密码错误
        """
        user = await self._accounts.find_user_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            log.info("login_failed", username=username)
            raise AuthenticationError()

        log.info("user_logged_in", user_id=user.user_id)
        return LoginResult(
            user=user.to_public(),
            token=create_access_token(user.user_id, user.username),
        )
