"""注册 / 登录路由

POST /api/auth/register: 注册用户，初始余额 100.00。
POST /api/auth/login: 用户名密码登录，返回用户信息与访问令牌。
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator
from taskcoin.core.models import PublicUser

from ..deps import get_store_group
from ..services.auth_service import AuthService, LoginResult
from ..validators import PASSWORD_CHECKS, USERNAME_CHECKS, ensure_valid

router = APIRouter()


class RegisterRequest(BaseModel):
    """注册请求体"""

    username: str = Field(description="用户名，3-50 个字符")
    password: str = Field(description="密码，至少 6 个字符")

    @field_validator("username")
    @classmethod
    def _check_username(cls, value: str) -> str:
        return ensure_valid(value, USERNAME_CHECKS)

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: str) -> str:
        return ensure_valid(value, PASSWORD_CHECKS)


class LoginRequest(BaseModel):
    """登录请求体"""

    username: str
    password: str


@router.post("/api/auth/register", response_model=PublicUser, status_code=201)
async def register(
    body: RegisterRequest,
    store_group=Depends(get_store_group),
):
    """注册用户

    - 成功返回 201 + 公开用户信息
    - 用户名已存在返回 409
    """
    service = AuthService(store_group)
    return await service.register(body.username, body.password)


@router.post("/api/auth/login", response_model=LoginResult)
async def login(
    body: LoginRequest,
    store_group=Depends(get_store_group),
):
    """登录，失败统一返回 401"""
    service = AuthService(store_group)
    return await service.login(body.username, body.password)
