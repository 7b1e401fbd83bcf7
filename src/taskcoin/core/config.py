"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、鉴权令牌、初始余额与输入长度限制等可配置常量。
"""

import os
from decimal import Decimal
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TASKCOIN_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKCOIN_DB_PATH",
        str(_get_base_dir() / "sqlite" / "taskcoin.db"),
    )


def get_jwt_secret() -> str:
    """获取访问令牌签名密钥"""
    return os.environ.get("TASKCOIN_JWT_SECRET", "dev-secret")


def get_token_ttl_hours() -> int:
    """获取访问令牌有效期（小时）"""
    return int(os.environ.get("TASKCOIN_TOKEN_TTL_HOURS", "24"))


def get_client_origin() -> str:
    """获取允许跨域访问的前端地址"""
    return os.environ.get("TASKCOIN_CLIENT_URL", "http://localhost:3000")


def get_log_format() -> str:
    """日志渲染模式：dev（默认，可读输出）或 json"""
    return os.environ.get("TASKCOIN_LOG_FORMAT", "dev").lower()


def get_log_level() -> str:
    return os.environ.get("TASKCOIN_LOG_LEVEL", "INFO").upper()


def is_logfire_enabled() -> bool:
    """是否启用 Logfire APM（需安装 apm extra 并配置 LOGFIRE_TOKEN）"""
    return os.environ.get("LOGFIRE_SEND_TO_LOGFIRE", "false").lower() == "true"


# 注册时发放的初始金币（固定值，不可通过环境变量修改）
STARTING_BALANCE: Decimal = Decimal("100.00")

# 令牌签名算法
JWT_ALGORITHM: str = "HS256"

# 用户名长度范围
USERNAME_MIN_LENGTH: int = 3
USERNAME_MAX_LENGTH: int = 50

# 密码最短长度
PASSWORD_MIN_LENGTH: int = 6

# 金额最大位数（含两位小数），与 users.coin / tasks.coin_reward 列精度一致
MONEY_MAX_DIGITS: int = 10
