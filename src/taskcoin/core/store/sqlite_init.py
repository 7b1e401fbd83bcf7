"""SQLite 数据库初始化

PRAGMA 配置 + 三张表 DDL + 索引创建。
使用 aiosqlite 异步操作。金额列均为整数分。
"""

import aiosqlite

# users 表 DDL
_USERS_DDL = """
CREATE TABLE IF NOT EXISTS users (
    user_id        INTEGER PRIMARY KEY AUTOINCREMENT,
    username       TEXT NOT NULL UNIQUE,
    password_hash  TEXT NOT NULL,
    coin_cents     INTEGER NOT NULL DEFAULT 0 CHECK (coin_cents >= 0),
    created_at     TEXT NOT NULL
);
"""

# tasks 表 DDL
_TASKS_DDL = """
CREATE TABLE IF NOT EXISTS tasks (
    task_id             INTEGER PRIMARY KEY AUTOINCREMENT,
    creator_user_id     INTEGER NOT NULL,
    link                TEXT NOT NULL,
    coin_reward_cents   INTEGER NOT NULL CHECK (coin_reward_cents > 0),
    status              TEXT NOT NULL DEFAULT 'open'
                        CHECK (status IN ('open', 'completed')),
    created_at          TEXT NOT NULL,

    FOREIGN KEY (creator_user_id) REFERENCES users(user_id)
);
"""

_TASKS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_creator ON tasks(creator_user_id);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_created_at ON tasks(created_at DESC);",
]

# task_log 表 DDL
_TASK_LOG_DDL = """
CREATE TABLE IF NOT EXISTS task_log (
    log_id            INTEGER PRIMARY KEY AUTOINCREMENT,
    task_id           INTEGER NOT NULL,
    executor_user_id  INTEGER NOT NULL,
    completed_at      TEXT NOT NULL,

    FOREIGN KEY (task_id) REFERENCES tasks(task_id),
    FOREIGN KEY (executor_user_id) REFERENCES users(user_id)
);
"""

_TASK_LOG_INDEXES = [
    # 每个任务至多一条完成记录
    "CREATE UNIQUE INDEX IF NOT EXISTS idx_task_log_task_id ON task_log(task_id);",
    "CREATE INDEX IF NOT EXISTS idx_task_log_executor ON task_log(executor_user_id);",
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
    """
    # 设置 PRAGMA
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA foreign_keys = ON;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    # 创建表
    await conn.execute(_USERS_DDL)
    await conn.execute(_TASKS_DDL)
    await conn.execute(_TASK_LOG_DDL)

    # 创建索引
    for idx_sql in _TASKS_INDEXES + _TASK_LOG_INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()


async def verify_wal_mode(conn: aiosqlite.Connection) -> bool:
    """验证 WAL 模式是否生效

    Returns:
        True 如果 WAL 模式已启用
    """
    cursor = await conn.execute("PRAGMA journal_mode;")
    row = await cursor.fetchone()
    return row is not None and row[0].lower() == "wal"
