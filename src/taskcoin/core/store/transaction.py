"""事务作用域封装

写操作在同一 SQLite 事务内原子提交，任何异常都会整体回滚，
保证不会出现“余额已扣但任务未创建”或“任务已完成但未入账”的中间状态。

BEGIN IMMEDIATE 在事务开始时即获取 SQLite 写锁，
并发的完成请求因此串行化：后到者只能读到已提交的 completed 状态。
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite
import structlog

log = structlog.get_logger()


@asynccontextmanager
async def write_transaction(
    conn: aiosqlite.Connection,
    lock: asyncio.Lock,
) -> AsyncIterator[aiosqlite.Connection]:
    """开启写事务：成功提交，异常回滚后原样抛出

    Args:
        conn: 数据库连接（同一连接上操作以保证事务性）
        lock: 连接级锁，同一连接上同时只允许一个事务
    """
    async with lock:
        await conn.execute("BEGIN IMMEDIATE")
        try:
            yield conn
        except BaseException as e:
            await conn.rollback()
            log.debug("transaction_rolled_back", error_type=type(e).__name__)
            raise
        await conn.commit()


@asynccontextmanager
async def read_scope(
    conn: aiosqlite.Connection,
    lock: asyncio.Lock,
) -> AsyncIterator[aiosqlite.Connection]:
    """只读作用域：与写事务互斥，避免读到共享连接上未提交的写入"""
    async with lock:
        yield conn
