"""CLI 入口模块 -- python -m taskcoin.core <command>

支持的命令：
  init-db       在配置的路径创建数据库表结构
  audit-ledger  校验账本守恒（余额总和 = 初始金币 * 用户数 - open 悬赏总和）
"""

import asyncio
import sys

from .config import get_db_path


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m taskcoin.core <command>")
        print("命令:")
        print("  init-db       创建数据库表结构")
        print("  audit-ledger  校验账本守恒")
        sys.exit(1)

    command = sys.argv[1]

    if command == "init-db":
        asyncio.run(init_database())
    elif command == "audit-ledger":
        balanced = asyncio.run(audit_ledger())
        if not balanced:
            sys.exit(2)
    else:
        print(f"未知命令: {command}")
        print("可用命令: init-db, audit-ledger")
        sys.exit(1)


async def init_database() -> None:
    """初始化数据库"""
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)
    await store_group.close()
    print("数据库初始化完成")


async def audit_ledger() -> bool:
    """执行账本校验，返回是否守恒"""
    from .queries import MarketplaceQueries
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)

    try:
        audit = await MarketplaceQueries(store_group).audit_ledger()
    finally:
        await store_group.close()

    print(f"用户数: {audit.user_count}")
    print(f"余额总和: {audit.total_balance}")
    print(f"期望余额总和: {audit.expected_balance}")
    print(f"open 悬赏总和: {audit.open_reward_total}")
    print(f"已完成悬赏总和: {audit.completed_reward_total}")
    print(f"已完成任务数 / 完成记录数: {audit.completed_task_count} / {audit.completion_record_count}")
    print("账本守恒" if audit.balanced else "账本不守恒")
    return audit.balanced


if __name__ == "__main__":
    main()
