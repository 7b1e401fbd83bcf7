"""Task / TaskLog Domain Model

悬赏金额在创建时固定，之后不再变化。
task_log 记录任务由谁完成，每个任务至多一条，写入后不可修改。
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from .enums import TaskStatus


class Task(BaseModel):
    """Task 数据模型"""

    task_id: int = Field(description="任务 ID")
    creator_user_id: int = Field(description="创建者用户 ID")
    link: str = Field(description="任务目标链接")
    coin_reward: Decimal = Field(gt=0, decimal_places=2, description="悬赏金币")
    status: TaskStatus = Field(default=TaskStatus.OPEN, description="当前状态")
    created_at: datetime = Field(description="创建时间")


class TaskWithCreator(Task):
    """附带创建者用户名的任务（列表展示用）"""

    creator_username: str = Field(description="创建者用户名")


class TaskLog(BaseModel):
    """任务完成记录"""

    log_id: int = Field(description="记录 ID")
    task_id: int = Field(description="关联的 Task ID")
    executor_user_id: int = Field(description="完成者用户 ID")
    completed_at: datetime = Field(description="完成时间")
