"""只读聚合视图模型"""

from decimal import Decimal

from pydantic import BaseModel, Field

from .task import Task, TaskWithCreator
from .user import PublicUser


class DashboardData(BaseModel):
    """用户面板数据"""

    user: PublicUser
    created_tasks: list[Task] = Field(description="该用户创建的全部任务（任意状态）")
    available_tasks: list[TaskWithCreator] = Field(
        description="其他用户创建、仍可完成的任务"
    )
    completed_tasks_count: int = Field(ge=0, description="该用户完成过的任务数")


class LedgerAudit(BaseModel):
    """账本守恒校验结果

    每个用户注册时获得固定初始金币，创建任务时悬赏从创建者扣除，
    完成任务时转入完成者，因此：
        余额总和 == 初始金币 * 用户数 - 未完成任务悬赏总和
    """

    user_count: int
    total_balance: Decimal
    open_reward_total: Decimal
    completed_reward_total: Decimal
    expected_balance: Decimal
    completed_task_count: int
    completion_record_count: int

    @property
    def balanced(self) -> bool:
        return (
            self.total_balance == self.expected_balance
            and self.completed_task_count == self.completion_record_count
        )
