"""任务路由

GET /api/tasks: open 任务列表（附创建者用户名），按创建时间倒序。
POST /api/tasks: 发布任务，悬赏从当前用户余额中扣除。
POST /api/tasks/{task_id}/complete: 完成任务，悬赏转入当前用户。
- 404: 任务 / 用户不存在
- 403: 完成自己发布的任务
- 409: 任务已完成
"""

from decimal import Decimal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator
from taskcoin.core.config import MONEY_MAX_DIGITS
from taskcoin.core.lifecycle import TaskLifecycle
from taskcoin.core.models import Task, TaskWithCreator
from taskcoin.core.queries import MarketplaceQueries

from ..deps import get_current_user_id, get_store_group
from ..validators import LINK_CHECKS, ensure_valid

router = APIRouter()


class CreateTaskRequest(BaseModel):
    """发布任务请求体"""

    link: str = Field(description="任务目标链接")
    coin_reward: Decimal = Field(
        gt=0,
        max_digits=MONEY_MAX_DIGITS,
        decimal_places=2,
        description="悬赏金币",
    )

    @field_validator("link")
    @classmethod
    def _check_link(cls, value: str) -> str:
        return ensure_valid(value, LINK_CHECKS)


class TaskListResponse(BaseModel):
    """任务列表响应"""

    tasks: list[TaskWithCreator]


@router.get("/api/tasks", response_model=TaskListResponse)
async def list_tasks(store_group=Depends(get_store_group)):
    """open 任务列表，无需登录"""
    tasks = await MarketplaceQueries(store_group).list_open_tasks()
    return TaskListResponse(tasks=tasks)


@router.post("/api/tasks", response_model=Task, status_code=201)
async def create_task(
    body: CreateTaskRequest,
    user_id: int = Depends(get_current_user_id),
    store_group=Depends(get_store_group),
):
    """发布任务

    - 成功返回 201 + 新任务
    - 余额不足返回 400
    """
    return await TaskLifecycle(store_group).create_task(
        creator_id=user_id,
        link=body.link,
        reward=body.coin_reward,
    )


@router.post("/api/tasks/{task_id}/complete", response_model=Task)
async def complete_task(
    task_id: int,
    user_id: int = Depends(get_current_user_id),
    store_group=Depends(get_store_group),
):
    """完成任务，悬赏转入当前用户"""
    return await TaskLifecycle(store_group).complete_task(task_id, user_id)
