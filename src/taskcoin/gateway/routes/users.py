"""用户信息与面板路由

GET /api/users/me: 当前用户公开信息。
GET /api/dashboard: 当前用户面板数据。
"""

from fastapi import APIRouter, Depends
from taskcoin.core.models import DashboardData, PublicUser
from taskcoin.core.queries import MarketplaceQueries

from ..deps import get_current_user_id, get_store_group

router = APIRouter()


@router.get("/api/users/me", response_model=PublicUser)
async def get_user_profile(
    user_id: int = Depends(get_current_user_id),
    store_group=Depends(get_store_group),
):
    return await MarketplaceQueries(store_group).get_user_profile(user_id)


@router.get("/api/dashboard", response_model=DashboardData)
async def get_dashboard(
    user_id: int = Depends(get_current_user_id),
    store_group=Depends(get_store_group),
):
    """我发布的任务、他人发布的 open 任务、我完成的任务数"""
    return await MarketplaceQueries(store_group).get_dashboard(user_id)
