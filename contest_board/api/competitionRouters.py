"""
竞赛 API 路由
GET /competitions 即筛选接口, 四个筛选条件全部通过 filter_engine 处理
"""
from typing import Literal

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import ValidationError

from contest_board.api.dependencies import current_user, to_http_error
from contest_board.core.logger import get_logger
from contest_board.core.session import User
from contest_board.schemas.competitions import ALL, ArchiveRequest, FilterSelection, validate_form
from contest_board.services import competition_service

logger = get_logger("competition_api")

router = APIRouter()


# ==================== 查询接口 ====================

@router.get("/competitions", summary="按条件筛选竞赛")
async def list_competitions(
    category: str = Query(ALL, description="类别"),
    difficulty: str = Query(ALL, description="难度"),
    prize_range: str = Query(ALL, alias="prizeRange", description="奖金区间 low/medium/high"),
    deadline: str = Query(ALL, description="截止时间 week/month/later"),
    archived: bool = Query(False, description="是否查询已归档竞赛"),
    order: Literal["newest", "store"] = Query("store", description="newest 按创建时间倒序"),
):
    log = logger.getChild("list")
    try:
        selection = FilterSelection(
            category=category or ALL,
            difficulty=difficulty or ALL,
            prize_range=prize_range or ALL,
            deadline=deadline or ALL,
        )
    except ValidationError as e:
        log.info(f"筛选参数错误: {e}")
        raise HTTPException(status_code=400, detail="筛选参数错误: prizeRange / deadline 取值无效")

    try:
        data = competition_service.list_competitions(selection, archived=archived, newest_first=order == "newest")
        log.info(f"筛选竞赛: {selection.to_query_params()}, archived={archived}, 返回 {len(data)} 条")
        return {"success": True, "data": data}
    except Exception as e:
        raise to_http_error(log, "查询竞赛", e)


@router.get("/competitions/{competition_id}", summary="竞赛详情")
async def get_competition(competition_id: str):
    log = logger.getChild("detail")
    try:
        return {"success": True, "data": competition_service.get_competition(competition_id)}
    except Exception as e:
        raise to_http_error(log, "查询竞赛详情", e)


# ==================== 管理接口 ====================

@router.post("/competitions", summary="新建竞赛")
async def create_competition(payload: dict = Body(...), user: User = Depends(current_user)):
    log = logger.getChild("create")
    try:
        form = validate_form(payload)
        data = competition_service.create_competition(form)
        log.info(f"用户 {user.id} 新建竞赛 {data.id}")
        return {"success": True, "data": data}
    except Exception as e:
        raise to_http_error(log, "新建竞赛", e)


@router.put("/competitions/{competition_id}", summary="更新竞赛")
async def update_competition(competition_id: str, payload: dict = Body(...), user: User = Depends(current_user)):
    log = logger.getChild("update")
    try:
        form = validate_form(payload)
        data = competition_service.update_competition(competition_id, form)
        log.info(f"用户 {user.id} 更新竞赛 {competition_id}")
        return {"success": True, "data": data}
    except Exception as e:
        raise to_http_error(log, "更新竞赛", e)


@router.patch("/competitions/{competition_id}/archive", summary="归档 / 恢复竞赛")
async def archive_competition(competition_id: str, req: ArchiveRequest, user: User = Depends(current_user)):
    log = logger.getChild("archive")
    try:
        data = competition_service.set_archived(competition_id, req.archived)
        log.info(f"用户 {user.id} {'归档' if req.archived else '恢复'}竞赛 {competition_id}")
        return {"success": True, "data": data}
    except Exception as e:
        raise to_http_error(log, "归档竞赛", e)


@router.delete("/competitions/{competition_id}", summary="删除竞赛")
async def delete_competition(competition_id: str, user: User = Depends(current_user)):
    log = logger.getChild("delete")
    try:
        competition_service.delete_competition(competition_id)
        log.info(f"用户 {user.id} 删除竞赛 {competition_id}")
        return {"success": True, "data": True, "message": f"竞赛 {competition_id} 已删除"}
    except Exception as e:
        raise to_http_error(log, "删除竞赛", e)
