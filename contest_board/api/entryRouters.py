"""
参赛 / 收藏 API 路由
"""
from fastapi import APIRouter, Depends

from contest_board.api.dependencies import current_user, to_http_error
from contest_board.core.logger import get_logger
from contest_board.core.session import User
from contest_board.schemas.entries import CompetitionRef, EntryRequest
from contest_board.services import entry_service

logger = get_logger("entry_api")

router = APIRouter()


@router.post("/entries", summary="报名参赛")
async def enter_competition(req: EntryRequest, user: User = Depends(current_user)):
    log = logger.getChild("enter")
    try:
        data = entry_service.enter(user.id, req.competition_id, req.submission_data)
        return {"success": True, "data": data}
    except Exception as e:
        raise to_http_error(log, "报名参赛", e)


@router.get("/entries", summary="我的参赛记录")
async def list_entries(user: User = Depends(current_user)):
    log = logger.getChild("entries")
    try:
        return {"success": True, "data": entry_service.list_entries(user.id)}
    except Exception as e:
        raise to_http_error(log, "查询参赛记录", e)


@router.post("/saved", summary="收藏竞赛")
async def save_competition(req: CompetitionRef, user: User = Depends(current_user)):
    log = logger.getChild("save")
    try:
        data = entry_service.save(user.id, req.competition_id)
        return {"success": True, "data": data}
    except Exception as e:
        raise to_http_error(log, "收藏竞赛", e)


@router.delete("/saved/{competition_id}", summary="取消收藏")
async def unsave_competition(competition_id: str, user: User = Depends(current_user)):
    log = logger.getChild("unsave")
    try:
        return {"success": True, "data": entry_service.unsave(user.id, competition_id)}
    except Exception as e:
        raise to_http_error(log, "取消收藏", e)


@router.get("/saved", summary="我的收藏")
async def list_saved(user: User = Depends(current_user)):
    log = logger.getChild("saved")
    try:
        return {"success": True, "data": entry_service.list_saved(user.id)}
    except Exception as e:
        raise to_http_error(log, "查询收藏", e)
