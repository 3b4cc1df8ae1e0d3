"""
路由公共依赖和异常转换
"""
import logging
from typing import Optional

from fastapi import Header, HTTPException

from contest_board.core.exceptions import CompetitionNotFound, FormValidationError, TransportError
from contest_board.core.session import User


def current_user(x_user_id: Optional[str] = Header(None, alias="X-User-Id")) -> User:
    """调用方身份由认证网关写入 X-User-Id, 缺失时拒绝访问"""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="未登录")
    return User(id=x_user_id)


def to_http_error(log: logging.Logger, action: str, e: Exception) -> HTTPException:
    """业务异常 -> HTTPException"""
    if isinstance(e, FormValidationError):
        log.info(f"{action} 参数校验失败: {e.errors}")
        return HTTPException(status_code=422, detail={"errors": e.errors})
    if isinstance(e, CompetitionNotFound):
        log.info(f"{action}: {e}")
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, TransportError):
        log.error(f"{action} 数据存储不可用: {e}")
        return HTTPException(status_code=503, detail=str(e))
    log.error(f"{action}失败: {e}")
    return HTTPException(status_code=500, detail=f"{action}失败: {str(e)}")
