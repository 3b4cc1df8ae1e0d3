"""
竞赛筛选接口客户端（远程路径）
接口响应格式: {"success": true, "data": ...}
取回结果后在本地重新应用 奖金区间 / 截止日期 筛选, 与直连数据库路径结果一致
"""
from datetime import datetime
from typing import Any, List, Optional, Type

import requests
from pydantic import BaseModel, ValidationError

from contest_board.core.config import get_settings
from contest_board.core.exceptions import CompetitionNotFound, FormValidationError, TransportError
from contest_board.core.logger import get_logger
from contest_board.core.session import SessionContext
from contest_board.schemas.competitions import CompetitionForm, CompetitionInfo, FilterSelection
from contest_board.schemas.entries import EntryInfo, SavedInfo
from contest_board.services.filter_engine import apply_local_filters

logger = get_logger("remote_client")

USER_HEADER = "X-User-Id"


def _load(model: Type[BaseModel], data: Any):
    """把接口返回的数据转换为响应模型, 字段缺失或类型不符视为接口格式错误"""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error(f"接口返回数据无法解析为 {model.__name__}: {e}")
        raise TransportError(f"接口返回格式错误: {model.__name__}") from e


class RemoteCompetitionClient:
    """通过 HTTP 调用竞赛接口, 方法与 CompetitionService 对齐"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        http: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        session_context: Optional[SessionContext] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self._http = http or requests.Session()
        self._session_context = session_context

    # ==================== 竞赛 ====================

    def list_competitions(
        self,
        selection: Optional[FilterSelection] = None,
        archived: bool = False,
        newest_first: bool = True,
        now: Optional[datetime] = None,
    ) -> List[CompetitionInfo]:
        selection = selection or FilterSelection()
        params = selection.to_query_params()
        params["archived"] = "true" if archived else "false"
        params["order"] = "newest" if newest_first else "store"

        data = self._request("GET", "/api/competitions", params=params)
        if not isinstance(data, list):
            raise TransportError("筛选接口返回格式错误: data 不是列表")
        rows = [_load(CompetitionInfo, item) for item in data]
        return apply_local_filters(rows, selection, now)

    def get_competition(self, competition_id: str) -> CompetitionInfo:
        data = self._request("GET", f"/api/competitions/{competition_id}", resource_id=competition_id)
        return _load(CompetitionInfo, data)

    def create_competition(self, form: CompetitionForm) -> CompetitionInfo:
        data = self._request("POST", "/api/competitions", json=form.model_dump())
        return _load(CompetitionInfo, data)

    def update_competition(self, competition_id: str, form: CompetitionForm) -> CompetitionInfo:
        data = self._request(
            "PUT", f"/api/competitions/{competition_id}", json=form.model_dump(), resource_id=competition_id
        )
        return _load(CompetitionInfo, data)

    def set_archived(self, competition_id: str, archived: bool) -> CompetitionInfo:
        data = self._request(
            "PATCH", f"/api/competitions/{competition_id}/archive",
            json={"archived": archived}, resource_id=competition_id
        )
        return _load(CompetitionInfo, data)

    def delete_competition(self, competition_id: str) -> bool:
        self._request("DELETE", f"/api/competitions/{competition_id}", resource_id=competition_id)
        return True

    # ==================== 参赛 / 收藏 ====================

    def enter(self, competition_id: str, submission_data: Optional[Any] = None) -> EntryInfo:
        data = self._request(
            "POST", "/api/entries",
            json={"competition_id": competition_id, "submission_data": submission_data},
            resource_id=competition_id
        )
        return _load(EntryInfo, data)

    def save(self, competition_id: str) -> SavedInfo:
        data = self._request("POST", "/api/saved", json={"competition_id": competition_id}, resource_id=competition_id)
        return _load(SavedInfo, data)

    def unsave(self, competition_id: str) -> bool:
        data = self._request("DELETE", f"/api/saved/{competition_id}")
        return bool(data)

    # ==================== 内部方法 ====================

    def _headers(self) -> dict:
        user = self._session_context.user if self._session_context else None
        return {USER_HEADER: user.id} if user else {}

    def _request(self, method: str, path: str, resource_id: Optional[str] = None, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self._http.request(method, url, headers=self._headers(), timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"请求失败 {method} {path}: {e}")
            raise TransportError(f"请求失败 {method} {path}: {e}") from e

        try:
            body = resp.json()
        except ValueError:
            body = None

        if resp.status_code == 404 and resource_id is not None:
            raise CompetitionNotFound(resource_id)
        if resp.status_code == 422:
            detail = body.get("detail") if isinstance(body, dict) else None
            if isinstance(detail, dict) and isinstance(detail.get("errors"), dict):
                raise FormValidationError(detail["errors"])
        if resp.status_code >= 400:
            detail = body.get("detail") if isinstance(body, dict) else resp.text
            logger.error(f"接口返回错误 {method} {path}: HTTP {resp.status_code} {detail}")
            raise TransportError(f"HTTP {resp.status_code}: {detail}")

        if not isinstance(body, dict) or not body.get("success"):
            raise TransportError(f"接口返回格式错误: {method} {path}")
        return body.get("data")
