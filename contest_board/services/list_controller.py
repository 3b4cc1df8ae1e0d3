"""
列表视图控制器
管理后台列表（CompetitionListController）和公开竞赛目录（CatalogController）
数据源可以是 CompetitionService（直连数据库）或 RemoteCompetitionClient（筛选接口）
阻塞的数据源调用通过 asyncio.to_thread 执行
"""
import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from contest_board.core.exceptions import CompetitionNotFound, FormValidationError, TransportError
from contest_board.core.logger import get_logger
from contest_board.core.session import SessionContext
from contest_board.schemas.competitions import (
    ALL,
    FilterSelection,
    blank_form_values,
    form_values_from,
    validate_form,
)

logger = get_logger("list_controller")


class ViewState(str, Enum):
    LOADING = "loading"
    LOADED = "loaded"
    EMPTY = "empty"
    EDITING = "editing"
    MUTATING = "mutating"


@dataclass
class Notification:
    """可关闭的提示消息, variant="destructive" 表示错误"""
    title: str
    description: str
    variant: str = "default"


class _ListView:
    """加载状态、通知和查询令牌的公共部分"""

    def __init__(self, source):
        self._source = source
        self.records: List = []
        self.notifications: List[Notification] = []
        self.state = ViewState.LOADING
        self._fetch_token = 0

    @property
    def visible(self) -> List:
        return list(self.records)

    def notify(self, title: str, description: str, destructive: bool = False):
        self.notifications.append(Notification(title, description, "destructive" if destructive else "default"))

    def dismiss(self, index: int):
        if 0 <= index < len(self.notifications):
            self.notifications.pop(index)

    def _settled_state(self) -> ViewState:
        return ViewState.LOADED if self.visible else ViewState.EMPTY

    async def _fetch(self, **kwargs) -> bool:
        """
        整体替换记录集合
        以最后一次发起的请求为准: 过期令牌的响应直接丢弃
        失败时保留之前的数据, 只提示一次
        """
        self._fetch_token += 1
        token = self._fetch_token
        self.state = ViewState.LOADING
        try:
            records = await asyncio.to_thread(self._source.list_competitions, **kwargs)
        except TransportError as e:
            if token != self._fetch_token:
                return False
            logger.warning(f"加载竞赛列表失败: {e}")
            self.notify("Error fetching competitions", str(e), destructive=True)
            self.state = self._settled_state()
            return False

        if token != self._fetch_token:
            logger.debug(f"丢弃过期的查询结果 token={token}, latest={self._fetch_token}")
            return False

        self.records = list(records)
        self.state = self._settled_state()
        return True


class CompetitionListController(_ListView):
    """管理后台的竞赛列表（进行中 / 已归档 两个标签页各一个实例）"""

    def __init__(self, source, archived: bool = False):
        super().__init__(source)
        self.archived = archived
        self.selection = FilterSelection()
        self.search_query = ""
        self.editing = None
        self.form_errors: Dict[str, str] = {}

    # ==================== 查询 ====================

    async def refresh(self) -> bool:
        return await self._fetch(selection=self.selection, archived=self.archived, newest_first=True)

    async def set_filter(self, selection: FilterSelection) -> bool:
        self.selection = selection
        return await self.refresh()

    @property
    def visible(self) -> List:
        """标题包含搜索词（不区分大小写）的记录"""
        query = self.search_query.lower()
        return [record for record in self.records if query in record.title.lower()]

    def search(self, query: str) -> List:
        self.search_query = query or ""
        if self.state in (ViewState.LOADED, ViewState.EMPTY):
            self.state = self._settled_state()
        return self.visible

    @property
    def empty_message(self) -> str:
        if self.search_query:
            return "Try adjusting your search query"
        if self.archived:
            return "No archived competitions found"
        return "Start by adding a new competition"

    # ==================== 编辑 ====================

    def edit(self, record=None) -> Dict:
        """record 为 None 表示新建; 返回表单预填值"""
        self.editing = record
        self.form_errors = {}
        self.state = ViewState.EDITING
        return form_values_from(record) if record is not None else blank_form_values()

    def cancel_edit(self):
        self.editing = None
        self.form_errors = {}
        self.state = self._settled_state()

    async def submit(self, data: Dict):
        """
        提交表单: 新建或更新, 成功后重新加载
        字段校验失败抛出 FormValidationError（逐字段展示, 不弹通知）
        """
        try:
            form = validate_form(data)
        except FormValidationError as e:
            self.form_errors = e.errors
            self.state = ViewState.EDITING
            raise
        self.form_errors = {}

        record = self.editing
        self.state = ViewState.MUTATING
        try:
            if record is not None:
                result = await asyncio.to_thread(self._source.update_competition, record.id, form)
            else:
                result = await asyncio.to_thread(self._source.create_competition, form)
        except FormValidationError as e:
            self.form_errors = e.errors
            self.state = ViewState.EDITING
            raise
        except (TransportError, CompetitionNotFound) as e:
            logger.warning(f"保存竞赛失败: {e}")
            self.notify("Error", str(e) or "Something went wrong", destructive=True)
            self.state = ViewState.EDITING
            return None

        if record is not None:
            self.notify("Competition updated", "The competition has been updated successfully.")
        else:
            self.notify("Competition created", "The competition has been created successfully.")
        self.editing = None
        await self.refresh()
        return result

    # ==================== 归档 / 删除 ====================

    async def archive(self, competition_id: str, archived: bool) -> bool:
        self.state = ViewState.MUTATING
        try:
            await asyncio.to_thread(self._source.set_archived, competition_id, archived)
        except (TransportError, CompetitionNotFound) as e:
            logger.warning(f"归档操作失败 {competition_id}: {e}")
            self.notify("Error", str(e), destructive=True)
            self.state = self._settled_state()
            return False

        if archived:
            self.notify("Competition archived", "The competition has been moved to archives.")
        else:
            self.notify("Competition restored", "The competition has been restored from archives.")
        await self.refresh()
        return True

    async def delete(self, competition_id: str, confirm: Callable[[], bool]) -> bool:
        """confirm() 返回 True 才会真正发起删除"""
        if not confirm():
            return False

        self.state = ViewState.MUTATING
        try:
            await asyncio.to_thread(self._source.delete_competition, competition_id)
        except (TransportError, CompetitionNotFound) as e:
            logger.warning(f"删除竞赛失败 {competition_id}: {e}")
            self.notify("Error", str(e), destructive=True)
            self.state = self._settled_state()
            return False

        self.notify("Competition deleted", "The competition has been permanently deleted.")
        await self.refresh()
        return True


class CatalogController(_ListView):
    """公开竞赛目录: 筛选、报名、收藏"""

    FILTER_KEYS = ("category", "difficulty", "prize_range", "deadline")

    def __init__(self, source, session: Optional[SessionContext] = None, entries=None):
        super().__init__(source)
        self.session = session
        self._entries = entries or source
        self.selection = FilterSelection()

    async def refresh(self) -> bool:
        return await self._fetch(selection=self.selection, archived=False, newest_first=False)

    async def set_filter(self, key: str, value: str) -> bool:
        if key not in self.FILTER_KEYS:
            raise ValueError(f"未知的筛选字段: {key}")
        self.selection = FilterSelection(**{**self.selection.model_dump(), key: value or ALL})
        return await self.refresh()

    async def clear_filters(self) -> bool:
        self.selection = FilterSelection()
        return await self.refresh()

    @property
    def active_filter_count(self) -> int:
        return self.selection.active_count

    @property
    def empty_message(self) -> str:
        return "No competitions match your filters"

    async def enter(self, competition_id: str) -> bool:
        if not self._require_user():
            return False
        try:
            await asyncio.to_thread(self._entries.enter, competition_id)
        except (TransportError, CompetitionNotFound) as e:
            self.notify("Error", str(e), destructive=True)
            return False
        self.notify("Competition Entry", f"You're entering competition #{competition_id}.")
        return True

    async def save(self, competition_id: str) -> bool:
        if not self._require_user():
            return False
        try:
            await asyncio.to_thread(self._entries.save, competition_id)
        except (TransportError, CompetitionNotFound) as e:
            self.notify("Error", str(e), destructive=True)
            return False
        self.notify("Competition Saved", f"Competition #{competition_id} has been saved to your bookmarks.")
        return True

    def _require_user(self) -> bool:
        if self.session is None or not self.session.is_authenticated:
            self.notify("Sign in required", "Please sign in to continue.", destructive=True)
            return False
        return True
