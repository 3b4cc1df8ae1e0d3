"""
竞赛数据服务层（直连数据库路径）
类别 / 难度 / 归档状态 下推到 SQL 查询, 奖金区间 / 截止日期 取回后本地筛选
"""
import json
from datetime import datetime
from typing import List, Optional

from contest_board.core.config import get_settings
from contest_board.core.exceptions import CompetitionNotFound
from contest_board.core.logger import get_logger
from contest_board.db import db_client, redis_client
from contest_board.models.sql_models import Competition, CompetitionEntry, SavedCompetition
from contest_board.schemas.competitions import ALL, CompetitionForm, CompetitionInfo, FilterSelection
from contest_board.services.filter_engine import apply_local_filters

logger = get_logger("competition_service")


class CompetitionService:
    """竞赛增删改查 + 筛选查询"""

    CACHE_PREFIX = "competitions:list"
    CACHE_VERSION_KEY = "competitions:version"

    def __init__(self, db=None, cache=None, cache_ttl: Optional[int] = None):
        self._db = db or db_client
        self._cache = cache or redis_client
        self._cache_ttl = cache_ttl

    @property
    def cache_ttl(self) -> int:
        if self._cache_ttl is None:
            self._cache_ttl = get_settings().cache_ttl
        return self._cache_ttl

    # ==================== 查询 ====================

    def list_competitions(
        self,
        selection: Optional[FilterSelection] = None,
        archived: bool = False,
        newest_first: bool = True,
        now: Optional[datetime] = None,
    ) -> List[CompetitionInfo]:
        """
        按筛选条件查询竞赛
        newest_first=True 按创建时间倒序（管理后台）, False 保持数据库返回顺序（公开列表）
        """
        selection = selection or FilterSelection()
        rows = self._query_pushdown(selection, archived, newest_first)
        result = apply_local_filters(rows, selection, now)
        logger.debug(
            f"查询竞赛: archived={archived}, selection={selection.model_dump()}, "
            f"下推结果 {len(rows)} 条, 最终 {len(result)} 条"
        )
        return result

    def get_competition(self, competition_id: str) -> CompetitionInfo:
        with self._db.session_scope("查询竞赛详情") as db:
            row = db.get(Competition, competition_id)
            if row is None:
                raise CompetitionNotFound(competition_id)
            return CompetitionInfo.model_validate(row)

    def _query_pushdown(self, selection: FilterSelection, archived: bool, newest_first: bool) -> List[CompetitionInfo]:
        cache_key = self._cache_key(selection, archived, newest_first)
        cached = self._cache.get(cache_key)
        if cached:
            logger.debug(f"命中缓存: {cache_key}")
            return [CompetitionInfo.model_validate(item) for item in json.loads(cached)]

        with self._db.session_scope("查询竞赛列表") as db:
            query = db.query(Competition).filter(Competition.is_archived == archived)
            if selection.category != ALL:
                query = query.filter(Competition.category == selection.category)
            if selection.difficulty != ALL:
                query = query.filter(Competition.difficulty == selection.difficulty)
            if newest_first:
                query = query.order_by(Competition.created_at.desc())
            rows = [CompetitionInfo.model_validate(row) for row in query.all()]

        self._cache.set(
            cache_key,
            json.dumps([row.model_dump(mode="json") for row in rows]),
            ex=self.cache_ttl,
        )
        return rows

    # ==================== 写操作 ====================

    def create_competition(self, form: CompetitionForm) -> CompetitionInfo:
        with self._db.session_scope("新建竞赛") as db:
            row = Competition(**form.model_dump())
            db.add(row)
            db.flush()
            db.refresh(row)
            result = CompetitionInfo.model_validate(row)
        self._invalidate_cache()
        logger.info(f"新建竞赛 {result.id}: {result.title}")
        return result

    def update_competition(self, competition_id: str, form: CompetitionForm) -> CompetitionInfo:
        with self._db.session_scope("更新竞赛") as db:
            row = self._get_row(db, competition_id)
            for key, value in form.model_dump().items():
                setattr(row, key, value)
            row.updated_at = datetime.now()
            db.flush()
            result = CompetitionInfo.model_validate(row)
        self._invalidate_cache()
        logger.info(f"更新竞赛 {competition_id}")
        return result

    def set_archived(self, competition_id: str, archived: bool) -> CompetitionInfo:
        with self._db.session_scope("归档竞赛" if archived else "恢复竞赛") as db:
            row = self._get_row(db, competition_id)
            row.is_archived = archived
            row.updated_at = datetime.now()
            db.flush()
            result = CompetitionInfo.model_validate(row)
        self._invalidate_cache()
        logger.info(f"竞赛 {competition_id} {'已归档' if archived else '已恢复'}")
        return result

    def delete_competition(self, competition_id: str) -> bool:
        """永久删除竞赛, 同时删除关联的参赛和收藏记录"""
        with self._db.session_scope("删除竞赛") as db:
            row = self._get_row(db, competition_id)
            db.query(CompetitionEntry).filter(CompetitionEntry.competition_id == competition_id).delete()
            db.query(SavedCompetition).filter(SavedCompetition.competition_id == competition_id).delete()
            db.delete(row)
        self._invalidate_cache()
        logger.info(f"竞赛 {competition_id} 已删除")
        return True

    # ==================== 内部方法 ====================

    @staticmethod
    def _get_row(db, competition_id: str) -> Competition:
        row = db.get(Competition, competition_id)
        if row is None:
            raise CompetitionNotFound(competition_id)
        return row

    def _cache_key(self, selection: FilterSelection, archived: bool, newest_first: bool) -> str:
        version = self._cache.get(self.CACHE_VERSION_KEY) or "0"
        order = "newest" if newest_first else "store"
        return f"{self.CACHE_PREFIX}:v{version}:{int(archived)}:{selection.category}:{selection.difficulty}:{order}"

    def _invalidate_cache(self):
        """任何写操作后递增版本号, 旧缓存自然失效"""
        self._cache.incr(self.CACHE_VERSION_KEY)


# 全局单例
competition_service = CompetitionService()
