"""
参赛 / 收藏服务
"""
from typing import Any, List, Optional

from contest_board.core.exceptions import CompetitionNotFound
from contest_board.core.logger import get_logger
from contest_board.db import db_client
from contest_board.models.sql_models import Competition, CompetitionEntry, SavedCompetition
from contest_board.schemas.entries import EntryInfo, SavedInfo

logger = get_logger("entry_service")


class EntryService:

    def __init__(self, db=None):
        self._db = db or db_client

    def enter(self, user_id: str, competition_id: str, submission_data: Optional[Any] = None) -> EntryInfo:
        """报名参赛, 重复报名返回已有记录"""
        with self._db.session_scope("报名参赛") as db:
            self._ensure_competition(db, competition_id)
            entry = db.query(CompetitionEntry).filter(
                CompetitionEntry.competition_id == competition_id,
                CompetitionEntry.user_id == user_id,
            ).first()
            if entry is None:
                entry = CompetitionEntry(
                    competition_id=competition_id,
                    user_id=user_id,
                    submission_data=submission_data,
                )
                db.add(entry)
                db.flush()
                logger.info(f"用户 {user_id} 报名竞赛 {competition_id}")
            return EntryInfo.model_validate(entry)

    def list_entries(self, user_id: str) -> List[EntryInfo]:
        with self._db.session_scope("查询参赛记录") as db:
            rows = db.query(CompetitionEntry).filter(
                CompetitionEntry.user_id == user_id
            ).order_by(CompetitionEntry.created_at.desc()).all()
            return [EntryInfo.model_validate(row) for row in rows]

    def save(self, user_id: str, competition_id: str) -> SavedInfo:
        """收藏竞赛, 重复收藏返回已有记录"""
        with self._db.session_scope("收藏竞赛") as db:
            self._ensure_competition(db, competition_id)
            saved = db.query(SavedCompetition).filter(
                SavedCompetition.competition_id == competition_id,
                SavedCompetition.user_id == user_id,
            ).first()
            if saved is None:
                saved = SavedCompetition(competition_id=competition_id, user_id=user_id)
                db.add(saved)
                db.flush()
                logger.info(f"用户 {user_id} 收藏竞赛 {competition_id}")
            return SavedInfo.model_validate(saved)

    def unsave(self, user_id: str, competition_id: str) -> bool:
        """取消收藏, 返回是否真的删除了记录"""
        with self._db.session_scope("取消收藏") as db:
            deleted = db.query(SavedCompetition).filter(
                SavedCompetition.competition_id == competition_id,
                SavedCompetition.user_id == user_id,
            ).delete()
        return deleted > 0

    def list_saved(self, user_id: str) -> List[SavedInfo]:
        with self._db.session_scope("查询收藏") as db:
            rows = db.query(SavedCompetition).filter(
                SavedCompetition.user_id == user_id
            ).order_by(SavedCompetition.created_at.desc()).all()
            return [SavedInfo.model_validate(row) for row in rows]

    @staticmethod
    def _ensure_competition(db, competition_id: str):
        if db.get(Competition, competition_id) is None:
            raise CompetitionNotFound(competition_id)


# 全局单例
entry_service = EntryService()
