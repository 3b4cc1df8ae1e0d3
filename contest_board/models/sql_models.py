import uuid
from datetime import datetime

from sqlalchemy import Column, String, Boolean, DateTime, Text, JSON, ForeignKey, UniqueConstraint
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class Competition(Base):
    """
    竞赛信息表
    对应数据库表名: competitions
    """
    __tablename__ = "competitions"

    id = Column(String(36), primary_key=True, default=_new_id)
    title = Column(String(255), nullable=False)
    image_url = Column(String(500), nullable=False)
    category = Column(String(100), nullable=False, index=True)
    deadline = Column(String(100), nullable=False)  # "Ongoing" 或日期字符串
    prize_value = Column(String(100), nullable=False)  # 自由文本, 如 "$1,000 Monthly"
    difficulty = Column(String(20), nullable=False, index=True)
    requirements = Column(Text, nullable=False)
    rules = Column(Text, nullable=False)
    external_url = Column(String(500))
    is_archived = Column(Boolean, default=False, nullable=False, index=True)
    is_custom_game = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)


class CompetitionEntry(Base):
    """
    用户参赛记录表
    对应数据库表名: competition_entries
    """
    __tablename__ = "competition_entries"
    __table_args__ = (UniqueConstraint("competition_id", "user_id", name="uq_entry_competition_user"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    competition_id = Column(String(36), ForeignKey("competitions.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(64), nullable=False, index=True)
    status = Column(String(50), default="pending", nullable=False)
    submission_data = Column(JSON)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)


class SavedCompetition(Base):
    """
    用户收藏表
    对应数据库表名: saved_competitions
    """
    __tablename__ = "saved_competitions"
    __table_args__ = (UniqueConstraint("competition_id", "user_id", name="uq_saved_competition_user"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    competition_id = Column(String(36), ForeignKey("competitions.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(64), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
