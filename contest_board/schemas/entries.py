from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- 请求模型：参赛 / 收藏 ---
class CompetitionRef(BaseModel):
    competition_id: str = Field(..., min_length=1, description="竞赛ID")


class EntryRequest(CompetitionRef):
    submission_data: Optional[Any] = Field(None, description="提交内容, 可为空")


# --- 响应模型 ---
class EntryInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    competition_id: str
    user_id: str
    status: str
    submission_data: Optional[Any] = None
    created_at: Optional[datetime] = None


class SavedInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    competition_id: str
    user_id: str
    created_at: Optional[datetime] = None
