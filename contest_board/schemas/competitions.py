from datetime import datetime
from typing import Dict, Literal, Optional

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from contest_board.core.exceptions import FormValidationError

Difficulty = Literal["easy", "medium", "hard"]
PrizeRange = Literal["low", "medium", "high", "all"]
DeadlineBucket = Literal["week", "month", "later", "all"]

ALL = "all"
ONGOING = "Ongoing"

CATEGORIES = ["Photography", "Technology", "Fashion", "Writing", "Food", "Art", "Health", "Other"]

_url_adapter = TypeAdapter(AnyHttpUrl)


def _check_url(value: str) -> str:
    """校验 URL 格式, 原样返回用户输入的字符串"""
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        raise ValueError("invalid url")
    return value


# --- 读取模型：竞赛信息 ---
class CompetitionInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    image_url: str
    category: str
    deadline: str
    prize_value: str
    difficulty: str
    requirements: str
    rules: str
    external_url: Optional[str] = None
    is_archived: bool = False
    is_custom_game: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- 写入模型：新建 / 编辑表单 ---
class CompetitionForm(BaseModel):
    title: str = Field(..., min_length=5, description="标题")
    image_url: str = Field(..., description="封面图片 URL")
    category: str = Field(..., min_length=1, description="类别")
    deadline: str = Field(..., min_length=1, description="截止日期或 Ongoing")
    prize_value: str = Field(..., min_length=1, description="奖金描述")
    difficulty: Difficulty = "medium"
    requirements: str = Field(..., min_length=10, description="参赛要求")
    rules: str = Field(..., min_length=10, description="比赛规则")
    external_url: Optional[str] = Field(None, description="外部链接, 可为空")
    is_custom_game: bool = False

    @field_validator("image_url")
    @classmethod
    def _check_image_url(cls, value: str) -> str:
        return _check_url(value)

    @field_validator("external_url")
    @classmethod
    def _check_external_url(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        return _check_url(value)


# 表单字段对应的提示文案
FORM_MESSAGES = {
    "title": "Title must be at least 5 characters",
    "image_url": "Please enter a valid URL",
    "category": "Please select a category",
    "deadline": "Please enter a deadline",
    "prize_value": "Please enter a prize value",
    "difficulty": "Please select a difficulty level",
    "requirements": "Requirements must be at least 10 characters",
    "rules": "Rules must be at least 10 characters",
    "external_url": "Please enter a valid URL",
    "is_custom_game": "Invalid value",
}


def validate_form(data: Dict) -> CompetitionForm:
    """校验原始表单数据, 失败时抛出按字段组织的 FormValidationError"""
    try:
        return CompetitionForm.model_validate(data)
    except ValidationError as e:
        errors = {}
        for err in e.errors():
            field = str(err["loc"][0]) if err["loc"] else "__root__"
            errors.setdefault(field, FORM_MESSAGES.get(field, err["msg"]))
        raise FormValidationError(errors)


def blank_form_values() -> Dict:
    """新建竞赛时表单的默认值"""
    return {
        "title": "",
        "image_url": "",
        "category": "",
        "deadline": "",
        "prize_value": "",
        "difficulty": "medium",
        "requirements": "",
        "rules": "",
        "external_url": "",
        "is_custom_game": False,
    }


def form_values_from(record) -> Dict:
    """用已有竞赛的字段预填表单"""
    values = blank_form_values()
    for key in values:
        value = getattr(record, key, None)
        if value is not None:
            values[key] = value
    return values


# --- 筛选条件 ---
class FilterSelection(BaseModel):
    """四个筛选字段, "all" 表示不限制"""
    category: str = ALL
    difficulty: str = ALL
    prize_range: PrizeRange = ALL
    deadline: DeadlineBucket = ALL

    @property
    def active_count(self) -> int:
        return sum(1 for v in (self.category, self.difficulty, self.prize_range, self.deadline) if v != ALL)

    def to_query_params(self) -> Dict[str, str]:
        """转为筛选接口的查询参数（只包含生效的字段）"""
        params = {
            "category": self.category,
            "difficulty": self.difficulty,
            "prizeRange": self.prize_range,
            "deadline": self.deadline,
        }
        return {k: v for k, v in params.items() if v and v != ALL}


# --- 归档请求 ---
class ArchiveRequest(BaseModel):
    archived: bool = Field(..., description="true 归档, false 恢复")
