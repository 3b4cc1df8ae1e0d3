"""
竞赛筛选规则
直连数据库和筛选接口两条路径共用这一份实现, 保证结果一致
所有函数都是纯函数：不修改输入, 保持原有顺序
"""
import re
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from dateutil import parser as date_parser

from contest_board.core.logger import get_logger
from contest_board.schemas.competitions import ALL, ONGOING, FilterSelection

logger = get_logger("filter_engine")

LOW_PRIZE_LIMIT = 2000
HIGH_PRIZE_LIMIT = 5000
WEEK = timedelta(days=7)
MONTH = timedelta(days=30)

_NON_DIGITS = re.compile(r"[^0-9]")
# 缺失的日期部分从这里补齐; 年份仍为 1 说明原字符串没有写年份
_PARSE_DEFAULT = datetime(1, 1, 1)


# ==================== 奖金 ====================

def prize_amount(prize_value: Optional[str]) -> int:
    """去掉所有非数字字符（包括小数点）后解析, 没有数字时为 0"""
    digits = _NON_DIGITS.sub("", prize_value or "")
    return int(digits) if digits else 0


def matches_prize_range(prize_value: Optional[str], prize_range: str) -> bool:
    if not prize_range or prize_range == ALL:
        return True
    amount = prize_amount(prize_value)
    if prize_range == "low":
        return amount < LOW_PRIZE_LIMIT
    if prize_range == "medium":
        return LOW_PRIZE_LIMIT <= amount < HIGH_PRIZE_LIMIT
    if prize_range == "high":
        return amount >= HIGH_PRIZE_LIMIT
    return True


# ==================== 截止日期 ====================

def parse_deadline(deadline: Optional[str]) -> Optional[datetime]:
    """
    解析截止日期, 返回本地时间（naive）
    "Ongoing"、无法解析的字符串和没有年份的日期返回 None
    缺少日 / 时间时按当月 1 日零点计算
    """
    if not deadline or deadline == ONGOING:
        return None
    try:
        parsed = date_parser.parse(deadline, default=_PARSE_DEFAULT)
    except (ValueError, OverflowError):
        logger.debug(f"无法解析截止日期: {deadline!r}")
        return None
    if parsed.year == _PARSE_DEFAULT.year:
        logger.debug(f"截止日期缺少年份: {deadline!r}")
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def matches_deadline(deadline: Optional[str], bucket: str, now: Optional[datetime] = None) -> bool:
    """
    week: date <= now+7d
    month: now+7d < date <= now+30d
    later: date > now+30d
    "Ongoing" 及无法解析的日期只属于 later
    """
    if not bucket or bucket == ALL:
        return True

    date = parse_deadline(deadline)
    if date is None:
        return bucket == "later"

    now = now or datetime.now()
    one_week = now + WEEK
    one_month = now + MONTH
    if bucket == "week":
        return date <= one_week
    if bucket == "month":
        return one_week < date <= one_month
    if bucket == "later":
        return date > one_month
    return True


# ==================== 组合筛选 ====================

def apply_pushdown_filters(records: Iterable, selection: FilterSelection) -> List:
    """类别 / 难度 的等值筛选（数据库能直接处理的部分）"""
    result = []
    for record in records:
        if selection.category != ALL and record.category != selection.category:
            continue
        if selection.difficulty != ALL and record.difficulty != selection.difficulty:
            continue
        result.append(record)
    return result


def apply_local_filters(records: Iterable, selection: FilterSelection, now: Optional[datetime] = None) -> List:
    """奖金区间 / 截止日期 筛选（只能在取回数据后处理）"""
    now = now or datetime.now()
    return [
        record for record in records
        if matches_prize_range(record.prize_value, selection.prize_range)
        and matches_deadline(record.deadline, selection.deadline, now)
    ]


def apply_filters(records: Iterable, selection: FilterSelection, now: Optional[datetime] = None) -> List:
    """应用全部筛选条件, 返回新列表"""
    return apply_local_filters(apply_pushdown_filters(records, selection), selection, now)
