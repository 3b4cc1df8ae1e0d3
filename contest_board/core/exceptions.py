"""
业务异常定义
"""
from typing import Dict


class ContestBoardError(Exception):
    """所有业务异常的基类"""


class FormValidationError(ContestBoardError):
    """表单校验失败, errors 为 字段名 -> 提示信息"""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{k}: {v}" for k, v in self.errors.items()))


class TransportError(ContestBoardError):
    """数据存储或远程接口调用失败"""


class CompetitionNotFound(ContestBoardError):
    """竞赛不存在"""

    def __init__(self, competition_id: str):
        self.competition_id = competition_id
        super().__init__(f"竞赛 {competition_id} 不存在")
