"""
当前用户会话上下文
所有视图共享同一个实例（按引用传递），不各自保存用户状态
"""
from dataclasses import dataclass
from typing import Callable, Optional

from contest_board.core.logger import get_logger

logger = get_logger("session")


@dataclass(frozen=True)
class User:
    id: str
    email: Optional[str] = None


# 外部认证提供方: 返回当前登录用户，未登录返回 None
AuthProvider = Callable[[], Optional[User]]


class SessionContext:
    """会话上下文：init 时解析当前用户，sign_out 时清除"""

    def __init__(self, auth_provider: AuthProvider, on_sign_out: Optional[Callable[[], None]] = None):
        self._auth_provider = auth_provider
        self._on_sign_out = on_sign_out
        self._user: Optional[User] = None
        self._initialized = False

    def init(self) -> Optional[User]:
        """加载时解析当前会话"""
        self._user = self._auth_provider()
        self._initialized = True
        logger.info(f"会话初始化完成, user={self._user.id if self._user else None}")
        return self._user

    @property
    def user(self) -> Optional[User]:
        return self._user

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def sign_out(self):
        """清除当前用户并触发跳转回调"""
        if self._user:
            logger.info(f"用户 {self._user.id} 退出登录")
        self._user = None
        if self._on_sign_out:
            self._on_sign_out()
