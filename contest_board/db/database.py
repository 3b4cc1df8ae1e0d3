from contextlib import contextmanager
from typing import Optional

from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session

from contest_board.core.config import get_settings
from contest_board.core.exceptions import TransportError
from contest_board.core.logger import get_logger
from contest_board.models.sql_models import Base


class DatabaseClient:
    """关系数据库客户端封装 (SQLAlchemy)"""

    def __init__(self):
        self.logger = get_logger("database")
        self._engine = None
        self._session_local = None
        self._connected = False

    def init(self, url: Optional[str] = None):
        """初始化数据库连接, 并创建缺失的表"""
        self.logger.info("=" * 20 + "DATABASE" + "=" * 20)
        try:
            self.logger.info("正在初始化数据库连接...")
            url = url or get_settings().database_url
            if not url:
                raise ValueError("DATABASE_URL 环境变量未设置")

            self._engine = create_engine(url, pool_pre_ping=True)
            self._session_local = sessionmaker(autocommit=False, autoflush=False, bind=self._engine)

            Base.metadata.create_all(self._engine)

            # 测试连接并输出信息
            with self._engine.connect():
                self._connected = True
                self.logger.info("数据库连接成功!")
                tables = inspect(self._engine).get_table_names()
                self.logger.info(f"已有数据表: {tables}")

        except Exception as e:
            self._connected = False
            self.logger.error(f"数据库连接失败: {e}")
            raise
        self.logger.info("=" * 20 + "DATABASE" + "=" * 20)

    @property
    def is_connected(self) -> bool:
        """检查是否已连接"""
        return self._connected

    def get_session(self) -> Session:
        """获取数据库会话"""
        if not self._connected:
            raise ConnectionError("数据库未连接")
        return self._session_local()

    @contextmanager
    def session_scope(self, action: str):
        """
        业务层使用的会话: 成功提交, 失败回滚
        连接不可用或 SQL 执行失败统一转为 TransportError
        """
        try:
            db = self.get_session()
        except ConnectionError as e:
            raise TransportError(f"{action}失败: {e}") from e
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            self.logger.error(f"{action}失败: {e}")
            raise TransportError(f"{action}失败: {e}") from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def close(self):
        """关闭连接"""
        if self._engine:
            self._engine.dispose()
            self._connected = False
            self.logger.info("数据库连接已关闭")


# 全局单例
db_client = DatabaseClient()
