from contest_board.core.logger import get_logger
from contest_board.db.database import db_client
from contest_board.db.redis import redis_client

logger = get_logger("db")


def init_databases():
    """统一初始化所有数据库连接"""
    logger.info("=" * 30 + "初始化数据库" + "=" * 30)

    # 1. 初始化关系数据库 (必须)
    db_client.init()

    # 2. 初始化 Redis (可选，失败不影响服务启动)
    redis_client.init()

    logger.info("=" * 30 + "数据库初始化完成" + "=" * 30)


def close_databases():
    """关闭所有数据库连接"""
    logger.info("=" * 25 + "关闭数据库" + "=" * 25)

    db_client.close()
    redis_client.close()

    logger.info("=" * 25 + "数据库连接已关闭" + "=" * 25)


# 导出单例供其他模块使用
__all__ = [
    "db_client",
    "redis_client",
    "init_databases",
    "close_databases",
]
