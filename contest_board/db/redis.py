from typing import Optional

import redis

from contest_board.core.config import RedisConfig, get_settings
from contest_board.core.logger import get_logger


class RedisClient:
    """Redis 缓存客户端封装, 未连接时所有操作都是空操作"""

    def __init__(self):
        self.logger = get_logger("redis")
        self._pool = None
        self._client = None
        self._connected = False

    def init(self, config: Optional[RedisConfig] = None):
        """初始化 Redis 连接 (可选, 失败不影响服务启动)"""
        self.logger.info("=" * 20 + "REDIS" + "=" * 20)
        config = config or get_settings().redis
        if config is None:
            self.logger.info("REDIS_HOST 未设置, 跳过缓存初始化")
            self.logger.info("=" * 20 + "REDIS" + "=" * 20)
            return

        try:
            self.logger.info("正在初始化 Redis 连接...")
            self._pool = redis.ConnectionPool(
                host=config.host,
                port=config.port,
                password=config.password,
                db=config.db,
                decode_responses=True
            )

            self._client = redis.Redis(connection_pool=self._pool)

            # 测试连接
            self._client.ping()
            self._connected = True
            self.logger.info("Redis 连接成功!")

        except redis.RedisError as e:
            self._connected = False
            self.logger.warning(f"Redis 连接失败: {e} (服务将继续运行，但缓存功能不可用)")
        self.logger.info("=" * 20 + "REDIS" + "=" * 20)

    @property
    def is_connected(self) -> bool:
        """检查是否已连接"""
        return self._connected

    def get(self, key: str) -> Optional[str]:
        """获取值"""
        if not self._connected:
            return None
        return self._client.get(key)

    def set(self, key: str, value: str, ex: int = None):
        """设置值"""
        if not self._connected:
            return False
        return self._client.set(key, value, ex=ex)

    def incr(self, key: str) -> Optional[int]:
        """自增计数器"""
        if not self._connected:
            return None
        return self._client.incr(key)

    def close(self):
        """关闭连接"""
        if self._pool:
            self._pool.disconnect()
            self._connected = False
            self.logger.info("Redis 连接已关闭")


# 全局单例
redis_client = RedisClient()
