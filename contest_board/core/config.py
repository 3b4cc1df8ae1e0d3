"""
服务配置
从环境变量读取（.env 由 main.py 通过 python-dotenv 加载）
"""
import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RedisConfig:
    """Redis 连接配置"""
    host: str
    port: int
    password: Optional[str]
    db: int


@dataclass(frozen=True)
class Settings:
    """服务全局配置"""
    database_url: Optional[str]
    redis: Optional[RedisConfig]
    cache_ttl: int
    api_base_url: str
    http_timeout: float


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"环境变量 {name} 必须是整数, 当前值: {raw!r}")


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"环境变量 {name} 必须是数字, 当前值: {raw!r}")


def get_settings() -> Settings:
    """
    每次调用都重新读取环境变量
    REDIS_HOST 未设置时 redis 为 None（缓存关闭）
    """
    redis_config = None
    host = os.getenv("REDIS_HOST")
    if host:
        redis_config = RedisConfig(
            host=host,
            port=_int_env("REDIS_PORT", 6379),
            password=os.getenv("REDIS_PASSWORD") or None,
            db=_int_env("REDIS_DB", 0),
        )

    return Settings(
        database_url=os.getenv("DATABASE_URL"),
        redis=redis_config,
        cache_ttl=_int_env("CACHE_TTL", 60),
        api_base_url=os.getenv("API_BASE_URL", "http://localhost:8000").rstrip("/"),
        http_timeout=_float_env("HTTP_TIMEOUT", 10.0),
    )
