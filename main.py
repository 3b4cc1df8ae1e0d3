from fastapi import FastAPI
from contextlib import asynccontextmanager
from dotenv import load_dotenv

load_dotenv()

from contest_board.api.competitionRouters import router as competition_router
from contest_board.api.entryRouters import router as entry_router
from contest_board.db import init_databases, close_databases
from contest_board.core.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """服务启动和关闭时的生命周期管理"""
    # 启动时执行
    logger.info("服务启动中..")

    init_databases()

    logger.info("服务启动完成")

    yield

    # 关闭时执行
    logger.info("服务关闭中...")
    close_databases()


app = FastAPI(
    title="Contest Board Server",
    description="竞赛目录与管理后台服务",
    version="1.0.0",
    lifespan=lifespan
)

# 注册路由
app.include_router(competition_router, prefix="/api", tags=["竞赛"])
app.include_router(entry_router, prefix="/api", tags=["参赛与收藏"])


if __name__ == "__main__":
    import uvicorn
    import logging

    # 统一 uvicorn 日志输出到 stdout
    logging.getLogger("uvicorn").handlers = []
    logging.getLogger("uvicorn.access").handlers = []
    logging.getLogger("uvicorn.error").handlers = []

    uvicorn.run(
        "main:app",
        host="localhost",
        port=8000,
        reload=True,
        log_config={
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                    "formatter": "default",
                },
            },
            "loggers": {
                "uvicorn": {"handlers": ["default"], "level": "INFO", "propagate": False},
                "uvicorn.error": {"handlers": ["default"], "level": "INFO", "propagate": False},
                "uvicorn.access": {"handlers": ["default"], "level": "INFO", "propagate": False},
            },
        }
    )
