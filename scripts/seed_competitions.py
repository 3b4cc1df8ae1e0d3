import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from dotenv import load_dotenv

load_dotenv()

from contest_board.db import db_client
from contest_board.core.logger import get_logger
from contest_board.sample_data import SAMPLE_COMPETITIONS
from contest_board.schemas.competitions import validate_form
from contest_board.services.competition_service import competition_service

logger = get_logger("seed")


def seed_competitions():
    logger.info("开始写入示例竞赛数据...")
    db_client.init()

    existing = {c.title for c in competition_service.list_competitions(archived=False)}
    existing |= {c.title for c in competition_service.list_competitions(archived=True)}

    created = 0
    for item in SAMPLE_COMPETITIONS:
        # 标题已存在则跳过，重复执行不会产生重复数据
        if item["title"] in existing:
            continue
        competition_service.create_competition(validate_form(item))
        created += 1

    logger.info(f"{created} 条示例竞赛已写入, 跳过 {len(SAMPLE_COMPETITIONS) - created} 条")
    db_client.close()


if __name__ == "__main__":
    seed_competitions()
