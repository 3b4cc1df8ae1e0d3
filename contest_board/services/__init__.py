from contest_board.services.competition_service import competition_service
from contest_board.services.entry_service import entry_service

__all__ = [
    "competition_service",
    "entry_service",
]
