from datetime import datetime

import pytest

from contest_board.core.exceptions import CompetitionNotFound, TransportError
from contest_board.db.database import DatabaseClient
from contest_board.models.sql_models import Competition, CompetitionEntry, SavedCompetition
from contest_board.sample_data import SAMPLE_COMPETITIONS
from contest_board.schemas.competitions import FilterSelection, validate_form
from contest_board.services.competition_service import CompetitionService
from contest_board.services.entry_service import EntryService

NOW = datetime(2024, 7, 10, 12, 0)


def titles(records):
    return [r.title for r in records]


def test_admin_listing_is_newest_first(service, seeded):
    result = service.list_competitions(archived=False, newest_first=True)
    assert titles(result) == list(reversed(seeded))


def test_pushdown_and_local_filters(service, seeded):
    selection = FilterSelection(category="Technology", prize_range="high")
    result = service.list_competitions(selection, newest_first=False, now=NOW)
    assert sorted(titles(result)) == ["Game Development Hackathon", "Mobile App Innovation Challenge"]

    selection = FilterSelection(difficulty="easy", deadline="later")
    assert titles(service.list_competitions(selection, now=NOW)) == ["Fitness Challenge"]


def test_archive_moves_between_tabs(service, seeded):
    service.set_archived("2", True)

    active = titles(service.list_competitions(archived=False))
    archived = titles(service.list_competitions(archived=True))
    assert "Mobile App Innovation Challenge" not in active
    assert archived == ["Mobile App Innovation Challenge"]

    service.set_archived("2", False)
    assert service.list_competitions(archived=True) == []


def test_create_and_update(service, database):
    created = service.create_competition(validate_form(SAMPLE_COMPETITIONS[0]))
    assert created.id
    assert created.is_archived is False
    assert created.created_at is not None

    updated = service.update_competition(
        created.id, validate_form({**SAMPLE_COMPETITIONS[0], "prize_value": "$9,000"})
    )
    assert updated.id == created.id
    assert updated.prize_value == "$9,000"
    assert service.get_competition(created.id).prize_value == "$9,000"


def test_missing_competition(service, database):
    with pytest.raises(CompetitionNotFound):
        service.get_competition("missing")
    with pytest.raises(CompetitionNotFound):
        service.set_archived("missing", True)
    with pytest.raises(CompetitionNotFound):
        service.delete_competition("missing")


def test_delete_removes_entries_and_bookmarks(service, database, seeded):
    entries = EntryService(db=database)
    entries.enter("user-1", "3")
    entries.save("user-1", "3")

    assert service.delete_competition("3") is True

    db = database.get_session()
    try:
        assert db.get(Competition, "3") is None
        assert db.query(CompetitionEntry).count() == 0
        assert db.query(SavedCompetition).count() == 0
    finally:
        db.close()


def test_pushdown_results_are_cached_until_write(service, database, seeded, cache):
    first = service.list_competitions(FilterSelection(category="Art"))
    assert titles(first) == ["Urban Mural Design Contest"]

    # 绕过服务直接改库, 缓存仍返回旧结果
    db = database.get_session()
    try:
        db.get(Competition, "7").title = "Renamed Mural"
        db.commit()
    finally:
        db.close()
    assert titles(service.list_competitions(FilterSelection(category="Art"))) == ["Urban Mural Design Contest"]

    # 任何写操作都会让缓存失效
    service.set_archived("1", True)
    assert titles(service.list_competitions(FilterSelection(category="Art"))) == ["Renamed Mural"]


def test_unavailable_database_raises_transport_error():
    service = CompetitionService(db=DatabaseClient(), cache_ttl=60)
    with pytest.raises(TransportError):
        service.list_competitions()


def test_entries_and_bookmarks_are_idempotent(database, seeded):
    entries = EntryService(db=database)
    first = entries.enter("user-1", "1")
    second = entries.enter("user-1", "1")
    assert first.id == second.id
    assert first.status == "pending"

    entries.save("user-1", "1")
    entries.save("user-1", "1")
    assert [s.competition_id for s in entries.list_saved("user-1")] == ["1"]
    assert entries.unsave("user-1", "1") is True
    assert entries.unsave("user-1", "1") is False

    with pytest.raises(CompetitionNotFound):
        entries.enter("user-1", "missing")
