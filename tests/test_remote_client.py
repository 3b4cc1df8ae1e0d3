import asyncio

import pytest
import requests
from fastapi.testclient import TestClient

from contest_board.core.exceptions import CompetitionNotFound, FormValidationError, TransportError
from contest_board.core.session import SessionContext, User
from contest_board.sample_data import SAMPLE_COMPETITIONS
from contest_board.schemas.competitions import FilterSelection, validate_form
from contest_board.services.competition_service import competition_service
from contest_board.services.list_controller import CompetitionListController, ViewState
from contest_board.services.remote_client import RemoteCompetitionClient
from main import app


@pytest.fixture
def api(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'remote.db'}")
    monkeypatch.delenv("REDIS_HOST", raising=False)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def remote(api):
    session = SessionContext(lambda: User(id="admin-1"))
    session.init()
    return RemoteCompetitionClient(base_url="http://testserver", http=api, timeout=5, session_context=session)


@pytest.fixture
def remote_seeded(remote):
    for item in SAMPLE_COMPETITIONS:
        remote.create_competition(validate_form(item))
    return remote


def test_remote_and_direct_paths_agree(remote_seeded):
    selections = [
        FilterSelection(),
        FilterSelection(category="Technology", prize_range="high"),
        FilterSelection(deadline="month"),
        FilterSelection(difficulty="medium", deadline="later"),
        FilterSelection(prize_range="low", deadline="later"),
    ]
    # 接口端用当前时间计算截止日期, 两条路径都不固定 now
    for selection in selections:
        remote_rows = remote_seeded.list_competitions(selection, newest_first=True)
        direct_rows = competition_service.list_competitions(selection, newest_first=True)
        assert [r.id for r in remote_rows] == [r.id for r in direct_rows]


def test_remote_crud_roundtrip(remote_seeded):
    target = remote_seeded.list_competitions(FilterSelection(category="Food"))[0]

    remote_seeded.set_archived(target.id, True)
    assert [r.id for r in remote_seeded.list_competitions(archived=True)] == [target.id]

    assert remote_seeded.delete_competition(target.id) is True
    with pytest.raises(CompetitionNotFound):
        remote_seeded.get_competition(target.id)


def test_remote_validation_errors(remote):
    form = validate_form(SAMPLE_COMPETITIONS[0])
    form.title = "Hi"  # 绕过本地校验, 由接口返回 422
    with pytest.raises(FormValidationError) as exc:
        remote.create_competition(form)
    assert exc.value.errors == {"title": "Title must be at least 5 characters"}


def test_remote_entry_and_save(remote_seeded):
    target = remote_seeded.list_competitions()[0]
    entry = remote_seeded.enter(target.id)
    assert entry.user_id == "admin-1"
    assert remote_seeded.save(target.id).competition_id == target.id
    assert remote_seeded.unsave(target.id) is True


class _FailingHttp:
    def request(self, method, url, **kwargs):
        raise requests.ConnectionError("connection refused")


class _Response:
    def __init__(self, status_code, body=None, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class _StaticHttp:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        return self.response


def test_connection_failure_is_transport_error():
    client = RemoteCompetitionClient(base_url="http://nowhere", http=_FailingHttp(), timeout=1)
    with pytest.raises(TransportError):
        client.list_competitions()


def test_bad_gateway_is_transport_error():
    client = RemoteCompetitionClient(base_url="http://x", http=_StaticHttp(_Response(502, text="Bad Gateway")))
    with pytest.raises(TransportError):
        client.list_competitions()


def test_malformed_body_is_transport_error():
    client = RemoteCompetitionClient(base_url="http://x", http=_StaticHttp(_Response(200, {"success": True, "data": {}})))
    with pytest.raises(TransportError):
        client.list_competitions()


def test_selection_sent_as_query_params():
    http = _StaticHttp(_Response(200, {"success": True, "data": []}))
    client = RemoteCompetitionClient(base_url="http://x/", http=http, timeout=3)
    client.list_competitions(FilterSelection(category="Art", deadline="week"), archived=True, newest_first=False)

    method, url, kwargs = http.calls[0]
    assert method == "GET"
    assert url == "http://x/api/competitions"
    assert kwargs["params"] == {"category": "Art", "deadline": "week", "archived": "true", "order": "store"}
    assert kwargs["timeout"] == 3
    assert kwargs["headers"] == {}


def test_rows_with_missing_fields_are_transport_error():
    body = {"success": True, "data": [{"id": "1", "title": "x"}]}
    client = RemoteCompetitionClient(base_url="http://x", http=_StaticHttp(_Response(200, body)))
    with pytest.raises(TransportError):
        client.list_competitions()


def test_malformed_record_is_transport_error():
    body = {"success": True, "data": {"id": "1"}}
    client = RemoteCompetitionClient(base_url="http://x", http=_StaticHttp(_Response(200, body)))
    with pytest.raises(TransportError):
        client.get_competition("1")


class _SequenceHttp:
    def __init__(self, *responses):
        self.responses = list(responses)

    def request(self, method, url, **kwargs):
        return self.responses.pop(0)


def test_controller_keeps_rows_when_response_is_malformed():
    row = {**SAMPLE_COMPETITIONS[0], "id": "1"}
    http = _SequenceHttp(
        _Response(200, {"success": True, "data": [row]}),
        _Response(200, {"success": True, "data": [{"id": "2", "title": "x"}]}),
    )
    controller = CompetitionListController(RemoteCompetitionClient(base_url="http://x", http=http))

    assert asyncio.run(controller.refresh()) is True
    assert [r.id for r in controller.records] == ["1"]

    assert asyncio.run(controller.refresh()) is False
    assert [r.id for r in controller.records] == ["1"]
    assert controller.state == ViewState.LOADED
    assert len(controller.notifications) == 1
    assert controller.notifications[0].variant == "destructive"
