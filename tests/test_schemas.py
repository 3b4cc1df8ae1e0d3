import pytest
from pydantic import ValidationError

from contest_board.core.exceptions import FormValidationError
from contest_board.schemas.competitions import (
    FilterSelection,
    blank_form_values,
    form_values_from,
    validate_form,
)
from contest_board.sample_data import SAMPLE_COMPETITIONS


def test_valid_form_keeps_url_as_typed():
    form = validate_form({**SAMPLE_COMPETITIONS[0], "external_url": ""})
    assert form.image_url == SAMPLE_COMPETITIONS[0]["image_url"]
    assert form.external_url is None
    assert form.is_custom_game is False


def test_form_field_messages():
    data = {
        **SAMPLE_COMPETITIONS[0],
        "title": "Hey",
        "image_url": "not a url",
        "difficulty": "extreme",
        "rules": "short",
    }
    with pytest.raises(FormValidationError) as exc:
        validate_form(data)
    assert exc.value.errors == {
        "title": "Title must be at least 5 characters",
        "image_url": "Please enter a valid URL",
        "difficulty": "Please select a difficulty level",
        "rules": "Rules must be at least 10 characters",
    }


def test_missing_fields_reported():
    with pytest.raises(FormValidationError) as exc:
        validate_form({})
    assert "title" in exc.value.errors
    assert "requirements" in exc.value.errors
    assert "difficulty" not in exc.value.errors


def test_invalid_external_url():
    with pytest.raises(FormValidationError) as exc:
        validate_form({**SAMPLE_COMPETITIONS[1], "external_url": "ftp//nope"})
    assert exc.value.errors == {"external_url": "Please enter a valid URL"}


def test_form_prefill(sample_records):
    values = form_values_from(sample_records[7])
    assert values["title"] == "Fitness Challenge"
    assert values["deadline"] == "Ongoing"
    assert values["external_url"] == ""
    assert blank_form_values()["difficulty"] == "medium"


def test_filter_selection_defaults_and_params():
    selection = FilterSelection()
    assert selection.active_count == 0
    assert selection.to_query_params() == {}

    selection = FilterSelection(category="Art", prize_range="high")
    assert selection.active_count == 2
    assert selection.to_query_params() == {"category": "Art", "prizeRange": "high"}


def test_filter_selection_rejects_unknown_bucket():
    with pytest.raises(ValidationError):
        FilterSelection(prize_range="huge")
    with pytest.raises(ValidationError):
        FilterSelection(deadline="tomorrow")
