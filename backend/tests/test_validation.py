from datetime import datetime, timezone

import pytest

from eventdesk.errors import InputError
from eventdesk.validation import parse_event_id, validate_event

from .conftest import LAUNCH


def _with(**changes):
    body = dict(LAUNCH)
    body.update(changes)
    return body


def test_valid_body_converts_date():
    fields = validate_event(LAUNCH)
    assert fields.title == "Launch"
    assert fields.description == "Kickoff"
    assert fields.location == "HQ"
    assert fields.date == datetime(2030, 1, 1, 10, 0, tzinfo=timezone.utc)


def test_naive_and_free_form_dates():
    assert validate_event(_with(date="2030-01-01T10:00")).date.tzinfo is not None
    assert validate_event(_with(date="Jan 1 2030 10:00")).date == datetime(
        2030, 1, 1, 10, 0, tzinfo=timezone.utc
    )


@pytest.mark.parametrize(
    "changes, message",
    [
        ({"title": ""}, "Title is required"),
        ({"description": ""}, "Description is required"),
        ({"location": ""}, "Location is required"),
        ({"date": "not a date"}, "Invalid date"),
        ({"date": ""}, "Invalid date"),
        ({"date": "9999-12-31T23:00:00-05:00"}, "Invalid date"),
        ({"date": "0001-01-01T00:30:00+01:00"}, "Invalid date"),
        ({"title": 42}, "Title is required"),
        ({"title": "x" * 256}, "Title must be at most 255 characters"),
        ({"location": "y" * 256}, "Location must be at most 255 characters"),
    ],
)
def test_rejections_name_the_field(changes, message):
    with pytest.raises(InputError) as exc:
        validate_event(_with(**changes))
    assert exc.value.message == message
    assert exc.value.status_code == 400


def test_only_first_failure_is_reported():
    with pytest.raises(InputError) as exc:
        validate_event({"title": "", "description": "", "date": "nope", "location": ""})
    assert exc.value.message == "Title is required"

    with pytest.raises(InputError) as exc:
        validate_event(_with(date="nope", location=""))
    assert exc.value.message == "Invalid date"


def test_missing_fields():
    with pytest.raises(InputError) as exc:
        validate_event({"title": "Launch"})
    assert exc.value.message == "Description is required"


def test_non_object_body():
    for body in (None, [], "Launch"):
        with pytest.raises(InputError) as exc:
            validate_event(body)
        assert exc.value.message == "Invalid input"


def test_title_at_limit_is_fine():
    assert validate_event(_with(title="x" * 255)).title == "x" * 255


@pytest.mark.parametrize(
    "raw, expected", [("1", 1), ("42", 42), (" 7 ", 7), ("2147483647", 2147483647)]
)
def test_parse_event_id(raw, expected):
    assert parse_event_id(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["abc", "", "1.5", "12abc", "1_000", "2147483648", "-2147483649", "99999999999999999999999"],
)
def test_parse_event_id_rejects(raw):
    with pytest.raises(InputError) as exc:
        parse_event_id(raw)
    assert exc.value.message == "Invalid ID"
