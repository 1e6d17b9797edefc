from datetime import date, datetime

import pytest

from app.core.errors import ValidationError
from app.core.parsing import day_range, parse_day, parse_id, to_day


@pytest.mark.parametrize("value", ["2024-02-01", "2024-02-01T23:59:59.999Z", "2024-02-01T00:00:00+05:00"])
def test_to_day_truncates(value):
    assert to_day(value) == date(2024, 2, 1)


def test_to_day_accepts_date_objects():
    assert to_day(datetime(2024, 2, 1, 13, 30)) == date(2024, 2, 1)
    assert to_day(date(2024, 2, 1)) == date(2024, 2, 1)


def test_parse_day_errors():
    with pytest.raises(ValidationError):
        parse_day("yesterday", "from")
    with pytest.raises(ValidationError):
        parse_day(None, "from")
    assert parse_day("", "from", required=False) is None


@pytest.mark.parametrize("value", ["abc", "-3", "0", "1.5", "65a1f0c2e4b0a1b2c3d4e5f6"])
def test_parse_id_rejects_bad_ids(value):
    with pytest.raises(ValidationError):
        parse_id(value, "classId")


def test_parse_id_accepts_digits():
    assert parse_id("17", "classId") == 17
    assert parse_id(None, "subjectId", required=False) is None


def test_day_range_is_inclusive():
    days = list(day_range(date(2024, 1, 1), date(2024, 1, 5)))
    assert len(days) == 5
    assert days[0] == date(2024, 1, 1) and days[-1] == date(2024, 1, 5)


@pytest.mark.parametrize("value", ["2024-02-01oops", "2024-02-0", "2024-02-01/"])
def test_to_day_rejects_trailing_garbage(value):
    with pytest.raises(ValueError):
        to_day(value)
    with pytest.raises(ValidationError):
        parse_day(value, "date")


def test_to_day_keeps_space_separated_times():
    assert to_day("2024-02-01 08:15") == date(2024, 2, 1)
