from datetime import datetime, timezone

import pytest

from cachescope._utils import deduplicate, parse_date, to_milliseconds


def test_parse_date() -> None:
    assert parse_date("Wed, 21 Oct 2015 07:28:00 GMT") == datetime(2015, 10, 21, 7, 28, tzinfo=timezone.utc)


def test_parse_date_with_offset() -> None:
    assert parse_date("Wed, 21 Oct 2015 09:28:00 +0200") == datetime(2015, 10, 21, 7, 28, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", ["0", "", "tomorrow", "Wed, 21 Oct 99999 07:28:00 GMT"])
def test_parse_invalid_date(value: str) -> None:
    assert parse_date(value) is None


def test_to_milliseconds() -> None:
    assert to_milliseconds(datetime(1970, 1, 1, 0, 16, 40, tzinfo=timezone.utc)) == 1_000_000


def test_to_milliseconds_reads_naive_datetimes_as_utc() -> None:
    assert to_milliseconds(datetime(1970, 1, 1, 0, 16, 40)) == 1_000_000


def test_deduplicate() -> None:
    assert deduplicate(["node1", "node1", "node2", "node1"]) == ["node1", "node2"]
    assert deduplicate([]) == []
