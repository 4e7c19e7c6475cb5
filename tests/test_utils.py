from datetime import date, datetime

import pytest

from app.utils import paginate, parse_date, total_pages


def test_parse_date_accepts_plain_and_timestamp_strings():
    assert parse_date("1999-03-31") == date(1999, 3, 31)
    assert parse_date("2023-01-01T00:00:00.000Z") == date(2023, 1, 1)
    assert parse_date(datetime(2020, 5, 4, 12, 30)) == date(2020, 5, 4)


def test_parse_date_rejects_garbage():
    with pytest.raises(ValueError):
        parse_date("yesterday")


@pytest.mark.parametrize(
    ("total", "limit", "expected"),
    [(0, 20, 0), (1, 20, 1), (20, 20, 1), (21, 20, 2), (2, 1, 2)],
)
def test_total_pages(total, limit, expected):
    assert total_pages(total, limit) == expected


def test_paginate_slices_and_handles_out_of_range():
    items = list(range(5))

    assert paginate(items, 1, 2) == [0, 1]
    assert paginate(items, 3, 2) == [4]
    assert paginate(items, 4, 2) == []
