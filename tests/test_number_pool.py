from __future__ import annotations

import pytest

from luckydraw.errors import AlreadyDrawnError, InvalidPoolError
from luckydraw.services.number_pool import NumberPool, parse_number, sort_identifiers


def test_load_deduplicates_and_keeps_order():
    pool = NumberPool(["003", "001", "003", "002", "001"])

    assert pool.identifiers() == ["003", "001", "002"]
    assert pool.size == 3


@pytest.mark.parametrize("identifiers", [[], ["", "  "], [None]])
def test_empty_pool_is_rejected(identifiers):
    with pytest.raises(InvalidPoolError):
        NumberPool().load(identifiers)


def test_failed_load_keeps_previous_contents():
    pool = NumberPool(["1", "2"])
    with pytest.raises(InvalidPoolError):
        pool.load([])
    assert pool.identifiers() == ["1", "2"]


def test_available_excludes_drawn_in_pool_order():
    pool = NumberPool(["5", "1", "3", "2"])
    pool.mark_drawn(["1", "2"])

    assert pool.available() == ["5", "3"]
    assert pool.drawn_count == 2
    assert pool.available_count == 2
    assert pool.is_drawn("1")
    assert not pool.is_drawn("5")


def test_mark_drawn_twice_fails_without_partial_update():
    pool = NumberPool(["1", "2", "3"])
    pool.mark_drawn(["1"])

    with pytest.raises(AlreadyDrawnError) as exc_info:
        pool.mark_drawn(["2", "1"])

    assert exc_info.value.identifiers == ["1"]
    assert pool.available() == ["2", "3"]


def test_mark_drawn_rejects_unknown_and_repeated_identifiers():
    pool = NumberPool(["1", "2", "3"])
    with pytest.raises(AlreadyDrawnError):
        pool.mark_drawn(["9"])
    with pytest.raises(AlreadyDrawnError):
        pool.mark_drawn(["2", "2"])
    assert pool.drawn_count == 0


def test_reset_clears_drawn_only():
    pool = NumberPool(["1", "2", "3"])
    pool.mark_drawn(["1", "3"])
    pool.reset()

    assert pool.drawn_count == 0
    assert pool.identifiers() == ["1", "2", "3"]
    assert pool.available() == ["1", "2", "3"]


def test_reload_keeps_every_winner_retired():
    pool = NumberPool(["1", "2", "3"])
    pool.mark_drawn(["1", "2"])
    pool.load(["2", "3", "4"])

    assert pool.is_drawn("2")
    assert pool.is_drawn("1")
    assert pool.drawn_count == 1
    assert pool.retired_count == 2
    assert pool.available() == ["3", "4"]

    pool.load(["1", "4"])
    assert pool.available() == ["4"]
    assert pool.available_count == 1
    with pytest.raises(AlreadyDrawnError):
        pool.mark_drawn(["1"])


def test_reset_releases_retired_identifiers():
    pool = NumberPool(["1", "2"])
    pool.mark_drawn(["1"])
    pool.load(["2"])
    pool.reset()
    pool.load(["1", "2"])

    assert pool.available() == ["1", "2"]
    assert pool.retired_count == 0


def test_sort_identifiers_numeric_then_lexicographic():
    assert sort_identifiers(["10", "9", "b", "a", "001", "2.5"]) == ["001", "2.5", "9", "10", "a", "b"]


@pytest.mark.parametrize(
    "value,expected",
    [
        (" 12 ", 12.0),
        ("007", 7.0),
        ("1e3", 1000.0),
        ("-2.5", -2.5),
        (".5", 0.5),
        ("abc", None),
        ("", None),
        ("nan", None),
        ("inf", None),
        ("1_000", None),
    ],
)
def test_parse_number(value, expected):
    assert parse_number(value) == expected
