"""Filter engine predicates and boundaries."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest
from expense_dashboard import synth
from expense_dashboard.filters import apply_filters
from expense_dashboard.models import Category, Filters, Frequency


def _utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def ledger(make_expense):
    return [
        make_expense(label="Rent", amount=1800.0, category=Category.HOUSING, frequency=Frequency.RECURRING,
                     date=_utc(2024, 5, 1), notes="Paid on the 1st"),
        make_expense(label="Groceries", amount=240.35, category=Category.FOOD, frequency=Frequency.RECURRING,
                     date=_utc(2024, 4, 20, 18), notes="Weekly Costco run"),
        make_expense(label="Movie Night", amount=54.5, category=Category.ENTERTAINMENT, date=_utc(2024, 4, 10, 21)),
        make_expense(label="Coffee", amount=4.2, category=Category.FOOD, date=_utc(2024, 3, 31, 8)),
        make_expense(label="Bus pass", amount=60.0, category=Category.TRANSPORTATION,
                     frequency=Frequency.RECURRING, date=_utc(2024, 3, 1)),
    ]


def _is_subsequence(subset, sequence) -> bool:
    iterator = iter(sequence)
    return all(any(item is candidate for candidate in iterator) for item in subset)


def test_default_filters_return_everything_in_order(ledger) -> None:
    assert apply_filters(ledger, Filters()) == ledger
    assert apply_filters(ledger) == ledger
    assert apply_filters([], Filters(search="rent")) == []


def test_category_and_frequency_filters(ledger) -> None:
    food = apply_filters(ledger, Filters(category=Category.FOOD))
    assert [r.label for r in food] == ["Groceries", "Coffee"]

    recurring_food = apply_filters(ledger, Filters(category="Food", frequency=Frequency.RECURRING))
    assert [r.label for r in recurring_food] == ["Groceries"]

    one_time = apply_filters(ledger, Filters(frequency="One-time"))
    assert [r.label for r in one_time] == ["Movie Night", "Coffee"]


def test_search_matches_label_or_notes_case_insensitively(ledger) -> None:
    assert [r.label for r in apply_filters(ledger, Filters(search="  GROC "))] == ["Groceries"]
    assert [r.label for r in apply_filters(ledger, Filters(search="costco"))] == ["Groceries"]
    assert [r.label for r in apply_filters(ledger, Filters(search="1st"))] == ["Rent"]
    assert apply_filters(ledger, Filters(search="netflix")) == []


def test_search_treats_input_literally(make_expense) -> None:
    records = [make_expense(label="A+B (shared)"), make_expense(label="AB shared")]
    assert [r.label for r in apply_filters(records, Filters(search="a+b ("))] == ["A+B (shared)"]


def test_search_never_matches_missing_notes(make_expense) -> None:
    records = [make_expense(label="Lunch", notes=None)]
    assert apply_filters(records, Filters(search="none")) == []


def test_start_bound_is_inclusive_from_start_of_day(ledger) -> None:
    result = apply_filters(ledger, Filters(start_date=date(2024, 4, 10)))
    assert [r.label for r in result] == ["Rent", "Groceries", "Movie Night"]


def test_end_bound_compares_against_start_of_end_day(make_expense) -> None:
    midnight = make_expense(label="midnight", date=_utc(2024, 4, 10))
    evening = make_expense(label="evening", date=_utc(2024, 4, 10, 21))
    earlier = make_expense(label="earlier", date=_utc(2024, 4, 9, 23, 59))

    result = apply_filters([midnight, evening, earlier], Filters(end_date=date(2024, 4, 10)))

    assert [r.label for r in result] == ["midnight", "earlier"]


def test_inverted_date_range_yields_nothing(ledger) -> None:
    filters = Filters(start_date=date(2024, 5, 1), end_date=date(2024, 3, 1))
    assert apply_filters(ledger, filters) == []


def test_combined_filters_produce_ordered_subsequence(ledger) -> None:
    filters = Filters(search="o", frequency=Frequency.ONE_TIME, start_date=date(2024, 3, 1), end_date=date(2024, 5, 1))
    result = apply_filters(ledger, filters)

    assert [r.label for r in result] == ["Movie Night", "Coffee"]
    assert _is_subsequence(result, ledger)


def test_food_filter_on_seed_set() -> None:
    now = _utc(2024, 5, 15, 12)
    seed = synth.default_expenses(now)

    result = apply_filters(seed, Filters(category="Food"))

    assert [r.label for r in result] == ["Groceries", "Coffee Subscription"]
    assert all(r.category is Category.FOOD for r in result)
    assert result[0].date == now - timedelta(days=6)
