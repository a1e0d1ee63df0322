"""Seed set and synthetic ledger generation."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from expense_dashboard import synth
from expense_dashboard.models import Category, Frequency


def test_default_expenses_are_dated_relative_to_now() -> None:
    now = datetime(2024, 5, 15, 12, tzinfo=timezone.utc)
    expenses = synth.default_expenses(now)

    assert len(expenses) == 8
    assert len({e.id for e in expenses}) == 8
    offsets = {e.label: (e.date - now).days for e in expenses}
    assert offsets == {
        "Rent": 0,
        "Groceries": -6,
        "Gym Membership": -20,
        "Car Insurance": -25,
        "Laptop Repair": -12,
        "Movie Night": -2,
        "Water Bill": -9,
        "Coffee Subscription": -14,
    }
    rent = expenses[0]
    assert rent.amount == 1800.0
    assert rent.category is Category.HOUSING
    assert rent.frequency is Frequency.RECURRING
    assert rent.notes == "Paid on the 1st"


def test_default_expenses_treat_naive_now_as_utc() -> None:
    expenses = synth.default_expenses(datetime(2024, 1, 10))
    assert expenses[1].date == datetime(2024, 1, 4, tzinfo=timezone.utc)
    assert expenses[1].date - expenses[0].date == timedelta(days=-6)


def test_generate_expenses_is_deterministic_and_newest_first() -> None:
    first = synth.generate_expenses(rows=150, seed=11)
    second = synth.generate_expenses(rows=150, seed=11)

    assert first == second
    assert len(first) == 150
    assert len({e.id for e in first}) == 150
    assert all(e.amount > 0 for e in first)
    dates = [e.date for e in first]
    assert dates == sorted(dates, reverse=True)
    assert {e.frequency for e in first} == {Frequency.RECURRING, Frequency.ONE_TIME}


def test_generate_expenses_rejects_non_positive_rows() -> None:
    with pytest.raises(ValueError):
        synth.generate_expenses(rows=0)
