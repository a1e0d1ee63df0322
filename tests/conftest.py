"""Shared fixtures for the Expense Dashboard tests."""

from __future__ import annotations

from datetime import datetime, timezone
from itertools import count

import pytest
from expense_dashboard.models import Category, ExpenseRecord, Frequency

NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_expense():
    ids = count(1)

    def _make(
        label: str = "Item",
        amount: float = 10.0,
        category: Category = Category.OTHER,
        date: datetime = NOW,
        frequency: Frequency = Frequency.ONE_TIME,
        notes: str | None = None,
    ) -> ExpenseRecord:
        return ExpenseRecord(
            id=f"exp-{next(ids)}",
            label=label,
            amount=amount,
            category=category,
            date=date,
            frequency=frequency,
            notes=notes,
        )

    return _make
