"""Seed expenses and deterministic synthetic data for the Expense Dashboard.

``default_expenses`` is the fixed starter set shown when nothing has been
stored yet. ``generate_expenses`` produces a longer, realistic ledger with
recurring bills and day-to-day spending for demos and scripts.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Callable
from uuid import UUID, uuid4

import numpy as np

from .models import Category, ExpenseRecord, Frequency

DEFAULT_DATASET_ROWS = 250
DEFAULT_SEED = 7


@dataclass(frozen=True)
class ExpenseProfile:
    """Static metadata for a kind of expense."""

    label: str
    category: Category
    amount_range: tuple[float, float]
    recurring: bool = False
    day_of_month: int | None = None
    notes: tuple[str, ...] = ()


def _seed_rows() -> list[tuple[str, float, Category, int, Frequency, str | None]]:
    return [
        ("Rent", 1800.0, Category.HOUSING, 0, Frequency.RECURRING, "Paid on the 1st"),
        ("Groceries", 240.35, Category.FOOD, -6, Frequency.RECURRING, "Weekly Costco run"),
        ("Gym Membership", 65.0, Category.HEALTH, -20, Frequency.RECURRING, None),
        ("Car Insurance", 120.0, Category.TRANSPORTATION, -25, Frequency.RECURRING, None),
        ("Laptop Repair", 320.0, Category.EDUCATION, -12, Frequency.ONE_TIME, "Replaced screen"),
        ("Movie Night", 54.5, Category.ENTERTAINMENT, -2, Frequency.ONE_TIME, None),
        ("Water Bill", 42.0, Category.UTILITIES, -9, Frequency.RECURRING, None),
        ("Coffee Subscription", 18.0, Category.FOOD, -14, Frequency.RECURRING, None),
    ]


def default_expenses(
    now: datetime | None = None,
    *,
    new_id: Callable[[], str] = lambda: str(uuid4()),
) -> list[ExpenseRecord]:
    """Return the eight starter expenses, dated relative to ``now``."""

    anchor = now or datetime.now(timezone.utc)
    if anchor.tzinfo is None:
        anchor = anchor.replace(tzinfo=timezone.utc)
    anchor = anchor.astimezone(timezone.utc)

    return [
        ExpenseRecord(
            id=new_id(),
            label=label,
            amount=amount,
            category=category,
            date=anchor + timedelta(days=offset),
            frequency=frequency,
            notes=notes,
        )
        for label, amount, category, offset, frequency, notes in _seed_rows()
    ]


RECURRING_PROFILES = (
    ExpenseProfile("Rent", Category.HOUSING, (1750.0, 1850.0), recurring=True, day_of_month=1),
    ExpenseProfile("Electricity", Category.UTILITIES, (55.0, 95.0), recurring=True, day_of_month=8),
    ExpenseProfile("Water Bill", Category.UTILITIES, (32.0, 48.0), recurring=True, day_of_month=12),
    ExpenseProfile("Car Insurance", Category.TRANSPORTATION, (115.0, 125.0), recurring=True, day_of_month=15),
    ExpenseProfile("Gym Membership", Category.HEALTH, (65.0, 65.0), recurring=True, day_of_month=3),
    ExpenseProfile("Streaming Bundle", Category.ENTERTAINMENT, (15.99, 22.99), recurring=True, day_of_month=20),
    ExpenseProfile("Online Course", Category.EDUCATION, (29.0, 29.0), recurring=True, day_of_month=5),
    ExpenseProfile(
        "Coffee Subscription", Category.FOOD, (18.0, 18.0), recurring=True, day_of_month=14
    ),
)

DAILY_PROFILES = (
    ExpenseProfile("Groceries", Category.FOOD, (35.0, 260.0), notes=("Weekly shop", "Farmers market")),
    ExpenseProfile("Lunch", Category.FOOD, (9.0, 24.0)),
    ExpenseProfile("Fuel", Category.TRANSPORTATION, (38.0, 85.0)),
    ExpenseProfile("Rideshare", Category.TRANSPORTATION, (11.0, 42.0), notes=("Airport run",)),
    ExpenseProfile("Movie Night", Category.ENTERTAINMENT, (24.0, 60.0)),
    ExpenseProfile("Pharmacy", Category.HEALTH, (8.0, 55.0)),
    ExpenseProfile("Books", Category.EDUCATION, (12.0, 70.0)),
    ExpenseProfile("Hardware Store", Category.OTHER, (15.0, 140.0), notes=("Garden supplies",)),
)


def _deterministic_id(*parts: object) -> str:
    digest = hashlib.sha1("|".join(str(part) for part in parts).encode("utf-8")).digest()
    return str(UUID(bytes=digest[:16]))


def _pick_amount(profile: ExpenseProfile, rng: np.random.Generator) -> float:
    low, high = profile.amount_range
    if low == high:
        return round(low, 2)
    return round(float(rng.uniform(low, high)), 2)


def _build_expense(
    profile: ExpenseProfile,
    *,
    when: datetime,
    rng: np.random.Generator,
    index: int,
) -> ExpenseRecord:
    notes = None
    if profile.notes and rng.random() < 0.35:
        notes = str(rng.choice(list(profile.notes)))
    return ExpenseRecord(
        id=_deterministic_id(profile.label, when.isoformat(), index),
        label=profile.label,
        amount=_pick_amount(profile, rng),
        category=profile.category,
        date=when,
        frequency=Frequency.RECURRING if profile.recurring else Frequency.ONE_TIME,
        notes=notes,
    )


def _generate_month_expenses(
    year: int,
    month: int,
    rng: np.random.Generator,
    *,
    offset: int,
) -> list[ExpenseRecord]:
    expenses: list[ExpenseRecord] = []

    for profile in RECURRING_PROFILES:
        when = datetime(year, month, profile.day_of_month or 1, 9, tzinfo=timezone.utc)
        expenses.append(_build_expense(profile, when=when, rng=rng, index=offset + len(expenses)))

    # Day-to-day spending, roughly five purchases a week.
    purchases = int(rng.poisson(22))
    for _ in range(purchases):
        profile = DAILY_PROFILES[int(rng.integers(0, len(DAILY_PROFILES)))]
        day = int(rng.integers(1, 29))
        hour = int(rng.integers(8, 22))
        when = datetime(year, month, day, hour, tzinfo=timezone.utc)
        expenses.append(_build_expense(profile, when=when, rng=rng, index=offset + len(expenses)))

    return expenses


def generate_expenses(
    rows: int = DEFAULT_DATASET_ROWS,
    *,
    seed: int | None = DEFAULT_SEED,
    start: date = date(2024, 1, 1),
) -> list[ExpenseRecord]:
    """Generate a deterministic ledger of ``rows`` expenses, newest first."""

    if rows <= 0:
        raise ValueError("rows must be positive")

    rng = np.random.default_rng(seed)
    expenses: list[ExpenseRecord] = []

    year = start.year
    month = start.month
    while len(expenses) < rows:
        expenses.extend(_generate_month_expenses(year, month, rng, offset=len(expenses)))
        month += 1
        if month > 12:
            month = 1
            year += 1

    expenses.sort(key=lambda item: (item.date, item.id))
    return list(reversed(expenses[:rows]))
