"""Expense record types and new-expense validation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Callable, Mapping, Union
from uuid import uuid4

import pandas as pd

ALL = "All"
UNTITLED_LABEL = "Untitled expense"
INVALID_AMOUNT_MESSAGE = "Please enter a valid amount greater than 0."


class Category(str, Enum):
    HOUSING = "Housing"
    TRANSPORTATION = "Transportation"
    FOOD = "Food"
    UTILITIES = "Utilities"
    ENTERTAINMENT = "Entertainment"
    HEALTH = "Health"
    EDUCATION = "Education"
    OTHER = "Other"


class Frequency(str, Enum):
    ONE_TIME = "One-time"
    RECURRING = "Recurring"


class ExpenseValidationError(ValueError):
    """Raised when new-expense input cannot become an :class:`ExpenseRecord`."""


@dataclass(frozen=True)
class ExpenseRecord:
    """A single logged expense. Immutable once created."""

    id: str
    label: str
    amount: float
    category: Category
    date: datetime  # timezone-aware, UTC
    frequency: Frequency
    notes: str | None = None


CategoryFilter = Union[Category, str]
FrequencyFilter = Union[Frequency, str]


@dataclass
class Filters:
    """Active query criteria narrowing the displayed records."""

    search: str = ""
    category: CategoryFilter = ALL
    frequency: FrequencyFilter = ALL
    start_date: date | None = None
    end_date: date | None = None


def to_utc(value: Any) -> datetime:
    """Normalise any timestamp-like value to an aware UTC ``datetime``.

    Naive values are taken to already be UTC.
    """

    ts = pd.Timestamp(value)
    if pd.isna(ts):
        raise ValueError(f"Not a timestamp: {value!r}")
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    else:
        ts = ts.tz_convert("UTC")
    return ts.to_pydatetime()


def _parse_amount(raw: Any) -> float:
    if isinstance(raw, bool) or raw is None:
        raise ExpenseValidationError(INVALID_AMOUNT_MESSAGE)
    try:
        value = float(str(raw).strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError) as exc:
        raise ExpenseValidationError(INVALID_AMOUNT_MESSAGE) from exc
    if not math.isfinite(value) or value <= 0:
        raise ExpenseValidationError(INVALID_AMOUNT_MESSAGE)
    rounded = round(value, 2)
    if rounded <= 0:
        raise ExpenseValidationError(INVALID_AMOUNT_MESSAGE)
    return rounded


def _parse_calendar_date(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        raw = raw.date()
    if isinstance(raw, date):
        day = raw
    else:
        try:
            day = date.fromisoformat(str(raw).strip())
        except ValueError as exc:
            raise ExpenseValidationError("Please enter a valid date.") from exc
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def create_expense(
    form: Mapping[str, Any],
    *,
    new_id: Callable[[], str] = lambda: str(uuid4()),
) -> ExpenseRecord:
    """Validate raw form input and build a new :class:`ExpenseRecord`.

    Raises :class:`ExpenseValidationError` with a user-facing message when the
    amount is not a positive number, the category or frequency is unknown, or
    the date cannot be parsed. No record (and no id) is produced on failure.
    """

    amount = _parse_amount(form.get("amount"))

    try:
        category = Category(form.get("category", Category.HOUSING))
    except ValueError as exc:
        raise ExpenseValidationError("Please choose a valid category.") from exc
    try:
        frequency = Frequency(form.get("frequency", Frequency.ONE_TIME))
    except ValueError as exc:
        raise ExpenseValidationError("Please choose a valid frequency.") from exc

    when = _parse_calendar_date(form.get("date") or datetime.now(timezone.utc).date())

    label = str(form.get("label") or "").strip() or UNTITLED_LABEL
    notes = str(form.get("notes") or "").strip() or None

    return ExpenseRecord(
        id=new_id(),
        label=label,
        amount=amount,
        category=category,
        date=when,
        frequency=frequency,
        notes=notes,
    )
