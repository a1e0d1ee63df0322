"""Shared utilities for the Expense Dashboard."""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from .models import ExpenseRecord

FRAME_COLUMNS = ["id", "label", "amount", "category", "frequency", "date", "notes"]


def records_to_frame(records: Iterable[ExpenseRecord]) -> pd.DataFrame:
    """Tabulate records, one row per record, in their original order.

    ``category`` and ``frequency`` hold the enum values as plain strings and
    ``date`` is a UTC ``datetime64`` column.
    """

    rows = [
        {
            "id": record.id,
            "label": record.label,
            "amount": float(record.amount),
            "category": record.category.value,
            "frequency": record.frequency.value,
            "date": record.date,
            "notes": record.notes,
        }
        for record in records
    ]
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    df["amount"] = df["amount"].astype(float)
    df["date"] = pd.to_datetime(df["date"], utc=True)
    return df


def format_currency(value: float, currency: str = "$") -> str:
    """Return a human-readable currency string."""

    return f"{currency}{value:,.2f}"
