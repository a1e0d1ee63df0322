"""Summary metrics, category buckets and monthly trends for the Expense Dashboard."""

from __future__ import annotations

import math
from typing import Sequence, TypedDict

import pandas as pd

from . import filters as filtering
from . import utils
from .models import Category, ExpenseRecord, Filters, Frequency

DAYS_PER_MONTH = 30


class SummaryMetrics(TypedDict):
    total: float
    recurring_total: float
    avg_daily: float
    avg_monthly: float
    span_days: int
    span_months: int


class CategoryBucket(TypedDict):
    category: Category
    amount: float
    percentage: float
    width: float


class TrendPoint(TypedDict):
    month: str
    label: str
    amount: float


class DashboardPayload(TypedDict):
    filtered_records: list[ExpenseRecord]
    total: float
    recurring_total: float
    avg_daily: float
    avg_monthly: float
    span_days: int
    span_months: int
    category_buckets: list[CategoryBucket]
    trend_points: list[TrendPoint]


def _empty_summary() -> SummaryMetrics:
    return {
        "total": 0,
        "recurring_total": 0,
        "avg_daily": 0,
        "avg_monthly": 0,
        "span_days": 0,
        "span_months": 0,
    }


def _span_days(dates: pd.Series) -> int:
    elapsed = dates.max() - dates.min()
    return max(1, math.ceil(elapsed / pd.Timedelta(days=1)))


def calculate_summary(records: Sequence[ExpenseRecord]) -> SummaryMetrics:
    """Totals and averages over the given (already filtered) records.

    Averages divide by the span between the earliest and latest record,
    rounded up to whole days (never less than one) and, for the monthly
    figure, to flat 30-day months.
    """

    df = utils.records_to_frame(records)
    if df.empty:
        return _empty_summary()

    total = float(df["amount"].sum())
    recurring_total = float(df.loc[df["frequency"] == Frequency.RECURRING.value, "amount"].sum())

    span_days = _span_days(df["date"])
    span_months = max(1, math.ceil(span_days / DAYS_PER_MONTH))

    return {
        "total": total,
        "recurring_total": recurring_total,
        "avg_daily": total / span_days,
        "avg_monthly": total / span_months,
        "span_days": span_days,
        "span_months": span_months,
    }


def category_breakdown(
    records: Sequence[ExpenseRecord],
    total: float | None = None,
) -> list[CategoryBucket]:
    """One bucket per category, in declared category order.

    ``percentage`` is relative to ``total`` (the filtered total by default).
    ``width`` is relative to the largest bucket, for bar lengths.
    """

    df = utils.records_to_frame(records)
    if total is None:
        total = float(df["amount"].sum()) if not df.empty else 0.0

    amounts = (
        df.groupby("category")["amount"].sum()
        .reindex([category.value for category in Category], fill_value=0.0)
    )
    largest = max(1.0, float(amounts.max()))

    buckets: list[CategoryBucket] = []
    for category in Category:
        amount = float(amounts[category.value])
        buckets.append(
            {
                "category": category,
                "amount": amount,
                "percentage": 0.0 if total == 0 else amount / total * 100.0,
                "width": amount / largest * 100.0,
            }
        )
    return buckets


def _month_label(key: str) -> str:
    return pd.Timestamp(f"{key}-01").strftime("%b %Y")


def monthly_trend(records: Sequence[ExpenseRecord], *, tz: str = "UTC") -> list[TrendPoint]:
    """Spend per calendar month (in ``tz``), oldest month first."""

    df = utils.records_to_frame(records)
    if df.empty:
        return []

    df["month"] = df["date"].dt.tz_convert(tz).dt.strftime("%Y-%m")
    totals = df.groupby("month")["amount"].sum().sort_index()

    return [
        {
            "month": str(month),
            "label": _month_label(str(month)),
            "amount": float(amount),
        }
        for month, amount in totals.items()
    ]


def build_dashboard(
    records: Sequence[ExpenseRecord],
    filters: Filters | None = None,
    *,
    tz: str = "UTC",
) -> DashboardPayload:
    """Filter ``records`` and compute every figure the dashboard renders."""

    filtered = filtering.apply_filters(records, filters or Filters())
    summary = calculate_summary(filtered)

    return {
        "filtered_records": filtered,
        "total": summary["total"],
        "recurring_total": summary["recurring_total"],
        "avg_daily": summary["avg_daily"],
        "avg_monthly": summary["avg_monthly"],
        "span_days": summary["span_days"],
        "span_months": summary["span_months"],
        "category_buckets": category_breakdown(filtered, summary["total"]),
        "trend_points": monthly_trend(filtered, tz=tz),
    }
