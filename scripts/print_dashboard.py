"""Utility script to print the dashboard payload for the stored (or seed) expenses."""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from datetime import date, datetime
from enum import Enum
from typing import Any

from expense_dashboard import insights
from expense_dashboard.models import ALL, Category, ExpenseRecord, Filters, Frequency
from expense_dashboard.settings import load_settings
from expense_dashboard.store import ExpenseStore, FileStorage


def _default_serializer(obj: Any) -> Any:
    if isinstance(obj, ExpenseRecord):
        return asdict(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serialisable")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print the Expense Dashboard view-model as JSON")
    parser.add_argument("--search", default="")
    parser.add_argument("--category", default=ALL, choices=[ALL, *[c.value for c in Category]])
    parser.add_argument("--frequency", default=ALL, choices=[ALL, *[f.value for f in Frequency]])
    parser.add_argument("--start", type=date.fromisoformat, default=None, help="YYYY-MM-DD")
    parser.add_argument("--end", type=date.fromisoformat, default=None, help="YYYY-MM-DD")
    return parser


def main() -> None:
    settings = load_settings()
    args = build_parser().parse_args()

    store = ExpenseStore(FileStorage(settings.data_dir), key=settings.storage_key)
    filters = Filters(
        search=args.search,
        category=args.category,
        frequency=args.frequency,
        start_date=args.start,
        end_date=args.end,
    )
    payload = insights.build_dashboard(store.records, filters, tz=settings.timezone)
    print(json.dumps(payload, indent=2, default=_default_serializer))


if __name__ == "__main__":
    main()
