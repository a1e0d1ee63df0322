"""Record filtering for the Expense Dashboard."""

from __future__ import annotations

from datetime import date, datetime
from typing import Sequence

import numpy as np
import pandas as pd

from . import utils
from .models import ALL, Category, ExpenseRecord, Filters, Frequency


def _start_of_day(value: date) -> pd.Timestamp:
    if isinstance(value, datetime):
        value = value.date()
    return pd.Timestamp(value.isoformat(), tz="UTC")


def filter_mask(frame: pd.DataFrame, filters: Filters) -> pd.Series:
    """Boolean mask over ``frame`` rows that pass every active criterion."""

    mask = pd.Series(True, index=frame.index)

    if filters.category != ALL:
        mask &= frame["category"] == Category(filters.category).value

    if filters.frequency != ALL:
        mask &= frame["frequency"] == Frequency(filters.frequency).value

    if filters.start_date is not None:
        mask &= frame["date"] >= _start_of_day(filters.start_date)

    # Compared against the start of the end day, so later entries that day drop out.
    if filters.end_date is not None:
        mask &= frame["date"] <= _start_of_day(filters.end_date)

    term = (filters.search or "").strip().casefold()
    if term:
        in_label = frame["label"].astype(str).str.casefold().str.contains(term, regex=False)
        in_notes = (
            frame["notes"].fillna("").astype(str).str.casefold().str.contains(term, regex=False)
        )
        mask &= in_label | in_notes

    return mask


def apply_filters(records: Sequence[ExpenseRecord], filters: Filters | None = None) -> list[ExpenseRecord]:
    """Return the records that match ``filters``, keeping their order."""

    if not records:
        return []
    if filters is None:
        return list(records)

    frame = utils.records_to_frame(records)
    mask = filter_mask(frame, filters)
    return [records[int(position)] for position in np.flatnonzero(mask.to_numpy())]
