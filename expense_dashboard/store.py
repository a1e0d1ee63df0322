"""Expense persistence: record codec, storage ports and the in-memory store."""

from __future__ import annotations

import json
import math
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Protocol, Sequence
from uuid import uuid4

from . import synth
from .logger import get_logger
from .models import Category, ExpenseRecord, Frequency, create_expense, to_utc
from .settings import DEFAULT_STORAGE_KEY

STORAGE_KEY = DEFAULT_STORAGE_KEY

SeedFactory = Callable[[], Sequence[ExpenseRecord]]


class ExpenseStorage(Protocol):
    """Key-value byte store the expense list is persisted into."""

    def load(self, key: str) -> bytes | None: ...

    def save(self, key: str, data: bytes) -> None: ...


class MemoryStorage:
    def __init__(self, initial: Mapping[str, bytes] | None = None) -> None:
        self._blobs: dict[str, bytes] = dict(initial or {})

    def load(self, key: str) -> bytes | None:
        return self._blobs.get(key)

    def save(self, key: str, data: bytes) -> None:
        self._blobs[key] = bytes(data)


class FileStorage:
    """Stores each key as ``<directory>/<key>.json``, replaced whole on write."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        safe = "".join(ch if ch.isalnum() or ch in "-_.@" else "_" for ch in key)
        return self.directory / f"{safe}.json"

    def load(self, key: str) -> bytes | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def save(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def _format_timestamp(value: datetime) -> str:
    return to_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def record_to_dict(record: ExpenseRecord) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": record.id,
        "label": record.label,
        "amount": record.amount,
        "category": record.category.value,
        "date": _format_timestamp(record.date),
        "frequency": record.frequency.value,
    }
    if record.notes is not None:
        payload["notes"] = record.notes
    return payload


def record_from_dict(item: Mapping[str, Any]) -> ExpenseRecord:
    """Rebuild a stored record.

    Raises ``KeyError``/``ValueError``/``TypeError`` on bad input, and
    ``OverflowError`` for an integer amount too large for a float.
    """

    if isinstance(item["amount"], bool):
        raise TypeError("Stored amount must be a number, got a boolean")
    amount = float(item["amount"])
    if not math.isfinite(amount) or amount <= 0:
        raise ValueError(f"Stored amount must be a finite positive number, got {amount!r}")
    notes = item.get("notes")
    return ExpenseRecord(
        id=str(item["id"]),
        label=str(item["label"]),
        amount=amount,
        category=Category(item["category"]),
        date=to_utc(item["date"]),
        frequency=Frequency(item["frequency"]),
        notes=None if notes is None else str(notes),
    )


def serialize(records: Iterable[ExpenseRecord]) -> bytes:
    return json.dumps([record_to_dict(record) for record in records]).encode("utf-8")


def hydrate(
    payload: bytes | str | None,
    *,
    seed_factory: SeedFactory = synth.default_expenses,
) -> list[ExpenseRecord]:
    """Decode stored records, falling back to the seed set.

    A missing or empty payload, or any payload that fails to decode, yields
    ``seed_factory()``. Dates are re-normalised to UTC instants on load.
    """

    logger = get_logger("store")
    if not payload or not payload.strip():
        logger.debug("No stored expenses found, using seed data")
        return list(seed_factory())

    try:
        data = json.loads(payload)
        if not isinstance(data, list):
            raise TypeError(f"Expected a list of expenses, got {type(data).__name__}")
        records = [record_from_dict(item) for item in data]
    except (ValueError, TypeError, KeyError, AttributeError, OverflowError, RecursionError) as exc:
        logger.warning(f"Failed to parse stored expenses, using seed data: {exc}")
        return list(seed_factory())

    logger.debug(f"Loaded {len(records)} stored expenses")
    return records


def add(existing: Sequence[ExpenseRecord], new: ExpenseRecord) -> tuple[ExpenseRecord, ...]:
    """Return a new sequence with ``new`` placed first."""

    return (new, *existing)


class ExpenseStore:
    """Holds the canonical expense list and writes it through ``storage``.

    The store hydrates once on construction. Every :meth:`add` replaces the
    whole persisted blob; write failures are logged and never undo the
    in-memory change.
    """

    def __init__(
        self,
        storage: ExpenseStorage,
        *,
        key: str = STORAGE_KEY,
        seed_factory: SeedFactory = synth.default_expenses,
        new_id: Callable[[], str] = lambda: str(uuid4()),
    ) -> None:
        self._storage = storage
        self._key = key
        self._new_id = new_id
        self._logger = get_logger("store")

        try:
            payload = storage.load(key)
        except Exception as exc:
            self._logger.warning(f"Could not read stored expenses for {key!r}: {exc}")
            payload = None
        self._records: tuple[ExpenseRecord, ...] = tuple(hydrate(payload, seed_factory=seed_factory))

    @property
    def records(self) -> tuple[ExpenseRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def add(self, record: ExpenseRecord) -> tuple[ExpenseRecord, ...]:
        self._records = add(self._records, record)
        self._persist()
        return self._records

    def submit(self, form: Mapping[str, Any]) -> ExpenseRecord:
        """Validate form input and add the resulting record.

        ``ExpenseValidationError`` propagates unchanged and leaves the store
        untouched.
        """

        record = create_expense(form, new_id=self._new_id)
        self.add(record)
        self._logger.info(f"Added expense {record.label!r} ({record.amount:.2f})")
        return record

    def _persist(self) -> None:
        try:
            self._storage.save(self._key, serialize(self._records))
        except Exception:
            self._logger.exception(f"Failed to persist {len(self._records)} expenses")
