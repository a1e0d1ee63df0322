"""Write a deterministic synthetic expense ledger into the file store.

The ledger replaces whatever is stored under the configured key, so the
dashboard opens on realistic multi-month data instead of the starter set.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from expense_dashboard import synth
from expense_dashboard.logger import get_logger
from expense_dashboard.settings import load_settings
from expense_dashboard.store import FileStorage, serialize


def main() -> None:
    settings = load_settings()

    parser = argparse.ArgumentParser(description="Seed the expense store with synthetic data")
    parser.add_argument("--rows", type=int, default=synth.DEFAULT_DATASET_ROWS)
    parser.add_argument("--seed", type=int, default=synth.DEFAULT_SEED)
    parser.add_argument("--data-dir", type=Path, default=settings.data_dir)
    parser.add_argument("--key", default=settings.storage_key)
    args = parser.parse_args()

    expenses = synth.generate_expenses(rows=args.rows, seed=args.seed)
    storage = FileStorage(args.data_dir)
    storage.save(args.key, serialize(expenses))

    get_logger("scripts").info(f"Wrote {len(expenses)} expenses to {storage.path_for(args.key)}")


if __name__ == "__main__":
    main()
