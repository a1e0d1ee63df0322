"""Command-line argument handling for the helper scripts."""

from __future__ import annotations

import importlib.util
from datetime import date
from pathlib import Path

import pytest

SCRIPTS_DIR = Path(__file__).resolve().parent.parent / "scripts"


def _load_script(name: str):
    spec = importlib.util.spec_from_file_location(name, SCRIPTS_DIR / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def parser():
    return _load_script("print_dashboard").build_parser()


def test_print_dashboard_defaults(parser) -> None:
    args = parser.parse_args([])

    assert args.category == "All"
    assert args.frequency == "All"
    assert args.search == ""
    assert args.start is None and args.end is None


def test_print_dashboard_accepts_known_filters(parser) -> None:
    args = parser.parse_args(
        ["--category", "Food", "--frequency", "Recurring", "--start", "2024-04-01", "--end", "2024-05-01"]
    )

    assert args.category == "Food"
    assert args.frequency == "Recurring"
    assert args.start == date(2024, 4, 1)
    assert args.end == date(2024, 5, 1)


@pytest.mark.parametrize(
    "argv",
    [
        ["--category", "Travel"],
        ["--frequency", "Weekly"],
    ],
)
def test_print_dashboard_rejects_unknown_choices(parser, argv, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        parser.parse_args(argv)

    assert excinfo.value.code == 2
    assert "invalid choice" in capsys.readouterr().err
