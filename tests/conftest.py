"""Shared fixtures and test configuration."""

import os
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

# Send the debug log nowhere BEFORE any src imports build the Settings() singleton.
os.environ.setdefault("LOG_FILE", os.devnull)

import pytest  # noqa: E402

from src.core.types import TradeRecord  # noqa: E402

MT5_HEADER = "Action,Close Date,Profit,Commission,Swap"


@pytest.fixture
def example_records() -> list[TradeRecord]:
    """Deposit then three trades across January and February 2024."""
    return [
        TradeRecord("Deposit", datetime(2024, 1, 1), profit=10000.0),
        TradeRecord("Buy", datetime(2024, 1, 5), profit=500.0),
        TradeRecord("Sell", datetime(2024, 1, 10), profit=-200.0),
        TradeRecord("Buy", datetime(2024, 2, 1), profit=300.0),
    ]


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """Write CSV lines to a file under tmp_path and return its path."""

    def _write(lines: list[str], name: str = "history.csv", header: str | None = MT5_HEADER) -> Path:
        path = tmp_path / name
        content = lines if header is None else [header, *lines]
        path.write_text("\n".join(content) + "\n")
        return path

    return _write
