"""Trade-history ingestion — read a broker CSV export into TradeRecords."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.csv as pacsv

from src.config import settings
from src.core.classifier import classify_action
from src.core.types import TradeRecord

logger = logging.getLogger(__name__)

ACTION_COLUMN = "Action"
CLOSE_DATE_COLUMN = "Close Date"
PROFIT_COLUMN = "Profit"
COMMISSION_COLUMN = "Commission"
SWAP_COLUMN = "Swap"

REQUIRED_COLUMNS = (PROFIT_COLUMN, CLOSE_DATE_COLUMN)

FORMAT_ERROR = (
    "Invalid CSV format. Please ensure it's a standard MT5 history export "
    "containing 'Profit' and 'Close Date'."
)


class TradeHistoryError(ValueError):
    """The export cannot be analyzed: unreadable, empty, or missing required data."""


def read_trade_history(
    path: str | Path,
    *,
    delimiter: str | None = None,
    date_formats: Sequence[str] | None = None,
) -> list[TradeRecord]:
    """Read a CSV export and convert it to TradeRecords.

    Args:
        path: CSV file with a header row.
        delimiter: Field separator. Defaults to ``settings.csv_delimiter``.
        date_formats: strptime formats for ``Close Date``. Defaults to
            ``settings.date_formats``.

    Raises:
        TradeHistoryError: If the file cannot be read or fails validation.
    """
    path = Path(path)
    formats = list(date_formats or settings.date_formats)

    try:
        table = pacsv.read_csv(
            str(path),
            parse_options=pacsv.ParseOptions(delimiter=delimiter or settings.csv_delimiter),
            convert_options=pacsv.ConvertOptions(timestamp_parsers=formats),
        )
    except FileNotFoundError:
        raise TradeHistoryError(f"File not found: {path}") from None
    except (pa.ArrowInvalid, OSError) as e:
        raise TradeHistoryError(f"Could not parse {path.name}: {e}") from e

    rows = table.to_pylist()
    logger.info("Read %d rows from %s", len(rows), path)
    return records_from_rows(rows, date_formats=formats)


def records_from_rows(
    rows: Sequence[Mapping[str, Any]],
    date_formats: Sequence[str] | None = None,
) -> list[TradeRecord]:
    """Validate parsed rows and convert them to TradeRecords.

    The dataset is rejected when it is empty or its first row lacks a
    ``Profit`` or ``Close Date`` field. Funding and trade rows must carry a
    readable close date; rows the classifier ignores are dropped when theirs
    is missing, since they never affect the analysis.

    Raises:
        TradeHistoryError: On a failed check or an unreadable date/amount.
    """
    if not rows or any(column not in rows[0] for column in REQUIRED_COLUMNS):
        raise TradeHistoryError(FORMAT_ERROR)

    formats = list(date_formats or settings.date_formats)
    records: list[TradeRecord] = []
    dropped = 0

    # Row numbers in messages count the header as line 1
    for line_no, row in enumerate(rows, start=2):
        raw_action = row.get(ACTION_COLUMN)
        action = "" if raw_action is None else str(raw_action)

        try:
            close_time = parse_close_date(row.get(CLOSE_DATE_COLUMN), formats)
        except ValueError as e:
            if classify_action(action) == "ignored":
                dropped += 1
                logger.debug("Dropping row %d (%r): %s", line_no, action, e)
                continue
            raise TradeHistoryError(f"Row {line_no} ({action or 'no action'}): {e}") from None

        try:
            records.append(
                TradeRecord(
                    action=action,
                    close_time=close_time,
                    profit=parse_amount(row.get(PROFIT_COLUMN)),
                    commission=parse_amount(row.get(COMMISSION_COLUMN)),
                    swap=parse_amount(row.get(SWAP_COLUMN)),
                )
            )
        except ValueError as e:
            raise TradeHistoryError(f"Row {line_no} ({action or 'no action'}): {e}") from None

    if dropped:
        logger.info("Dropped %d undated rows that are neither trades nor funding", dropped)
    return records


def parse_close_date(value: Any, formats: Sequence[str]) -> datetime:
    """Convert a ``Close Date`` cell to a naive datetime.

    Accepts datetimes, dates, and strings in any of ``formats`` or ISO 8601.
    Timezone information is dropped so every record compares on wall-clock time.

    Raises:
        ValueError: If the value is missing or cannot be parsed.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError("missing Close Date")
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str):
        text = value.strip()
        for fmt in formats:
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                continue
        try:
            return datetime.fromisoformat(text).replace(tzinfo=None)
        except ValueError:
            pass
    raise ValueError(f"unparseable Close Date {value!r}")


def parse_amount(value: Any) -> float:
    """Convert a numeric cell to float; missing or blank cells are 0.0.

    Strings may use spaces or commas as thousands separators, or a single
    comma as the decimal mark ("1 234,56").

    Raises:
        ValueError: If a non-blank value is not a finite number.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    if isinstance(value, (int, float)):
        amount = float(value)
    else:
        text = str(value).strip().replace(" ", "").replace("\u00a0", "")
        if not text:
            return 0.0
        if "." in text:
            text = text.replace(",", "")
        elif text.count(",") == 1:
            text = text.replace(",", ".")
        try:
            amount = float(text)
        except ValueError:
            raise ValueError(f"not a number: {value!r}") from None
    if math.isnan(amount):
        return 0.0
    if not math.isfinite(amount):
        raise ValueError(f"not a finite number: {value!r}")
    return amount
