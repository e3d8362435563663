"""Year/month P&L matrix rows and their plain-text rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from src.core.types import MONTH_NAMES, MonthlyPnL

Tone = Literal["pos", "neg", "zero"]

EMPTY_MATRIX_TEXT = "No data available for matrix"
ABSENT_CELL = "-"


def format_usd(value: float) -> str:
    """Signed dollar amount: "+$1,234.56", "-$200.00" or "$0.00"."""
    if value > 0:
        sign = "+$"
    elif value < 0:
        sign = "-$"
    else:
        sign = "$"
    return f"{sign}{abs(value):,.2f}"


def format_pct(value: float) -> str:
    """Percentage with a leading "+" for positive values: "+1.23%"."""
    return f"{'+' if value > 0 else ''}{value:.2f}%"


def _tone(value: float) -> Tone:
    if value > 0:
        return "pos"
    if value < 0:
        return "neg"
    return "zero"


@dataclass(frozen=True, slots=True)
class MatrixCell:
    text: str
    tone: Tone | None = None  # None for months without trades


@dataclass(frozen=True, slots=True)
class MatrixRow:
    year: int
    cells: tuple[MatrixCell, ...]  # Always 12, January first
    total: MatrixCell


def _value_cell(profit_usd: float, display_value: float, percentage_mode: bool) -> MatrixCell:
    text = format_pct(display_value) if percentage_mode else format_usd(display_value)
    # A month that netted exactly zero reads as neutral even if rounding says otherwise
    tone: Tone = "zero" if profit_usd == 0 else _tone(display_value)
    return MatrixCell(text=text, tone=tone)


def build_matrix_rows(months: MonthlyPnL, percentage_mode: bool = False) -> list[MatrixRow]:
    """One row per year in ascending order; empty when no trades were recorded."""
    rows: list[MatrixRow] = []
    for year in months.years():
        cells: list[MatrixCell] = []
        for month in range(1, 13):
            bucket = months.bucket(year, month)
            if bucket is None:
                cells.append(MatrixCell(text=ABSENT_CELL))
                continue
            value = bucket.return_pct if percentage_mode else bucket.profit_usd
            cells.append(_value_cell(bucket.profit_usd, value, percentage_mode))

        year_total = months.year_total(year)
        total_value = year_total.return_pct if percentage_mode else year_total.profit_usd
        rows.append(
            MatrixRow(
                year=year,
                cells=tuple(cells),
                total=_value_cell(year_total.profit_usd, total_value, percentage_mode),
            )
        )
    return rows


def matrix_header() -> list[str]:
    return ["Year", *MONTH_NAMES, "Total"]


def render_matrix_text(rows: list[MatrixRow]) -> str:
    """Render matrix rows as a fixed-width text table."""
    header = matrix_header()
    if not rows:
        return "\n".join(["  ".join(header), EMPTY_MATRIX_TEXT])

    table = [header]
    for row in rows:
        table.append([str(row.year), *(c.text for c in row.cells), row.total.text])

    widths = [max(len(line[i]) for line in table) for i in range(len(header))]
    lines = []
    for line in table:
        first = line[0].ljust(widths[0])
        rest = (text.rjust(width) for text, width in zip(line[1:], widths[1:]))
        lines.append("  ".join([first, *rest]))
    return "\n".join(lines)
