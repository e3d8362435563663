"""Core data structures used throughout tradelens."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True, slots=True)
class TradeRecord:
    """One row of a broker trade-history export."""

    action: str
    close_time: datetime
    profit: float = 0.0
    commission: float = 0.0
    swap: float = 0.0

    def net_pnl(self, include_fees: bool = False) -> float:
        """Realized result of the row.

        Commission and swap are only added when ``include_fees`` is set;
        MT5 reports both as signed amounts.
        """
        if include_fees:
            return self.profit + self.commission + self.swap
        return self.profit


@dataclass(slots=True)
class EquityState:
    """Running account state, seeded to zero for every analysis."""

    current_equity: float = 0.0
    net_deposits: float = 0.0
    peak_equity: float = 0.0
    max_drawdown_pct: float = 0.0  # Magnitude, always >= 0

    @property
    def equity_pct(self) -> float:
        """Return on deposited capital in percent, 0.0 before any deposit."""
        if self.net_deposits > 0:
            return (self.current_equity - self.net_deposits) / self.net_deposits * 100
        return 0.0


@dataclass(frozen=True, slots=True)
class ChartPoint:
    """A single point on the equity curve."""

    label: str
    equity_usd: float
    equity_pct: float
    timestamp: datetime
    is_funding: bool = False


@dataclass(slots=True)
class MonthBucket:
    """Trade P&L of one calendar month.

    ``start_equity`` is the equity just before the month's first trade and is
    set once when the bucket is created.
    """

    start_equity: float
    profit_usd: float = 0.0

    @property
    def return_pct(self) -> float:
        if self.start_equity > 0:
            return self.profit_usd / self.start_equity * 100
        return 0.0


@dataclass(frozen=True, slots=True)
class YearTotal:
    """Derived totals for one year of month buckets."""

    year: int
    profit_usd: float
    start_equity: float | None  # First month baseline above zero, if any

    @property
    def return_pct(self) -> float:
        if self.start_equity is not None and self.start_equity > 0:
            return self.profit_usd / self.start_equity * 100
        return 0.0


@dataclass(slots=True)
class MonthlyPnL:
    """Two-level lookup: year, then month (1-12), to a MonthBucket."""

    _years: dict[int, dict[int, MonthBucket]] = field(default_factory=dict)

    def record(self, when: datetime, pnl: float, equity_before: float) -> MonthBucket:
        """Add a trade result to its month, creating the bucket on first use."""
        months = self._years.setdefault(when.year, {})
        bucket = months.get(when.month)
        if bucket is None:
            bucket = MonthBucket(start_equity=equity_before)
            months[when.month] = bucket
        bucket.profit_usd += pnl
        return bucket

    def bucket(self, year: int, month: int) -> MonthBucket | None:
        return self._years.get(year, {}).get(month)

    def years(self) -> list[int]:
        return sorted(self._years)

    def months(self, year: int) -> list[int]:
        return sorted(self._years.get(year, {}))

    def year_total(self, year: int) -> YearTotal:
        """Sum a year's buckets; the baseline is the first month with equity above zero."""
        months = self._years.get(year, {})
        profit = 0.0
        start_equity: float | None = None
        for month in sorted(months):
            bucket = months[month]
            profit += bucket.profit_usd
            if start_equity is None and bucket.start_equity > 0:
                start_equity = bucket.start_equity
        return YearTotal(year=year, profit_usd=profit, start_equity=start_equity)

    @property
    def is_empty(self) -> bool:
        return not self._years

    def __contains__(self, year: object) -> bool:
        return year in self._years


@dataclass(frozen=True, slots=True)
class PerformanceMetrics:
    """Scalar results of an analysis run.

    ``max_drawdown_pct`` is reported as a non-positive number.
    ``profit_factor`` is 99.99 when there are winners but no losers.
    """

    return_pct: float
    win_rate_pct: float
    profit_factor: float
    max_drawdown_pct: float
    total_trades: int = 0
    winning_trades: int = 0
    gross_profit: float = 0.0
    gross_loss: float = 0.0
    net_deposits: float = 0.0
    final_equity: float = 0.0
