"""Analysis engine — turns trade-history records into an equity curve, metrics and a P&L matrix."""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from src.core.classifier import classify_action
from src.core.tracker import EquityTracker
from src.core.types import MONTH_NAMES, ChartPoint, MonthlyPnL, PerformanceMetrics, TradeRecord

logger = logging.getLogger(__name__)


def format_label(when: datetime, funding: bool = False) -> str:
    """Chart label such as "Jan 5, 24", suffixed with " (Dep)" for funding events."""
    label = f"{MONTH_NAMES[when.month - 1]} {when.day}, {when:%y}"
    return f"{label} (Dep)" if funding else label


# --- Result types ---


@dataclass
class AnalysisResult:
    """Results of one analysis run.

    Holds both the USD and the percentage form of the equity curve, so a
    display can switch between them without re-running the analysis.
    """

    points: list[ChartPoint]
    metrics: PerformanceMetrics
    months: MonthlyPnL

    @property
    def labels(self) -> list[str]:
        return [p.label for p in self.points]

    @property
    def equity_usd(self) -> list[float]:
        return [p.equity_usd for p in self.points]

    @property
    def equity_pct(self) -> list[float]:
        return [p.equity_pct for p in self.points]

    def series(self, percentage_mode: bool = False) -> list[float]:
        return self.equity_pct if percentage_mode else self.equity_usd

    @property
    def start_time(self) -> datetime | None:
        return self.points[0].timestamp if self.points else None

    @property
    def end_time(self) -> datetime | None:
        return self.points[-1].timestamp if self.points else None

    def summary(self) -> str:
        """Human-readable summary of the analysis."""
        m = self.metrics
        if self.start_time is not None and self.end_time is not None:
            period = f"{self.start_time:%Y-%m-%d} to {self.end_time:%Y-%m-%d}"
        else:
            period = "n/a"
        lines = [
            "=" * 50,
            "TRADE HISTORY ANALYSIS",
            "=" * 50,
            f"Period:          {period}",
            f"Net Deposits:    ${m.net_deposits:,.2f}",
            f"Final Equity:    ${m.final_equity:,.2f}",
            f"Total Return:    {m.return_pct:+.2f}%",
            f"Total Trades:    {m.total_trades}",
            f"Win Rate:        {m.win_rate_pct:.2f}%",
            f"Profit Factor:   {m.profit_factor:.2f}",
            f"Max Drawdown:    {m.max_drawdown_pct:.2f}%",
            "=" * 50,
        ]
        return "\n".join(lines)

    def export_equity_curve(self, output_path: str | Path) -> None:
        """Write the equity curve to a CSV file (headers only when empty)."""
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fieldnames = ["timestamp", "label", "equity_usd", "equity_pct", "is_funding"]
        with open(path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for p in self.points:
                writer.writerow({
                    "timestamp": p.timestamp.isoformat(),
                    "label": p.label,
                    "equity_usd": f"{p.equity_usd:.2f}",
                    "equity_pct": f"{p.equity_pct:.4f}",
                    "is_funding": p.is_funding,
                })
        logger.debug("Wrote %d equity points to %s", len(self.points), path)

    def plot_equity_curve(self, output_path: str | Path, percentage_mode: bool = False) -> None:
        from src.analysis.charts import plot_equity_curve

        plot_equity_curve(self.points, output_path, percentage_mode=percentage_mode)

    def plot_monthly_matrix(self, output_path: str | Path, percentage_mode: bool = False) -> None:
        from src.analysis.charts import plot_monthly_matrix

        plot_monthly_matrix(self.months, output_path, percentage_mode=percentage_mode)


# --- Engine ---


class EquityAggregator:
    """Single-pass chronological aggregation of trade-history records.

    Usage:
        result = EquityAggregator().analyze(records)

    Every call to ``analyze`` starts from a fresh tracker and month map, so
    one aggregator can be reused and results never leak between runs.
    """

    def __init__(self, include_fees: bool = False) -> None:
        self.include_fees = include_fees

    def analyze(self, records: Iterable[TradeRecord]) -> AnalysisResult:
        # sorted() is stable: records with the same close time keep file order
        ordered = sorted(records, key=lambda r: r.close_time)
        logger.info("Analyzing %d records", len(ordered))

        tracker = EquityTracker()
        months = MonthlyPnL()
        points: list[ChartPoint] = []
        funding_events = 0
        ignored = 0

        for record in ordered:
            kind = classify_action(record.action)

            if kind == "funding":
                tracker.apply_funding(record.profit)
                funding_events += 1
                points.append(self._point(record, tracker, funding=True))
                logger.debug(
                    "Funding %+.2f on %s (equity: %.2f)",
                    record.profit,
                    record.close_time,
                    tracker.equity,
                )

            elif kind == "trade":
                pnl = record.net_pnl(self.include_fees)
                months.record(record.close_time, pnl, equity_before=tracker.equity)
                tracker.apply_trade(pnl)
                points.append(self._point(record, tracker))

            else:
                ignored += 1

        metrics = tracker.metrics()
        logger.info(
            "Analysis complete: %d trades, %d funding events, %d ignored rows",
            metrics.total_trades,
            funding_events,
            ignored,
        )
        return AnalysisResult(points=points, metrics=metrics, months=months)

    @staticmethod
    def _point(record: TradeRecord, tracker: EquityTracker, funding: bool = False) -> ChartPoint:
        return ChartPoint(
            label=format_label(record.close_time, funding=funding),
            equity_usd=tracker.equity,
            equity_pct=tracker.equity_pct,
            timestamp=record.close_time,
            is_funding=funding,
        )


def analyze(records: Iterable[TradeRecord], include_fees: bool | None = None) -> AnalysisResult:
    """Run a full analysis; ``include_fees`` defaults to ``settings.include_fees``."""
    if include_fees is None:
        from src.config import settings

        include_fees = settings.include_fees
    return EquityAggregator(include_fees=include_fees).analyze(records)
