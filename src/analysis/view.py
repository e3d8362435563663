"""Display state for an analysis: USD/percentage mode and formatted metrics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.analysis.matrix import MatrixRow, Tone, build_matrix_rows

if TYPE_CHECKING:
    from src.core.engine import AnalysisResult

USD_SERIES_LABEL = "Account Equity (USD)"
PCT_SERIES_LABEL = "Cumulative Return (%)"


@dataclass(frozen=True, slots=True)
class MetricText:
    text: str
    tone: Tone | None = None


def format_metric(value: float, suffix: str = "%", signed: bool = True) -> str:
    """Two decimals with a suffix, "+"-prefixed when positive and ``signed``."""
    prefix = "+" if signed and value > 0 else ""
    return f"{prefix}{value:.2f}{suffix}"


class ReportView:
    """Renders an AnalysisResult in USD or percentage mode.

    Switching modes only changes which precomputed series is read; the
    analysis itself is never re-run.
    """

    def __init__(self, result: AnalysisResult, percentage_mode: bool = False) -> None:
        self.result = result
        self.percentage_mode = percentage_mode

    def toggle(self) -> bool:
        """Flip the display mode and return the new value."""
        self.percentage_mode = not self.percentage_mode
        return self.percentage_mode

    def set_percentage_mode(self, enabled: bool) -> None:
        self.percentage_mode = enabled

    @property
    def series(self) -> tuple[list[str], list[float]]:
        """Chart labels and the values for the current mode."""
        return self.result.labels, self.result.series(self.percentage_mode)

    @property
    def series_label(self) -> str:
        return PCT_SERIES_LABEL if self.percentage_mode else USD_SERIES_LABEL

    def metric_texts(self) -> dict[str, MetricText]:
        m = self.result.metrics
        return {
            "return": MetricText(
                format_metric(m.return_pct), "pos" if m.return_pct >= 0 else "neg"
            ),
            "win_rate": MetricText(format_metric(m.win_rate_pct)),
            "profit_factor": MetricText(format_metric(m.profit_factor, suffix="", signed=False)),
            "max_drawdown": MetricText(format_metric(m.max_drawdown_pct, signed=False), "neg"),
        }

    def matrix_rows(self) -> list[MatrixRow]:
        return build_matrix_rows(self.result.months, self.percentage_mode)
