"""Analysis module — metrics, matrix rendering and visualization for trade histories."""

from src.analysis.charts import plot_equity_curve, plot_monthly_matrix
from src.analysis.matrix import build_matrix_rows, render_matrix_text
from src.analysis.metrics import (
    calculate_max_drawdown,
    calculate_profit_factor,
    calculate_total_return,
    calculate_win_rate,
)
from src.analysis.view import ReportView

__all__ = [
    "ReportView",
    "build_matrix_rows",
    "calculate_max_drawdown",
    "calculate_profit_factor",
    "calculate_total_return",
    "calculate_win_rate",
    "plot_equity_curve",
    "plot_monthly_matrix",
    "render_matrix_text",
]
