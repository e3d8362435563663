"""Standalone metric calculation functions for trade-history analysis.

All percentages are returned in percent units (6.0 means 6%).
"""

from __future__ import annotations

from collections.abc import Iterable

# Reported instead of infinity when there are winners but no losers
PROFIT_FACTOR_CAP = 99.99


def calculate_win_rate(winning_trades: int, total_trades: int) -> float:
    """Percentage of winning trades.

    Break-even trades count in the denominator but not as wins.
    Returns 0.0 if there are no trades.
    """
    if total_trades <= 0:
        return 0.0
    return winning_trades / total_trades * 100


def calculate_profit_factor(gross_profit: float, gross_loss: float) -> float:
    """Gross profit divided by gross loss.

    Returns:
        The ratio when there is any loss.
        PROFIT_FACTOR_CAP if there are winners but no losers.
        0.0 if there is neither.
    """
    if gross_loss > 0:
        return gross_profit / gross_loss
    return PROFIT_FACTOR_CAP if gross_profit > 0 else 0.0


def calculate_total_return(net_deposits: float, equity: float) -> float:
    """Return on deposited capital in percent.

    Returns 0.0 when nothing (or a net negative amount) was deposited.
    """
    if net_deposits <= 0:
        return 0.0
    return (equity - net_deposits) / net_deposits * 100


def calculate_drawdown(peak_equity: float, equity: float) -> float:
    """Decline from ``peak_equity`` to ``equity`` in percent, 0.0 without a positive peak."""
    if peak_equity <= 0:
        return 0.0
    return (peak_equity - equity) / peak_equity * 100


def calculate_max_drawdown(equities: Iterable[float]) -> float:
    """Maximum peak-anchored drawdown of an equity sequence, in percent (>= 0).

    The peak starts at zero, so leading non-positive equity never produces
    a drawdown. Returns 0.0 for empty or monotonically increasing sequences.
    """
    peak = 0.0
    max_dd = 0.0
    for equity in equities:
        if equity > peak:
            peak = equity
        else:
            max_dd = max(max_dd, calculate_drawdown(peak, equity))
    return max_dd


def reported_drawdown(max_drawdown_pct: float) -> float:
    """Drawdown as surfaced to callers: a non-positive number."""
    return -abs(max_drawdown_pct) + 0.0  # + 0.0 turns -0.0 into 0.0
