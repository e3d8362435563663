"""Equity tracking — running equity, deposits, peak, drawdown and trade tallies."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.analysis.metrics import (
    calculate_drawdown,
    calculate_profit_factor,
    calculate_total_return,
    calculate_win_rate,
    reported_drawdown,
)
from src.core.types import EquityState, PerformanceMetrics


@dataclass
class EquityTracker:
    """Applies funding events and trade results to an EquityState.

    A new tracker starts from zero; one tracker serves exactly one analysis run.
    """

    state: EquityState = field(default_factory=EquityState)
    total_trades: int = 0
    winning_trades: int = 0
    gross_profit: float = 0.0
    gross_loss: float = 0.0

    @property
    def equity(self) -> float:
        return self.state.current_equity

    @property
    def equity_pct(self) -> float:
        return self.state.equity_pct

    def apply_funding(self, amount: float) -> None:
        """Book a deposit or withdrawal.

        Only lifts the peak; a funding event is never measured as drawdown.
        """
        state = self.state
        state.current_equity += amount
        state.net_deposits += amount
        if state.current_equity > state.peak_equity:
            state.peak_equity = state.current_equity

    def apply_trade(self, pnl: float) -> None:
        """Book a closed trade's net result and update the drawdown."""
        self.total_trades += 1
        if pnl > 0:
            self.gross_profit += pnl
            self.winning_trades += 1
        else:
            self.gross_loss += abs(pnl)

        state = self.state
        state.current_equity += pnl

        if state.current_equity > state.peak_equity:
            state.peak_equity = state.current_equity
        else:
            drawdown = calculate_drawdown(state.peak_equity, state.current_equity)
            if drawdown > state.max_drawdown_pct:
                state.max_drawdown_pct = drawdown

    def metrics(self) -> PerformanceMetrics:
        """Finalize the scalar metrics from the current state."""
        state = self.state
        return PerformanceMetrics(
            return_pct=calculate_total_return(state.net_deposits, state.current_equity),
            win_rate_pct=calculate_win_rate(self.winning_trades, self.total_trades),
            profit_factor=calculate_profit_factor(self.gross_profit, self.gross_loss),
            max_drawdown_pct=reported_drawdown(state.max_drawdown_pct),
            total_trades=self.total_trades,
            winning_trades=self.winning_trades,
            gross_profit=self.gross_profit,
            gross_loss=self.gross_loss,
            net_deposits=state.net_deposits,
            final_equity=state.current_equity,
        )
