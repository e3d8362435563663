"""Interactive Plotly charts for trade-history analysis."""

from __future__ import annotations

from pathlib import Path

import plotly.graph_objects as go

from src.analysis.matrix import EMPTY_MATRIX_TEXT, build_matrix_rows, matrix_header
from src.analysis.view import PCT_SERIES_LABEL, USD_SERIES_LABEL
from src.core.types import ChartPoint, MonthlyPnL

TONE_COLORS = {
    "pos": "rgb(22, 163, 74)",
    "neg": "rgb(220, 38, 38)",
    "zero": "rgb(100, 116, 139)",
    None: "rgb(148, 163, 184)",
}


def _write_empty(fig: go.Figure, output_path: str | Path, title: str, text: str) -> None:
    fig.add_annotation(
        text=text,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
        showarrow=False,
        font=dict(size=20),
    )
    fig.update_layout(title=title)
    fig.write_html(str(output_path))


def plot_equity_curve(
    points: list[ChartPoint],
    output_path: str | Path,
    percentage_mode: bool = False,
    title: str = "Equity Curve",
) -> None:
    """Plot the equity curve and save as HTML.

    USD mode shades the gap between the running peak and equity to show
    drawdowns; percentage mode plots cumulative return on deposits.

    Args:
        points: Chart points in chronological order.
        output_path: File path for the HTML output.
        percentage_mode: Plot ``equity_pct`` instead of ``equity_usd``.
        title: Chart title.
    """
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)

    fig = go.Figure()

    if not points:
        _write_empty(fig, output_path, title, "No data")
        return

    timestamps = [pt.timestamp for pt in points]
    labels = [pt.label for pt in points]

    if percentage_mode:
        values = [pt.equity_pct for pt in points]
        fig.add_trace(
            go.Scatter(
                x=timestamps,
                y=values,
                mode="lines",
                name=PCT_SERIES_LABEL,
                line=dict(color="rgb(59, 130, 246)", width=2),
                fill="tozeroy",
                fillcolor="rgba(59, 130, 246, 0.1)",
                customdata=labels,
                hovertemplate="%{customdata}<br>Return: %{y:.2f}%<extra></extra>",
            )
        )
        yaxis_title = "Return (%)"
    else:
        values = [pt.equity_usd for pt in points]

        # Running peak, upper bound for the drawdown fill
        peaks: list[float] = []
        peak = values[0]
        for eq in values:
            if eq > peak:
                peak = eq
            peaks.append(peak)

        fig.add_trace(
            go.Scatter(
                x=timestamps,
                y=peaks,
                mode="lines",
                line=dict(width=0),
                showlegend=False,
                hoverinfo="skip",
            )
        )
        fig.add_trace(
            go.Scatter(
                x=timestamps,
                y=values,
                mode="lines",
                name=USD_SERIES_LABEL,
                line=dict(color="rgb(59, 130, 246)", width=2),
                fill="tonexty",
                fillcolor="rgba(255, 0, 0, 0.15)",
                customdata=labels,
                hovertemplate="%{customdata}<br>Equity: $%{y:,.2f}<extra></extra>",
            )
        )
        yaxis_title = "Equity (USD)"

    # Deposits and withdrawals as markers so they are not mistaken for trades
    funding = [pt for pt in points if pt.is_funding]
    if funding:
        fig.add_trace(
            go.Scatter(
                x=[pt.timestamp for pt in funding],
                y=[pt.equity_pct if percentage_mode else pt.equity_usd for pt in funding],
                mode="markers",
                name="Funding",
                marker=dict(symbol="diamond", size=9, color="rgb(245, 158, 11)"),
                text=[pt.label for pt in funding],
                hoverinfo="text",
            )
        )

    fig.update_layout(
        title=title,
        xaxis_title="Close Date",
        yaxis_title=yaxis_title,
        template="plotly_white",
        hovermode="x unified",
    )

    fig.write_html(str(output_path))


def plot_monthly_matrix(
    months: MonthlyPnL,
    output_path: str | Path,
    percentage_mode: bool = False,
    title: str = "Monthly P&L",
) -> None:
    """Render the year/month P&L matrix as an HTML table.

    Args:
        months: Month buckets from an analysis.
        output_path: File path for the HTML output.
        percentage_mode: Show returns on each month's starting equity instead of USD.
        title: Chart title.
    """
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)

    fig = go.Figure()
    rows = build_matrix_rows(months, percentage_mode)

    if not rows:
        _write_empty(fig, output_path, title, EMPTY_MATRIX_TEXT)
        return

    # go.Table takes values and colors column by column
    columns: list[list[str]] = [[str(row.year) for row in rows]]
    colors: list[list[str]] = [[TONE_COLORS[None] for _ in rows]]
    for month_index in range(12):
        cells = [row.cells[month_index] for row in rows]
        columns.append([c.text for c in cells])
        colors.append([TONE_COLORS[c.tone] for c in cells])
    columns.append([f"<b>{row.total.text}</b>" for row in rows])
    colors.append([TONE_COLORS[row.total.tone] for row in rows])

    fig.add_trace(
        go.Table(
            header=dict(
                values=[f"<b>{h}</b>" for h in matrix_header()],
                fill_color="rgb(30, 41, 59)",
                font=dict(color="white"),
                align="center",
            ),
            cells=dict(
                values=columns,
                font=dict(color=colors),
                align="center",
            ),
        )
    )
    fig.update_layout(title=title, template="plotly_white")
    fig.write_html(str(output_path))
