"""tradelens — CLI entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from src.config import settings, setup_logging

if TYPE_CHECKING:
    from src.core.types import TradeRecord

logger = logging.getLogger(__name__)


def _load_records(path: str) -> list[TradeRecord]:
    """Read a trade-history CSV, exiting with an error message on bad input."""
    from src.data.history import TradeHistoryError, read_trade_history

    try:
        return read_trade_history(path)
    except TradeHistoryError as e:
        print(f"Error: {e}")
        sys.exit(1)


def cmd_analyze(args: argparse.Namespace) -> None:
    """Analyze a trade-history export and write chart/CSV artifacts."""
    from src.analysis.matrix import render_matrix_text
    from src.analysis.view import ReportView
    from src.core.engine import analyze

    records = _load_records(args.file)
    include_fees = args.include_fees or settings.include_fees
    percentage_mode = args.percentage or settings.percentage_mode

    logger.info(
        "Starting analysis: file=%s, include_fees=%s, percentage_mode=%s",
        args.file,
        include_fees,
        percentage_mode,
    )
    result = analyze(records, include_fees=include_fees)
    view = ReportView(result, percentage_mode=percentage_mode)

    print(result.summary())
    print()
    print(render_matrix_text(view.matrix_rows()))

    output_dir = Path(args.output_dir or settings.output_path) / Path(args.file).stem
    output_dir.mkdir(parents=True, exist_ok=True)

    curve_path = output_dir / "equity_curve.csv"
    result.export_equity_curve(curve_path)
    print(f"\nEquity curve CSV:   {curve_path}")

    if not args.no_charts:
        equity_path = output_dir / "equity_curve.html"
        result.plot_equity_curve(equity_path, percentage_mode=percentage_mode)
        print(f"Equity curve chart: {equity_path}")

        matrix_path = output_dir / "monthly_matrix.html"
        result.plot_monthly_matrix(matrix_path, percentage_mode=percentage_mode)
        print(f"Monthly matrix:     {matrix_path}")

    logger.info("Analysis complete. Output saved to %s", output_dir)


def cmd_matrix(args: argparse.Namespace) -> None:
    """Print the year/month P&L matrix."""
    from src.analysis.matrix import render_matrix_text
    from src.analysis.view import ReportView
    from src.core.engine import analyze

    records = _load_records(args.file)
    result = analyze(records, include_fees=args.include_fees or settings.include_fees)
    view = ReportView(result, percentage_mode=args.percentage or settings.percentage_mode)
    print(render_matrix_text(view.matrix_rows()))


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="tradelens",
        description="tradelens — equity curve and performance analytics for broker trade histories",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # analyze
    an = subparsers.add_parser(
        "analyze",
        help="Analyze a trade-history CSV",
        description="Build the equity curve, metrics and monthly P&L matrix for an export.",
    )
    an.add_argument("file", help="Trade-history CSV (MT5 export)")
    an.add_argument(
        "--percentage",
        action="store_true",
        help="Display returns in percent instead of USD",
    )
    an.add_argument(
        "--include-fees",
        action="store_true",
        help="Add Commission and Swap to each trade's net P&L",
    )
    an.add_argument(
        "--output-dir",
        default=None,
        help=f"Directory for charts and CSV (default: {settings.output_path})",
    )
    an.add_argument(
        "--no-charts",
        action="store_true",
        help="Skip writing the HTML charts",
    )

    # matrix
    mx = subparsers.add_parser(
        "matrix",
        help="Print the monthly P&L matrix",
        description="Print the year/month P&L matrix for an export.",
    )
    mx.add_argument("file", help="Trade-history CSV (MT5 export)")
    mx.add_argument(
        "--percentage",
        action="store_true",
        help="Show each month's return on its starting equity",
    )
    mx.add_argument(
        "--include-fees",
        action="store_true",
        help="Add Commission and Swap to each trade's net P&L",
    )

    return parser


def main() -> None:
    """Main entry point."""
    setup_logging(settings.log_level)

    parser = build_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    command_map = {
        "analyze": cmd_analyze,
        "matrix": cmd_matrix,
    }

    handler = command_map[args.command]
    handler(args)


if __name__ == "__main__":
    main()
