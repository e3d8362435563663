"""Tests for the CLI entry point."""

from __future__ import annotations

import argparse
import csv
import sys

import pytest

import main as cli
from main import build_parser, cmd_analyze, cmd_matrix

MT5_ROWS = [
    "Balance,2024.01.01 00:00:00,10000,,",
    "Buy,2024.01.05 10:15:00,500,-2.5,0",
    "Sell,2024.01.10 16:40:00,-200,-2.5,-1.2",
    "Buy,2024.02.01 09:00:00,300,-2.5,0",
]


# ---------------------------------------------------------------------------
# Parser tests
# ---------------------------------------------------------------------------


class TestBuildParser:
    """Test CLI argument parsing for all commands."""

    def test_no_command_returns_none(self) -> None:
        args = build_parser().parse_args([])
        assert args.command is None

    def test_analyze_defaults(self) -> None:
        args = build_parser().parse_args(["analyze", "history.csv"])
        assert args.command == "analyze"
        assert args.file == "history.csv"
        assert args.percentage is False
        assert args.include_fees is False
        assert args.output_dir is None
        assert args.no_charts is False

    def test_analyze_flags(self) -> None:
        args = build_parser().parse_args([
            "analyze", "history.csv",
            "--percentage",
            "--include-fees",
            "--output-dir", "reports",
            "--no-charts",
        ])
        assert args.percentage is True
        assert args.include_fees is True
        assert args.output_dir == "reports"
        assert args.no_charts is True

    def test_analyze_requires_file(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["analyze"])

    def test_matrix_args(self) -> None:
        args = build_parser().parse_args(["matrix", "h.csv", "--percentage"])
        assert args.command == "matrix"
        assert args.file == "h.csv"
        assert args.percentage is True

    def test_unknown_command_exits(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["backtest"])


# ---------------------------------------------------------------------------
# Command tests
# ---------------------------------------------------------------------------


def _analyze_args(file: str, output_dir: str, **overrides) -> argparse.Namespace:
    defaults = dict(
        command="analyze",
        file=file,
        percentage=False,
        include_fees=False,
        output_dir=output_dir,
        no_charts=False,
    )
    defaults.update(overrides)
    return argparse.Namespace(**defaults)


class TestCmdAnalyze:
    def test_writes_artifacts(self, write_csv, tmp_path, capsys) -> None:
        path = write_csv(MT5_ROWS)
        out_dir = tmp_path / "out"

        cmd_analyze(_analyze_args(str(path), str(out_dir)))

        output = capsys.readouterr().out
        assert "TRADE HISTORY ANALYSIS" in output
        assert "+6.00%" in output
        assert "+$300.00" in output

        run_dir = out_dir / "history"
        assert (run_dir / "equity_curve.html").exists()
        assert (run_dir / "monthly_matrix.html").exists()
        with open(run_dir / "equity_curve.csv") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 4
        assert float(rows[-1]["equity_usd"]) == pytest.approx(10600.0)

    def test_no_charts(self, write_csv, tmp_path) -> None:
        path = write_csv(MT5_ROWS)
        out_dir = tmp_path / "out"
        cmd_analyze(_analyze_args(str(path), str(out_dir), no_charts=True))
        run_dir = out_dir / "history"
        assert (run_dir / "equity_curve.csv").exists()
        assert not (run_dir / "equity_curve.html").exists()

    def test_include_fees(self, write_csv, tmp_path) -> None:
        path = write_csv(MT5_ROWS)
        out_dir = tmp_path / "out"
        cmd_analyze(_analyze_args(str(path), str(out_dir), include_fees=True, no_charts=True))
        with open(out_dir / "history" / "equity_curve.csv") as f:
            rows = list(csv.DictReader(f))
        # 600 profit - 7.5 commission - 1.2 swap
        assert float(rows[-1]["equity_usd"]) == pytest.approx(10591.3)

    def test_percentage_matrix(self, write_csv, tmp_path, capsys) -> None:
        path = write_csv(MT5_ROWS)
        cmd_analyze(_analyze_args(str(path), str(tmp_path / "out"), percentage=True, no_charts=True))
        assert "+3.00%" in capsys.readouterr().out

    def test_invalid_file_exits(self, write_csv, tmp_path, capsys) -> None:
        path = write_csv(["Buy,2024-01-01"], header="Action,Close Date")
        with pytest.raises(SystemExit) as exc_info:
            cmd_analyze(_analyze_args(str(path), str(tmp_path / "out")))
        assert exc_info.value.code == 1
        assert "Error: Invalid CSV format" in capsys.readouterr().out


class TestCmdMatrix:
    def test_prints_matrix(self, write_csv, capsys) -> None:
        path = write_csv(MT5_ROWS)
        cmd_matrix(argparse.Namespace(file=str(path), percentage=False, include_fees=False))
        lines = capsys.readouterr().out.strip().splitlines()
        assert lines[0].split()[0] == "Year"
        assert lines[1].startswith("2024")
        assert "+$300.00" in lines[1]

    def test_no_trades(self, write_csv, capsys) -> None:
        path = write_csv(["Deposit,2024.01.01 00:00:00,1000,,"])
        cmd_matrix(argparse.Namespace(file=str(path), percentage=False, include_fees=False))
        assert "No data available for matrix" in capsys.readouterr().out

    def test_missing_file_exits(self, tmp_path, capsys) -> None:
        with pytest.raises(SystemExit):
            cmd_matrix(
                argparse.Namespace(file=str(tmp_path / "nope.csv"), percentage=False, include_fees=False)
            )
        assert "Error:" in capsys.readouterr().out


class TestMain:
    def test_no_command_exits_with_error(self, monkeypatch) -> None:
        monkeypatch.setattr(sys, "argv", ["main.py"])
        monkeypatch.setattr(cli, "setup_logging", lambda *a, **kw: None)
        with pytest.raises(SystemExit) as exc_info:
            cli.main()
        assert exc_info.value.code == 1

    def test_dispatches_matrix(self, write_csv, monkeypatch, capsys) -> None:
        path = write_csv(MT5_ROWS)
        monkeypatch.setattr(sys, "argv", ["main.py", "matrix", str(path)])
        monkeypatch.setattr(cli, "setup_logging", lambda *a, **kw: None)
        cli.main()
        assert "+$300.00" in capsys.readouterr().out
