"""
Tests for the run_insight command line script.
"""

import json
import sys

import pandas as pd
import pytest

from deal_insights.scripts import run_insight


def run_cli(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["run_insight", *args])
    run_insight.main()


class TestRunInsight:
    def test_list(self, monkeypatch, capsys, deals_dir):
        run_cli(monkeypatch, "--list", "--deals-dir", str(deals_dir))
        out = capsys.readouterr().out
        assert "deals.total_balance" in out
        assert "Profit by Symbol" in out

    def test_run_to_csv(self, monkeypatch, capsys, deals_dir, tmp_path):
        output = tmp_path / "out.csv"
        run_cli(
            monkeypatch,
            "--insight", "deals.profit_by_symbol",
            "--params", json.dumps({"account_number": "1001"}),
            "--deals-dir", str(deals_dir),
            "--output", str(output),
        )

        df = pd.read_csv(output, keep_default_na=False)
        assert list(df["symbol"]) == ["", "EURUSD", "GBPUSD"]
        assert "Results: 3 rows" in capsys.readouterr().out

    def test_failure_exit_code(self, monkeypatch, deals_dir):
        with pytest.raises(SystemExit) as exc_info:
            run_cli(
                monkeypatch,
                "--insight", "deals.all_entries",
                "--params", '{"account_number": "9999"}',
                "--deals-dir", str(deals_dir),
            )
        assert exc_info.value.code == 1

    def test_unknown_insight_exit_code(self, monkeypatch, deals_dir):
        with pytest.raises(SystemExit) as exc_info:
            run_cli(monkeypatch, "--insight", "deals.nope", "--deals-dir", str(deals_dir))
        assert exc_info.value.code == 2
