"""
Shared fixtures: small deals directories written with DuckDB into tmp_path.
"""

from pathlib import Path
from typing import Dict, Iterable, Optional

import pytest

from deal_insights.core import config
from deal_insights.core.duckdb_manager import get_duckdb
from deal_insights.deals.models import DEAL_SCHEMA, Deal
from deal_insights.deals.store import DealStore
from deal_insights.insights import factory
from deal_insights.insights.factory import build_registry


def make_deal(ticket: int, **overrides) -> Deal:
    """Build a Deal with neutral defaults."""
    values = {
        "ticket": ticket,
        "order": ticket,
        "time": 0,
        "time_msc": 0,
        "type": 0,
        "entry": 0,
        "magic": 0,
        "position_id": 0,
        "reason": 0,
        "volume": 0.0,
        "price": 0.0,
        "commission": 0.0,
        "swap": 0.0,
        "profit": 0.0,
        "fee": 0.0,
        "symbol": "",
        "comment": "",
        "external_id": "",
    }
    values.update(overrides)
    if "time" in overrides and "time_msc" not in overrides:
        values["time_msc"] = overrides["time"] * 1000
    return Deal(**values)


def write_select(path: Path, sql: str) -> Path:
    """Write the result of a SELECT to a Parquet file."""
    with get_duckdb().cursor() as cur:
        cur.sql(sql).write_parquet(str(path))
    return path


def deals_select(
    types: Optional[Dict[str, str]] = None,
    drop: Iterable[str] = (),
    extra: Optional[Dict[str, str]] = None,
    null_columns: Iterable[str] = (),
) -> str:
    """One-row SELECT shaped like a deals file, with deliberate defects."""
    types = types or {}
    drop = set(drop)
    null_columns = set(null_columns)

    parts = []
    for name, column_type in DEAL_SCHEMA:
        if name in drop:
            continue
        column_type = types.get(name, column_type)
        if name in null_columns:
            value = "NULL"
        elif column_type == "VARCHAR":
            value = "'x'"
        else:
            value = "1"
        parts.append(f'CAST({value} AS {column_type}) AS "{name}"')
    for name, column_type in (extra or {}).items():
        parts.append(f'CAST(1 AS {column_type}) AS "{name}"')
    return "SELECT " + ", ".join(parts)


# Account 1001: a deposit, an opening buy and two closing deals.
ACCOUNT_1001 = [
    make_deal(1, time=100, type=2, entry=0, profit=1000.0, comment="Deposit"),
    make_deal(2, time=200, type=0, entry=0, symbol="EURUSD", volume=1.0, price=1.10),
    make_deal(3, time=300, type=1, entry=1, symbol="EURUSD", volume=1.0, price=1.12, profit=50.0),
    make_deal(4, time=250, type=0, entry=1, symbol="GBPUSD", volume=0.5, price=1.25, profit=-20.0),
]

# Account 1002: a deposit and one closing deal.
ACCOUNT_1002 = [
    make_deal(5, time=50, type=2, entry=0, profit=500.0, comment="Deposit"),
    make_deal(6, time=400, type=1, entry=1, symbol="EURUSD", volume=2.0, price=1.11, profit=30.0),
]


@pytest.fixture
def deals_dir(tmp_path) -> Path:
    """Deals directory with two accounts."""
    directory = tmp_path / "deals"
    directory.mkdir()
    DealStore.write_deals(directory / "1001.parquet", ACCOUNT_1001)
    DealStore.write_deals(directory / "1002.parquet", ACCOUNT_1002)
    return directory


@pytest.fixture
def empty_deals_dir(tmp_path) -> Path:
    directory = tmp_path / "empty"
    directory.mkdir()
    return directory


@pytest.fixture
def store(deals_dir) -> DealStore:
    return DealStore(deals_dir)


@pytest.fixture
def registry(store):
    return build_registry(store)


@pytest.fixture
def fresh_registry(monkeypatch):
    """Reset the process-wide registry for the duration of a test."""
    monkeypatch.setattr(factory, "_registry", None)
    yield
    monkeypatch.setattr(factory, "_registry", None)


@pytest.fixture
def configured_deals_dir(deals_dir, monkeypatch):
    """Point the application settings at the test deals directory."""
    monkeypatch.setenv("DEAL_INSIGHTS_DEALS_DIR", str(deals_dir))
    config.reload_settings()
    yield deals_dir
    monkeypatch.delenv("DEAL_INSIGHTS_DEALS_DIR", raising=False)
    config.reload_settings()
