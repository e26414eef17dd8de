#!/usr/bin/env python3
"""
Insight Runner Script

Runs one registered insight against a deals directory and prints the result.

Usage:
    python -m deal_insights.scripts.run_insight --insight deals.profit_by_symbol

Examples:
    # Profit per symbol for one account, only symbols that made at least 100
    python -m deal_insights.scripts.run_insight \\
        --insight deals.profit_by_symbol \\
        --params '{"account_number": "12345", "min_profit": 100}' \\
        --deals-dir ./data/deals \\
        --output ./profit_by_symbol.csv

    # List available insights
    python -m deal_insights.scripts.run_insight --list
"""

import argparse
import json
import logging
import sys

import pandas as pd

from deal_insights.core.config import get_settings
from deal_insights.core.exceptions import NotFoundError
from deal_insights.deals.store import DealStore
from deal_insights.insights.executor import execute_insight
from deal_insights.insights.factory import build_registry
from deal_insights.insights.models import InsightRequest

logger = logging.getLogger(__name__)


def print_insights(registry) -> None:
    print("\nAvailable Insights:")
    print("=" * 50)

    for descriptor in registry.describe():
        params = ", ".join(descriptor.parameter_schema.get("properties", {})) or "-"
        print(f"\n{descriptor.insight_id}")
        print(f"  Name: {descriptor.name}")
        print(f"  Description: {descriptor.description}")
        print(f"  Parameters: {params}")

    print()


def main():
    parser = argparse.ArgumentParser(
        description="Run a deal insight against a directory of deals Parquet files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m deal_insights.scripts.run_insight --insight deals.total_balance
    python -m deal_insights.scripts.run_insight --list
        """
    )

    parser.add_argument(
        "--insight", "-i",
        help="Identifier of the insight to run, e.g. deals.total_balance"
    )
    parser.add_argument(
        "--params", "-p",
        default="{}",
        help="Insight parameters as a JSON object (default: {})"
    )
    parser.add_argument(
        "--deals-dir", "-d",
        help="Deals directory (default: DEAL_INSIGHTS_DEALS_DIR or data/deals)"
    )
    parser.add_argument(
        "--output", "-o",
        help="Write the result rows to this CSV file"
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available insights and exit"
    )

    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    store = DealStore(args.deals_dir or settings.deals_dir)
    registry = build_registry(store)

    if args.list:
        print_insights(registry)
        return

    if not args.insight:
        parser.error("--insight is required")

    try:
        parameters = json.loads(args.params)
    except json.JSONDecodeError as e:
        parser.error(f"--params is not valid JSON: {e}")

    print()
    print("=" * 60)
    print(f"Running Insight: {args.insight}")
    print("=" * 60)
    print(f"Deals directory: {store.deals_dir}")
    print()

    try:
        response = execute_insight(
            InsightRequest(insight_id=args.insight, parameters=parameters),
            registry,
        )
    except NotFoundError as e:
        print(f"ERROR: {e.message}")
        sys.exit(2)

    if not response.success:
        print(f"ERROR: {response.error}")
        sys.exit(1)

    df = pd.DataFrame(response.data, columns=response.columns)

    print(f"Results: {len(df)} rows")
    print()
    if df.empty:
        print("No results found.")
    else:
        with pd.option_context("display.max_rows", 50, "display.width", 200):
            print(df.to_string(index=False))

    if args.output:
        df.to_csv(args.output, index=False)
        print()
        print(f"Results saved to: {args.output}")


if __name__ == "__main__":
    main()
