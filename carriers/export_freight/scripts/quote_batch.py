"""
Batch Quote Calculation
=======================

Calculates export freight costs for every shipment in a CSV file and writes
the result (input columns plus calculation columns) to CSV or parquet.

Input columns: see carriers.export_freight.calculate_costs.

Usage:
    python -m carriers.export_freight.scripts.quote_batch shipments.csv quotes.csv
    python -m carriers.export_freight.scripts.quote_batch shipments.csv quotes.parquet
    python -m carriers.export_freight.scripts.quote_batch shipments.csv quotes.csv --dry-run
"""

import argparse
import sys
from pathlib import Path

import polars as pl

from carriers.export_freight.calculate_costs import calculate_costs
from carriers.export_freight.version import VERSION


def load_shipments(path: Path) -> pl.DataFrame:
    """Read shipment CSV, keeping destination and vehicle as strings."""
    df = pl.read_csv(path, infer_schema_length=None)
    string_cols = [c for c in ("destination", "delivery_vehicle") if c in df.columns]
    return df.with_columns(pl.col(string_cols).cast(pl.Utf8))


def write_output(df: pl.DataFrame, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix == ".parquet":
        df.write_parquet(path)
    else:
        df.write_csv(path)


def print_summary(df: pl.DataFrame) -> None:
    """Print totals by destination."""
    summary = (
        df.group_by("destination_name", maintain_order=True)
        .agg([
            pl.len().alias("shipments"),
            pl.col("chargeable_weight_kg").sum().alias("chargeable_kg"),
            pl.col("cost_freight").sum().alias("freight"),
            pl.col("cost_total").sum().alias("total"),
        ])
    )
    print("\n" + "=" * 60)
    print("SUMMARY BY DESTINATION")
    print("=" * 60)
    print(summary)


def main():
    parser = argparse.ArgumentParser(description="Calculate export freight costs for a CSV of shipments")
    parser.add_argument("input", type=Path, help="Shipment CSV")
    parser.add_argument("output", type=Path, help="Output file (.csv or .parquet)")
    parser.add_argument("--dry-run", action="store_true", help="Calculate and summarise, but do not write output")
    args = parser.parse_args()

    print(f"Export freight calculator version {VERSION}")
    print(f"Loading shipments from {args.input}...")
    df = load_shipments(args.input)
    print(f"  Loaded {len(df):,} shipments")

    print("Calculating costs...")
    try:
        df = calculate_costs(df)
    except (ValueError, pl.exceptions.PolarsError) as e:
        print(f"\nError: {e}")
        sys.exit(1)

    print_summary(df)

    if args.dry_run:
        print("\nDry run - nothing written.")
        return

    write_output(df, args.output)
    print(f"\nSaved {len(df):,} rows to {args.output}")


if __name__ == "__main__":
    main()
