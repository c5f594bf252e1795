"""Command-line interface for nf_builder using Click.

Commands:
  expand     -> Split a delimited Products column into one row per product (1NF)
  decompose  -> Split order details into orders and order items (2NF)
  validate   -> Check a decomposition against its flat source

Usage examples:
  python -m nf_builder.cli expand --input files/ProductDetail.csv --out-dir normalized
  python -m nf_builder.cli decompose --input files/OrderDetails.csv --out-dir normalized --sqlite orders.db
  python -m nf_builder.cli validate --input files/OrderDetails.csv --out-dir normalized
"""

from __future__ import annotations
import os, sys, logging
from typing import List, Optional
import click
import pandas as pd

from .config import get_delimiter
from .normalization import (
    load_order_details,
    normalize_order_details,
    normalize_product_details,
    read_table,
)
from .validation import (
    FLAT_COLUMNS,
    check_first_normal_form,
    check_lossless_join,
    check_partial_dependency,
    to_frame,
)

# --------------------- helpers ---------------------


def _read_frame(path: str, columns: List[str]) -> pd.DataFrame:
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    # an empty table is written as an empty file
    if os.path.getsize(path) == 0:
        return pd.DataFrame(columns=columns)
    return pd.read_csv(path, dtype=str, keep_default_na=False)


# --------------------- CLI group ---------------------


@click.group()
@click.option("--verbose", is_flag=True, help="Enable verbose logging (DEBUG).")
@click.version_option("0.1.0")
def cli(verbose: bool):
    """nf_builder CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")
    logging.debug("Verbose logging enabled." if verbose else "Logging level INFO.")


# --------------------- expand ---------------------


@cli.command("expand")
@click.option(
    "--input",
    "input_csv",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="ProductDetail CSV path (OrderID, CustomerName, Products).",
)
@click.option(
    "--out-dir",
    required=True,
    type=click.Path(file_okay=False),
    help="Output directory for product_items.csv.",
)
@click.option(
    "--sqlite",
    "sqlite_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Optional SQLite database path.",
)
@click.option(
    "--delimiter",
    default=get_delimiter,
    help="Single-character item delimiter (env NF_BUILDER_DELIMITER, default ',').",
)
@click.option("--strip", is_flag=True, help="Strip whitespace around each item.")
def cmd_expand(
    input_csv: str,
    out_dir: str,
    sqlite_path: Optional[str],
    delimiter: str,
    strip: bool,
):
    """Split delimited products into one row per product."""
    try:
        summary = normalize_product_details(
            input_csv, out_dir, sqlite_path, delimiter=delimiter, strip=strip
        )
        click.echo(f"Expansion complete: {summary}")
    except Exception as e:
        logging.exception("Expansion failed")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    if not summary["items"]:
        logging.info("No items produced; skipping first normal form check.")
        return
    try:
        rows = read_table(os.path.join(out_dir, "product_items.csv"), ["product"])
        issues = check_first_normal_form(rows, "product", delimiter)
    except Exception as e:
        logging.exception("First normal form check failed")
        click.echo(f"Validation error: {e}", err=True)
        sys.exit(1)
    if issues:
        click.echo("First normal form issues detected:")
        for i in issues:
            click.echo(f" - {i}")
        sys.exit(1)
    logging.debug("Checked %d product rows for multi-valued items.", len(rows))
    click.echo(f"First normal form check passed for {len(rows)} items.")


# --------------------- decompose ---------------------


@cli.command("decompose")
@click.option(
    "--input",
    "input_csv",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="OrderDetails CSV path (OrderID, CustomerName, Product, Quantity).",
)
@click.option(
    "--out-dir",
    required=True,
    type=click.Path(file_okay=False),
    help="Output directory for orders.csv and order_items.csv.",
)
@click.option(
    "--sqlite",
    "sqlite_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Optional SQLite database path.",
)
def cmd_decompose(input_csv: str, out_dir: str, sqlite_path: Optional[str]):
    """Decompose order details into Orders and OrderItems."""
    try:
        summary = normalize_order_details(input_csv, out_dir, sqlite_path)
        click.echo(f"Decomposition complete: {summary}")
    except Exception as e:
        logging.exception("Decomposition failed")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


# --------------------- validate ---------------------


@cli.command("validate")
@click.option(
    "--input",
    "input_csv",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Flat OrderDetails CSV the decomposition was built from.",
)
@click.option(
    "--out-dir",
    required=True,
    type=click.Path(file_okay=False),
    help="Directory with orders.csv and order_items.csv.",
)
def cmd_validate(input_csv: str, out_dir: str):
    """Check the functional dependency and the lossless join."""
    try:
        details = load_order_details(input_csv)
        orders = _read_frame(
            os.path.join(out_dir, "orders.csv"), ["order_id", "customer_name"]
        )
        order_items = _read_frame(
            os.path.join(out_dir, "order_items.csv"), ["order_id", "item", "quantity"]
        )
    except FileNotFoundError as e:
        click.echo(f"Missing file: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        logging.exception("Failed to load tables")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    try:
        flat = to_frame(details, FLAT_COLUMNS)
        issues = check_partial_dependency(details)
        issues += check_lossless_join(flat, orders, order_items)
    except Exception as e:
        logging.exception("Validation processing failed")
        click.echo(f"Validation error: {e}", err=True)
        sys.exit(1)
    if issues:
        click.echo("Validation issues detected:")
        for i in issues:
            click.echo(f" - {i}")
        sys.exit(1)
    click.echo("Decomposition is lossless.")


# --------------------- entry ---------------------


def main():  # pragma: no cover
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
