#!/usr/bin/env python3
"""
Order cleaner command line.

Reads one tabular file of raw orders, writes the cleaned and deduplicated
table to another.

Usage:
    clean-orders data/orders_raw.csv out/orders_clean.csv
    clean-orders orders.parquet clean.parquet --on-error flag --errors-out errors.csv
"""

from pathlib import Path

import click
from loguru import logger

from core.logging_setup import setup_logging
from core.normalize import (
    DEDUP_KEY_CHOICES,
    ORDER_STATUS_RULES,
    PRODUCT_NAME_RULES,
    MalformedQuantityError,
    clean_orders_frame,
    load_rules,
)
from core.tables import read_orders_table, record_errors_frame, write_table


@click.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output_path", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--on-error",
    type=click.Choice(["skip", "flag", "raise"]),
    default="skip",
    show_default=True,
    help="What to do with rows whose quantity is not an integer",
)
@click.option(
    "--dedup-key",
    type=click.Choice(list(DEDUP_KEY_CHOICES)),
    default="normalized",
    show_default=True,
    help="Group duplicates by normalized or raw product name",
)
@click.option("--status-rules", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="CSV (pattern,category) replacing the order status rules")
@click.option("--product-rules", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="CSV (pattern,category) replacing the product name rules")
@click.option("--errors-out", type=click.Path(dir_okay=False, path_type=Path),
              help="Write per-row errors to this CSV")
@click.option("--log-level", default="INFO", show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), help="Also log to this file")
def main(
    input_path: Path,
    output_path: Path,
    on_error: str,
    dedup_key: str,
    status_rules: Path | None,
    product_rules: Path | None,
    errors_out: Path | None,
    log_level: str,
    log_file: Path | None,
):
    """Clean and deduplicate the orders in INPUT_PATH, writing OUTPUT_PATH."""
    setup_logging(level=log_level, log_file=log_file)

    try:
        status_table = load_rules(status_rules) if status_rules else ORDER_STATUS_RULES
        product_table = load_rules(product_rules) if product_rules else PRODUCT_NAME_RULES
    except ValueError as e:
        raise click.ClickException(str(e))

    raw = read_orders_table(input_path)

    try:
        cleaned, meta = clean_orders_frame(
            raw,
            on_error=on_error,
            dedup_key=dedup_key,
            status_rules=status_table,
            product_rules=product_table,
        )
    except MalformedQuantityError as e:
        logger.error(str(e))
        raise click.ClickException(f"{e}; rerun with --on-error skip or flag to continue past bad rows")

    if meta["validation_errors"]:
        for msg in meta["validation_errors"]:
            logger.error(msg)
        raise click.ClickException(f"{input_path} is not a valid orders table")

    write_table(cleaned, output_path)

    if errors_out:
        write_table(record_errors_frame(meta["record_errors"]), errors_out)

    click.echo(
        f"rows_in={meta['rows_in']} "
        f"missing_name={meta['dropped_missing_name']} "
        f"malformed_quantity={len(meta['record_errors'])} "
        f"duplicates={meta['duplicates_removed']} "
        f"rows_out={meta['rows_out']}"
    )


if __name__ == "__main__":
    main()
