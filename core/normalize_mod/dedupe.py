from __future__ import annotations

from typing import Tuple

import pandas as pd
from loguru import logger

# normalized: email + normalized product name (end-to-end query)
# raw:        email + raw product name (step-by-step query)
DEDUP_KEY_CHOICES = ("normalized", "raw")


def _order_id_sort_key(order_ids: pd.Series) -> pd.Series:
    """Numeric ordering when every id is a number, string ordering otherwise."""
    numeric = pd.to_numeric(order_ids, errors="coerce")
    if len(order_ids) and numeric.notna().all():
        return numeric
    return order_ids.astype("string")


def deduplicate_orders(df: pd.DataFrame, key: str = "normalized") -> Tuple[pd.DataFrame, int]:
    """
    Keep one row per (email, product) group: the one with the smallest order_id.

    Equivalent to ROW_NUMBER() OVER (PARTITION BY lower(email), lower(product)
    ORDER BY order_id) = 1. Ties on order_id keep the earlier row. Survivors
    keep their input order.

    Returns: (deduplicated df, number of rows removed)
    """
    if key not in DEDUP_KEY_CHOICES:
        raise ValueError(f"dedup key must be one of {DEDUP_KEY_CHOICES}, got {key!r}")

    if df.empty:
        return df.copy(), 0

    product_col = "product_name_normalized" if key == "normalized" else "product_name"

    work = df.reset_index(drop=True).copy()
    # NA stays NA: a missing email is not the same value as ""
    work["_email_key"] = work["email"].astype("string").str.lower()
    work["_product_key"] = work[product_col].astype("string").str.lower()
    work["_order_key"] = _order_id_sort_key(work["order_id"])
    work["_pos"] = range(len(work))

    ranked = work.sort_values(["_order_key", "_pos"], kind="mergesort", na_position="last")
    ranked["_rank"] = ranked.groupby(["_email_key", "_product_key"], sort=False, dropna=False).cumcount() + 1

    keep = ranked[ranked["_rank"] == 1].sort_values("_pos")
    removed = len(work) - len(keep)
    if removed:
        logger.debug(f"[dedupe] Removed {removed} duplicate row(s) using the {key} key")

    helper_cols = ["_email_key", "_product_key", "_order_key", "_pos", "_rank"]
    return keep.drop(columns=helper_cols).reset_index(drop=True), removed
