from __future__ import annotations

from typing import Any, Dict, List, Tuple

import pandas as pd
from loguru import logger

from .fields import normalize_order_status, normalize_product_name, parse_quantity, proper_case
from .helpers import (
    ColumnRule,
    _clean_cols,
    _duplicate_cols,
    _lower_cols,
    _none_if_na,
    _rename_aliases,
    _require_cols,
)
from .rules import ORDER_STATUS_RULES, PRODUCT_NAME_RULES, Rules
from .types import MALFORMED_QUANTITY, MalformedQuantityError, RecordError

# -------------------------------
# Column mapping
# -------------------------------
RAW_COLUMNS = [
    "order_id",
    "customer_name",
    "email",
    "product_name",
    "quantity",
    "price",
    "country",
    "order_status",
]

ORDER_COLUMN_ALIASES = {
    # IDs
    "order id": "order_id",
    "order_no": "order_id",
    "id": "order_id",

    # customer
    "customer name": "customer_name",
    "customer": "customer_name",
    "name": "customer_name",

    "e-mail": "email",
    "email address": "email",

    # product
    "product": "product_name",
    "product name": "product_name",
    "item": "product_name",

    # quantity
    "qty": "quantity",
    "quantity ordered": "quantity",

    # financials
    "unit price": "price",
    "amount": "price",

    # geo
    "country name": "country",

    # status
    "status": "order_status",
    "order status": "order_status",
}

NORMALIZED_COLUMNS = [
    "order_id",
    "customer_name_normalized",
    "email",
    "product_name",
    "product_name_normalized",
    "quantity_normalized",
    "price",
    "country_normalized",
    "order_status_normalized",
]

ON_ERROR_CHOICES = ("skip", "flag", "raise")


# -------------------------------
# Public API
# -------------------------------
def normalize_order_rows(
    raw_orders: pd.DataFrame,
    on_error: str = "skip",
    status_rules: Rules = ORDER_STATUS_RULES,
    product_rules: Rules = PRODUCT_NAME_RULES,
) -> Tuple[pd.DataFrame, Dict[str, Any]]:
    """
    Field-level normalization of raw order rows (no deduplication).

    Output columns:
      order_id, customer_name_normalized, email, product_name,
      product_name_normalized, quantity_normalized, price,
      country_normalized, order_status_normalized
    plus `quality_flag` when on_error="flag".

    Rows without a customer name are filtered out. Rows whose quantity
    cannot be parsed are handled per `on_error`:
      skip  -> excluded and reported in meta['record_errors']
      flag  -> kept with a null quantity and quality_flag set
      raise -> MalformedQuantityError on the first one

    Returns: (df, meta) where meta['validation_errors'] is a list
    """
    if on_error not in ON_ERROR_CHOICES:
        raise ValueError(f"on_error must be one of {ON_ERROR_CHOICES}, got {on_error!r}")

    out_cols = NORMALIZED_COLUMNS + (["quality_flag"] if on_error == "flag" else [])

    if raw_orders is None:
        meta = {
            "validation_errors": ["[orders] Input orders dataframe is missing."],
            "record_errors": [],
            "rows_in": 0,
            "dropped_missing_name": 0,
            "dropped_malformed": 0,
        }
        return pd.DataFrame(columns=out_cols), meta

    df = _lower_cols(_clean_cols(raw_orders))

    # "Email" and "email" collapse to one name; the first column wins
    errors: List[str] = [
        f"[orders] Duplicate column after normalizing headers: {c}" for c in _duplicate_cols(df)
    ]
    df = df.loc[:, ~df.columns.duplicated()].copy()
    df = _rename_aliases(df, ORDER_COLUMN_ALIASES)

    required = [ColumnRule(c, True) for c in RAW_COLUMNS]
    errors += _require_cols(df, required, "orders")
    for col in RAW_COLUMNS:
        if col not in df.columns:
            df[col] = pd.NA

    df = df.reset_index(drop=True)
    df["_row"] = range(len(df))
    rows_in = len(df)

    # Customer name: filter, not default
    names = df["customer_name"].map(proper_case)
    has_name = names.notna()
    dropped_missing_name = int((~has_name).sum())
    if dropped_missing_name:
        logger.debug(f"[orders] Dropped {dropped_missing_name} row(s) without a customer name")
    df = df[has_name].copy()
    df["customer_name_normalized"] = names[has_name]

    # Categories
    df["order_status_normalized"] = df["order_status"].map(lambda v: normalize_order_status(v, status_rules))
    df["product_name_normalized"] = df["product_name"].map(lambda v: normalize_product_name(v, product_rules))
    df["country_normalized"] = df["country"].map(proper_case)

    # Quantity
    parsed = [parse_quantity(v) for v in df["quantity"]]
    ok = pd.Series([p.ok for p in parsed], index=df.index, dtype=bool)

    record_errors: List[Dict[str, Any]] = []
    for idx in df.index[~ok.to_numpy()]:
        raw_qty = _none_if_na(df.at[idx, "quantity"])
        order_id = _none_if_na(df.at[idx, "order_id"])
        if on_error == "raise":
            raise MalformedQuantityError(raw_qty, order_id=order_id)
        err = RecordError(
            row=int(df.at[idx, "_row"]),
            order_id=order_id,
            kind=MALFORMED_QUANTITY,
            column="quantity",
            value=raw_qty,
            message=f"Quantity {raw_qty!r} is not an integer",
        )
        logger.warning(f"[orders] {err.message} (row={err.row}, order_id={order_id})")
        record_errors.append(err.to_dict())

    df["quantity_normalized"] = pd.array([p.value for p in parsed], dtype="Int64")

    dropped_malformed = 0
    if on_error == "flag":
        df["quality_flag"] = pd.Series(
            [pd.NA if p.ok else MALFORMED_QUANTITY for p in parsed], index=df.index, dtype="string"
        )
    else:
        dropped_malformed = int((~ok).sum())
        df = df[ok].copy()

    meta = {
        "validation_errors": errors,
        "record_errors": record_errors,
        "rows_in": rows_in,
        "dropped_missing_name": dropped_missing_name,
        "dropped_malformed": dropped_malformed,
    }
    return df[out_cols].reset_index(drop=True), meta
