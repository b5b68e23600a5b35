from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd
from loguru import logger

from .dedupe import DEDUP_KEY_CHOICES, deduplicate_orders
from .helpers import _none_if_na
from .orders import RAW_COLUMNS, normalize_order_rows
from .rules import ORDER_STATUS_RULES, PRODUCT_NAME_RULES, Rules
from .types import CleanRecord, RawRecord, RecordError

# normalized column -> published column
OUTPUT_COLUMN_MAP = {
    "order_id": "order_id",
    "customer_name_normalized": "new_customer_name",
    "email": "email",
    "product_name_normalized": "cleaned_product_name",
    "quantity_normalized": "cleaned_quantity",
    "price": "price",
    "country_normalized": "country",
    "order_status_normalized": "order_status",
}

OUTPUT_COLUMNS = list(OUTPUT_COLUMN_MAP.values())


def _clean(
    raw_orders: pd.DataFrame,
    on_error: str,
    dedup_key: str,
    status_rules: Rules,
    product_rules: Rules,
) -> Tuple[pd.DataFrame, Dict[str, Any]]:
    if dedup_key not in DEDUP_KEY_CHOICES:
        raise ValueError(f"dedup_key must be one of {DEDUP_KEY_CHOICES}, got {dedup_key!r}")

    normalized, meta = normalize_order_rows(
        raw_orders,
        on_error=on_error,
        status_rules=status_rules,
        product_rules=product_rules,
    )
    deduped, removed = deduplicate_orders(normalized, key=dedup_key)

    meta["duplicates_removed"] = removed
    meta["rows_out"] = len(deduped)
    logger.info(
        "Cleaned orders: rows_in={} missing_name={} malformed={} duplicates={} rows_out={}",
        meta["rows_in"],
        meta["dropped_missing_name"],
        meta["dropped_malformed"],
        removed,
        meta["rows_out"],
    )
    return deduped, meta


def clean_orders_frame(
    raw_orders: pd.DataFrame,
    on_error: str = "skip",
    dedup_key: str = "normalized",
    status_rules: Rules = ORDER_STATUS_RULES,
    product_rules: Rules = PRODUCT_NAME_RULES,
) -> Tuple[pd.DataFrame, Dict[str, Any]]:
    """
    Normalize and deduplicate a raw orders table.

    Output columns:
      order_id, new_customer_name, email, cleaned_product_name,
      cleaned_quantity, price, country, order_status
    plus `quality_flag` when on_error="flag".

    Returns: (df, meta). meta carries validation_errors, record_errors and
    the row counts of each filtering step.
    """
    deduped, meta = _clean(raw_orders, on_error, dedup_key, status_rules, product_rules)
    out_cols = OUTPUT_COLUMNS + (["quality_flag"] if "quality_flag" in deduped.columns else [])
    return deduped.rename(columns=OUTPUT_COLUMN_MAP)[out_cols], meta


def clean_and_deduplicate(
    records: Sequence[Union[RawRecord, Mapping[str, Any]]],
    dedup_key: str = "normalized",
    errors: Optional[List[RecordError]] = None,
    strict: bool = False,
    status_rules: Rules = ORDER_STATUS_RULES,
    product_rules: Rules = PRODUCT_NAME_RULES,
) -> List[CleanRecord]:
    """
    Record-level entry point.

    Malformed quantities exclude their record and are appended to `errors`
    when a list is given. With strict=True the first one raises
    MalformedQuantityError instead.
    """
    rows = [r.to_dict() if isinstance(r, RawRecord) else RawRecord.from_mapping(r).to_dict() for r in records]
    raw = pd.DataFrame(rows, columns=RAW_COLUMNS, dtype=object)

    deduped, meta = _clean(
        raw,
        on_error="raise" if strict else "skip",
        dedup_key=dedup_key,
        status_rules=status_rules,
        product_rules=product_rules,
    )
    if errors is not None:
        errors.extend(RecordError(**e) for e in meta["record_errors"])

    return [
        CleanRecord(
            order_id=_none_if_na(row.order_id),
            customer_name_normalized=row.customer_name_normalized,
            email=_none_if_na(row.email),
            product_name_normalized=row.product_name_normalized,
            quantity_normalized=int(row.quantity_normalized),
            price=_none_if_na(row.price),
            country_normalized=_none_if_na(row.country_normalized),
            order_status_normalized=row.order_status_normalized,
        )
        for row in deduped.itertuples(index=False)
    ]
