"""Stable normalization API.

The rest of the app should import cleaning functions from this module.
The underlying implementations live in `core.normalize_mod`.
"""

from core.normalize_mod import (
    DEDUP_KEY_CHOICES,
    ORDER_STATUS_RULES,
    OTHER,
    OUTPUT_COLUMNS,
    PRODUCT_NAME_RULES,
    CleanRecord,
    MalformedQuantityError,
    RawRecord,
    RecordError,
    categories,
    clean_and_deduplicate,
    clean_orders_frame,
    deduplicate_orders,
    load_rules,
    normalize_order_rows,
    normalize_order_status,
    normalize_product_name,
    parse_quantity,
    proper_case,
    to_quantity,
)

__all__ = [
    "DEDUP_KEY_CHOICES",
    "ORDER_STATUS_RULES",
    "OTHER",
    "OUTPUT_COLUMNS",
    "PRODUCT_NAME_RULES",
    "CleanRecord",
    "MalformedQuantityError",
    "RawRecord",
    "RecordError",
    "categories",
    "clean_and_deduplicate",
    "clean_orders_frame",
    "deduplicate_orders",
    "load_rules",
    "normalize_order_rows",
    "normalize_order_status",
    "normalize_product_name",
    "parse_quantity",
    "proper_case",
    "to_quantity",
]
