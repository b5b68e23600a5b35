"""Normalization implementations.

This package contains the actual order cleaning functions.
Prefer importing the stable API from `core.normalize`.
"""

from .dedupe import DEDUP_KEY_CHOICES, deduplicate_orders
from .fields import normalize_order_status, normalize_product_name, parse_quantity, proper_case, to_quantity
from .orders import ORDER_COLUMN_ALIASES, RAW_COLUMNS, normalize_order_rows
from .pipeline import OUTPUT_COLUMNS, clean_and_deduplicate, clean_orders_frame
from .rules import ORDER_STATUS_RULES, OTHER, PRODUCT_NAME_RULES, CategoryRule, categories, load_rules, match_category
from .types import (
    MALFORMED_QUANTITY,
    CleanRecord,
    MalformedQuantityError,
    QuantityParse,
    RawRecord,
    RecordError,
)

__all__ = [
    "DEDUP_KEY_CHOICES",
    "deduplicate_orders",
    "normalize_order_status",
    "normalize_product_name",
    "parse_quantity",
    "proper_case",
    "to_quantity",
    "ORDER_COLUMN_ALIASES",
    "RAW_COLUMNS",
    "normalize_order_rows",
    "OUTPUT_COLUMNS",
    "clean_and_deduplicate",
    "clean_orders_frame",
    "ORDER_STATUS_RULES",
    "OTHER",
    "PRODUCT_NAME_RULES",
    "CategoryRule",
    "categories",
    "load_rules",
    "match_category",
    "MALFORMED_QUANTITY",
    "CleanRecord",
    "MalformedQuantityError",
    "QuantityParse",
    "RawRecord",
    "RecordError",
]
