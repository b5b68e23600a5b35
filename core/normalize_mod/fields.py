from __future__ import annotations

import numbers
import re
from typing import Any, Optional

import numpy as np
import pandas as pd

from .rules import ORDER_STATUS_RULES, PRODUCT_NAME_RULES, Rules, match_category
from .types import MALFORMED_QUANTITY, MalformedQuantityError, QuantityParse

WORD_QUANTITIES = {"two": 2}

# quantities are stored as Int64
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INTEGER_TEXT = re.compile(r"[+-]?\d+", re.ASCII)


def normalize_order_status(value: Optional[str], rules: Rules = ORDER_STATUS_RULES) -> str:
    return match_category(value, rules)


def normalize_product_name(value: Optional[str], rules: Rules = PRODUCT_NAME_RULES) -> str:
    return match_category(value, rules)


def proper_case(value: Optional[str]) -> Optional[str]:
    """Capitalize each whitespace-delimited token and lower-case the rest."""
    if value is None or pd.isna(value):
        return None
    tokens = str(value).split()
    if not tokens:
        return None
    return " ".join(t[:1].upper() + t[1:].lower() for t in tokens)


def _int64_quantity(number: int) -> QuantityParse:
    if INT64_MIN <= number <= INT64_MAX:
        return QuantityParse(value=number)
    return QuantityParse(error=MALFORMED_QUANTITY)


def parse_quantity(value: Any) -> QuantityParse:
    """Fallible quantity parse. Never raises."""
    if value is None or pd.isna(value):
        return QuantityParse(error=MALFORMED_QUANTITY)

    # numeric columns arrive as ints or floats, not text
    if isinstance(value, (bool, np.bool_)):
        return QuantityParse(error=MALFORMED_QUANTITY)
    if isinstance(value, numbers.Integral):
        return _int64_quantity(int(value))
    if isinstance(value, numbers.Real):
        if float(value).is_integer():
            return _int64_quantity(int(value))
        return QuantityParse(error=MALFORMED_QUANTITY)

    text = str(value).strip()
    lowered = text.lower()
    for word, number in WORD_QUANTITIES.items():
        if word in lowered:
            return QuantityParse(value=number)

    # plain ASCII digits only: no "1_000", no "1,000", no non-Latin numerals
    if not _INTEGER_TEXT.fullmatch(text):
        return QuantityParse(error=MALFORMED_QUANTITY)
    return _int64_quantity(int(text))


def to_quantity(value: Any, order_id: Any = None) -> int:
    """Strict variant of `parse_quantity`: raises MalformedQuantityError."""
    parsed = parse_quantity(value)
    if not parsed.ok:
        raise MalformedQuantityError(value, order_id=order_id)
    return parsed.value
